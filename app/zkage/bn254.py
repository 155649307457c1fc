# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# bn254.py

"""
BN254 (snarkjs "bn128") point helpers over py_ecc.

Coordinates travel as plain ints. An Fq2 element is the pair [c0, c1] with
value c0 + c1*u, which is the order py_ecc and snarkjs both use.
"""

from py_ecc.fields import optimized_bn128_FQ as FQ
from py_ecc.fields import optimized_bn128_FQ2 as FQ2
from py_ecc.optimized_bn128 import (
    G1,
    G2,
    Z1,
    Z2,
    b,
    b2,
    curve_order,
    field_modulus,
    is_inf,
    is_on_curve,
    multiply,
    normalize,
)

from zkage.errors import FormatError
from zkage.proof import Proof


def g1_from_coords(coords: tuple[int, ...] | list[int]) -> tuple:
    """
    Lift affine G1 coordinates to a py_ecc point.

    The pair (0, 0) is the point at infinity, as in the EVM precompiles.

    Args:
        coords: (x, y) as ints.

    Returns:
        tuple: The optimized (Jacobian) point.
    """
    x, y = coords
    if x == 0 and y == 0:
        return Z1
    return (FQ(x), FQ(y), FQ.one())


def g2_from_coords(pairs: tuple[tuple[int, ...], ...] | list[list[int]]) -> tuple:
    """
    Lift affine G2 coordinates, each an Fq2 pair in [c0, c1] order.

    Args:
        pairs: ((x0, x1), (y0, y1)) as ints.

    Returns:
        tuple: The optimized (Jacobian) point.
    """
    (x0, x1), (y0, y1) = pairs
    if x0 == x1 == y0 == y1 == 0:
        return Z2
    return (FQ2([x0, x1]), FQ2([y0, y1]), FQ2.one())


def g1_coords(point: tuple) -> tuple[int, int]:
    """Affine (x, y) ints of a G1 point."""
    if is_inf(point):
        return (0, 0)
    x, y = normalize(point)
    return (int(x), int(y))


def g2_coords(point: tuple) -> tuple[tuple[int, int], tuple[int, int]]:
    """Affine ((x0, x1), (y0, y1)) ints of a G2 point, [c0, c1] order."""
    if is_inf(point):
        return ((0, 0), (0, 0))
    x, y = normalize(point)
    return (
        (int(x.coeffs[0]), int(x.coeffs[1])),
        (int(y.coeffs[0]), int(y.coeffs[1])),
    )


def g1_point(scalar: int) -> tuple[int, int]:
    """Affine coordinates of [scalar]G1."""
    return g1_coords(multiply(G1, scalar))


def g2_point(scalar: int) -> tuple[tuple[int, int], tuple[int, int]]:
    """Affine coordinates of [scalar]G2."""
    return g2_coords(multiply(G2, scalar))


def check_field_elements(field: str, values) -> None:
    """
    Ensure every coordinate is a reduced base-field element.

    Raises:
        FormatError: If a value is negative or not below the field modulus.
    """
    for v in values:
        if not 0 <= v < field_modulus:
            raise FormatError(field, f"{v} is not a field element")


def check_proof_points(proof: Proof) -> None:
    """
    Check that the three proof points lie on the curve.

    G2 subgroup membership is left to the pairing check itself.

    Args:
        proof: A proof whose arity has already been validated.

    Raises:
        FormatError: Naming the first point that is off the curve.
    """
    check_field_elements("pi_a", proof.pi_a)
    check_field_elements("pi_b", [v for pair in proof.pi_b for v in pair])
    check_field_elements("pi_c", proof.pi_c)

    if not is_on_curve(g1_from_coords(proof.pi_a), b):
        raise FormatError("pi_a", "point is not on the curve")
    if not is_on_curve(g2_from_coords(proof.pi_b), b2):
        raise FormatError("pi_b", "point is not on the twist curve")
    if not is_on_curve(g1_from_coords(proof.pi_c), b):
        raise FormatError("pi_c", "point is not on the curve")


# curve constants
curve_order = curve_order
field_modulus = field_modulus
