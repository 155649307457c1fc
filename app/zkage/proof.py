# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# proof.py

"""
Groth16 proof and public signals as produced by snarkjs.

snarkjs writes:
  - proof.json:  {pi_a: [x, y, "1"], pi_b: [[x0, x1], [y0, y1], ["1", "0"]],
                  pi_c: [x, y, "1"], protocol: "groth16", curve: "bn128"}
  - public.json: ["s0", "s1", "s2"]

Points carry a trailing projective z coordinate which is always one for
proofs snarkjs emits. `Proof` keeps the affine coordinates only, as ints, and
leaves every Fq2 pair in the prover's own [c0, c1] order.
"""

from dataclasses import dataclass
from typing import Any

from zkage.errors import FormatError

PublicSignals = tuple[int, ...]

_G1_Z = (1,)
_G2_Z = ((1, 0),)


@dataclass(frozen=True)
class Proof:
    pi_a: tuple[int, ...]
    pi_b: tuple[tuple[int, ...], ...]
    pi_c: tuple[int, ...]

    @classmethod
    def from_snarkjs(cls, data: dict[str, Any]) -> "Proof":
        """
        Build a proof from snarkjs proof.json content.

        A bundle of the form {"proof": {...}, "publicSignals": [...]} is
        accepted too. Arity is not checked here; that is the formatter's job.

        Args:
            data: Parsed proof.json.

        Returns:
            The affine proof.

        Raises:
            FormatError: If a point is missing, is not a list, holds a value
                that is not an integer, or has a projective z other than one.
        """
        data = data.get("proof", data)
        return cls(
            pi_a=_affine("pi_a", _ints("pi_a", data.get("pi_a")), _G1_Z),
            pi_b=_affine(
                "pi_b",
                tuple(_ints(f"pi_b[{i}]", p) for i, p in enumerate(_list("pi_b", data.get("pi_b")))),
                _G2_Z,
            ),
            pi_c=_affine("pi_c", _ints("pi_c", data.get("pi_c")), _G1_Z),
        )

    def to_snarkjs(self) -> dict[str, Any]:
        """Inverse of `from_snarkjs`: projective coordinates as decimal strings."""
        return {
            "pi_a": [str(v) for v in self.pi_a] + ["1"],
            "pi_b": [[str(v) for v in pair] for pair in self.pi_b] + [["1", "0"]],
            "pi_c": [str(v) for v in self.pi_c] + ["1"],
            "protocol": "groth16",
            "curve": "bn128",
        }


def public_signals_from_snarkjs(data: Any) -> PublicSignals:
    """
    Parse public.json content, keeping order exactly.

    Raises:
        FormatError: If `data` is not a list of integers.
    """
    if isinstance(data, dict):
        data = data.get("publicSignals")
    return _ints("public_signals", data)


def public_signals_to_snarkjs(signals: PublicSignals) -> list[str]:
    return [str(s) for s in signals]


def to_int(field: str, value: Any) -> int:
    """
    Coerce a snarkjs number (decimal string, 0x-hex string or int) to int.

    Raises:
        FormatError: If the value is not an integer.
    """
    if isinstance(value, bool):
        raise FormatError(field, f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        try:
            if s.lower().startswith("0x"):
                return int(s, 16)
            return int(s, 10)
        except ValueError:
            pass
    raise FormatError(field, f"expected an integer, got {value!r}")


def _list(field: str, value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise FormatError(field, f"expected a list, got {value!r}")
    return list(value)


def _ints(field: str, value: Any) -> tuple[int, ...]:
    return tuple(to_int(field, v) for v in _list(field, value))


def _affine(field: str, coords: tuple, z: tuple) -> tuple:
    # snarkjs appends the projective z; anything else is left for the formatter
    if len(coords) == 3:
        if coords[2:] != z:
            raise FormatError(field, f"point is not normalised, z={coords[2]!r}")
        return coords[:2]
    return coords
