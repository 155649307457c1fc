# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# local_verify.py

"""
Off-chain Groth16 verification against a snarkjs verification key.

This performs the same pairing check the verifier contract does:

    e(A, B) == e(alpha, beta) * e(vk_x, gamma) * e(C, delta)
    vk_x = IC[0] + sum(s_i * IC[i+1])

It is slow in pure Python but needs no wallet or network, which makes it a
useful sanity check before going on chain.
"""

from pathlib import Path
from typing import Any

from py_ecc.optimized_bn128 import add, final_exponentiate, multiply, pairing

from zkage.bn254 import check_proof_points, curve_order, g1_from_coords, g2_from_coords
from zkage.errors import FormatError
from zkage.files import load_json
from zkage.formatter import validate_shape
from zkage.proof import Proof, PublicSignals, to_int


def _g1(field: str, data: Any) -> tuple:
    coords = [to_int(field, v) for v in data]
    return g1_from_coords(coords[:2])


def _g2(field: str, data: Any) -> tuple:
    pairs = [[to_int(field, v) for v in pair] for pair in data]
    return g2_from_coords(pairs[:2])


def load_verification_key(vk: dict[str, Any] | str | Path) -> dict[str, Any]:
    """
    Lift a snarkjs verification_key.json into py_ecc points.

    Args:
        vk: Parsed verification_key.json, or a path to it.

    Returns:
        Dict with keys alpha, beta, gamma, delta, IC and n_public.

    Raises:
        FormatError: If the key is not a groth16 key or IC does not match
            nPublic.
    """
    if not isinstance(vk, dict):
        vk = load_json(vk)

    if vk.get("protocol", "groth16") != "groth16":
        raise FormatError("verification_key", f"unsupported protocol {vk.get('protocol')!r}")

    try:
        key = {
            "alpha": _g1("vk_alpha_1", vk["vk_alpha_1"]),
            "beta": _g2("vk_beta_2", vk["vk_beta_2"]),
            "gamma": _g2("vk_gamma_2", vk["vk_gamma_2"]),
            "delta": _g2("vk_delta_2", vk["vk_delta_2"]),
            "IC": [_g1("IC", p) for p in vk["IC"]],
            "n_public": int(vk["nPublic"]),
        }
    except KeyError as err:
        raise FormatError("verification_key", f"missing {err}") from err

    if len(key["IC"]) != key["n_public"] + 1:
        raise FormatError(
            "verification_key",
            f"IC length mismatch: len(IC)={len(key['IC'])} vs nPublic+1={key['n_public'] + 1}",
        )
    return key


def verify_groth16(
    vk: dict[str, Any] | str | Path,
    proof: Proof,
    public_signals: PublicSignals,
) -> bool:
    """
    Verify a Groth16 proof with a pairing check.

    Args:
        vk: snarkjs verification key (parsed or path).
        proof: The affine proof, Fq2 elements in [c0, c1] order.
        public_signals: The public signals, in circuit order.

    Returns:
        True if the proof is valid for these public signals.

    Raises:
        FormatError: If the proof is malformed, a point is off the curve, or
            the signal count does not match the key.
    """
    key = load_verification_key(vk)
    validate_shape(proof, public_signals)
    check_proof_points(proof)

    if len(public_signals) != key["n_public"]:
        raise FormatError(
            "public_signals",
            f"count mismatch: {len(public_signals)} vs nPublic={key['n_public']}",
        )
    for s in public_signals:
        if s >= curve_order:
            raise FormatError("public_signals", f"{s} is not a scalar field element")

    vk_x = key["IC"][0]
    for i, s in enumerate(public_signals):
        vk_x = add(vk_x, multiply(key["IC"][i + 1], s))

    A = g1_from_coords(proof.pi_a)
    B = g2_from_coords(proof.pi_b)
    C = g1_from_coords(proof.pi_c)

    left = pairing(B, A, final_exponentiate=False)
    right = pairing(key["beta"], key["alpha"], final_exponentiate=False)
    right *= pairing(key["gamma"], vk_x, final_exponentiate=False)
    right *= pairing(key["delta"], C, final_exponentiate=False)

    return final_exponentiate(left) == final_exponentiate(right)
