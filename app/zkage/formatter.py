# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# formatter.py

"""
Convert a snarkjs Groth16 proof to the arguments of the Solidity verifier.

snarkjs outputs:
  - proof.json:  {pi_a, pi_b, pi_c} with every Fq2 element as [c0, c1]
  - public.json: [s0, s1, s2]

The verifier expects:
  - verifyProof(uint256[2] _pA, uint256[2][2] _pB, uint256[2] _pC,
                uint256[3] _pubSignals)
  - every Fq2 element of _pB as [c1, c0], the order of the EVM pairing
    precompile

So each inner pair of pi_b is swapped. The swap is unconditional and is the
only difference between the proof and the call arguments.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from zkage.constants import PUBLIC_SIGNAL_COUNT, UINT256_MAX
from zkage.errors import FormatError
from zkage.files import load_json, save_json
from zkage.proof import Proof, PublicSignals, public_signals_from_snarkjs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallArguments:
    p_a: tuple[int, int]
    p_b: tuple[tuple[int, int], tuple[int, int]]
    p_c: tuple[int, int]
    public_inputs: tuple[int, int, int]

    def as_args(self) -> list[Any]:
        """Positional arguments for verifyProof, as nested lists."""
        return [
            list(self.p_a),
            [list(pair) for pair in self.p_b],
            list(self.p_c),
            list(self.public_inputs),
        ]

    def to_json(self) -> dict[str, Any]:
        """Decimal-string JSON, the shape ethers and web3 accept for uint256."""
        return {
            "pA": [str(v) for v in self.p_a],
            "pB": [[str(v) for v in pair] for pair in self.p_b],
            "pC": [str(v) for v in self.p_c],
            "pubSignals": [str(v) for v in self.public_inputs],
        }

    def to_solidity_calldata(self) -> str:
        """
        The argument list as `snarkjs zkey export soliditycalldata` prints it.

        Every value is a 32-byte 0x-prefixed hex word; the result can be
        pasted into Remix or a block explorer's "read contract" form.
        """

        def word(v: int) -> str:
            return json.dumps(f"0x{v:064x}")

        def arr(values) -> str:
            return "[" + ",".join(word(v) for v in values) + "]"

        return ",".join(
            [
                arr(self.p_a),
                "[" + ",".join(arr(pair) for pair in self.p_b) + "]",
                arr(self.p_c),
                arr(self.public_inputs),
            ]
        )


def swap_g2(pairs: tuple[tuple[int, ...], ...]) -> tuple[tuple[int, ...], ...]:
    """
    Reverse the two components of every Fq2 element of a G2 point.

    [[x0, x1], [y0, y1]] becomes [[x1, x0], [y1, y0]]. Applying it twice
    gives back the input.
    """
    return tuple((pair[1], pair[0]) for pair in pairs)


def _check_uint256(field: str, values) -> None:
    for v in values:
        if not isinstance(v, int) or isinstance(v, bool):
            raise FormatError(field, f"expected an integer, got {v!r}")
        if not 0 <= v <= UINT256_MAX:
            raise FormatError(field, f"{v} does not fit in uint256")


def _check_arity(field: str, values, n: int) -> None:
    if not isinstance(values, (tuple, list)):
        raise FormatError(field, f"expected {n} elements, got {values!r}")
    if len(values) != n:
        raise FormatError(field, f"expected {n} elements, got {len(values)}")


def validate_shape(proof: Proof, public_signals: PublicSignals) -> None:
    """
    Check the exact arity of every field and that each value is a uint256.

    Args:
        proof: The affine proof.
        public_signals: The circuit's public signals.

    Raises:
        FormatError: Naming the first offending field.
    """
    _check_arity("pi_a", proof.pi_a, 2)
    _check_uint256("pi_a", proof.pi_a)

    _check_arity("pi_b", proof.pi_b, 2)
    for i, pair in enumerate(proof.pi_b):
        _check_arity(f"pi_b[{i}]", pair, 2)
        _check_uint256(f"pi_b[{i}]", pair)

    _check_arity("pi_c", proof.pi_c, 2)
    _check_uint256("pi_c", proof.pi_c)

    _check_arity("public_signals", public_signals, PUBLIC_SIGNAL_COUNT)
    _check_uint256("public_signals", public_signals)


def format_call_arguments(proof: Proof, public_signals: PublicSignals) -> CallArguments:
    """
    Turn a proof and its public signals into verifyProof arguments.

    pi_a, pi_c and the public signals are copied verbatim; pi_b goes through
    `swap_g2`. Validation happens before anything is built, so a malformed
    proof never yields partial arguments.

    Args:
        proof: The affine proof, Fq2 elements in [c0, c1] order.
        public_signals: Exactly three public signals, in circuit order.

    Returns:
        The verifier call arguments.

    Raises:
        FormatError: If the proof or signals have the wrong shape.
    """
    validate_shape(proof, public_signals)

    args = CallArguments(
        p_a=(proof.pi_a[0], proof.pi_a[1]),
        p_b=swap_g2(proof.pi_b),
        p_c=(proof.pi_c[0], proof.pi_c[1]),
        public_inputs=tuple(public_signals),
    )
    logger.info("Formatted verifyProof arguments: %s", json.dumps(args.to_json()))
    return args


def convert_proof_file(
    proof_path: str | Path,
    public_path: str | Path,
    output_path: str | Path,
) -> CallArguments:
    """
    Read snarkjs proof.json and public.json and write the call arguments JSON.

    Args:
        proof_path: Path to snarkjs proof.json
        public_path: Path to snarkjs public.json
        output_path: Path to write the verifyProof arguments

    Returns:
        The call arguments that were written.
    """
    proof = Proof.from_snarkjs(load_json(proof_path))
    public_signals = public_signals_from_snarkjs(load_json(public_path))

    args = format_call_arguments(proof, public_signals)
    save_json(output_path, args.to_json())
    return args
