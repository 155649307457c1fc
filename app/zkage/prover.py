# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# prover.py

"""
Groth16 proving through the snarkjs command line.

Proving is two steps over the compiled circuit artifacts:

    snarkjs wtns calculate circuit.wasm input.json witness.wtns
    snarkjs groth16 prove circuit_final.zkey witness.wtns proof.json public.json

Both are CPU-bound and take seconds, so they run in a worker thread and the
caller just awaits the result.
"""

import asyncio
import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from zkage.constants import SNARKJS
from zkage.errors import ProofGenerationError
from zkage.files import load_proof, save_json
from zkage.formatter import validate_shape
from zkage.inputs import CircuitInput
from zkage.proof import Proof, PublicSignals

logger = logging.getLogger(__name__)


class Prover(Protocol):
    async def prove(self, circuit_input: CircuitInput) -> tuple[Proof, PublicSignals]: ...


def _run(cmd: list[str]) -> str:
    logger.debug("Running %s", " ".join(cmd))
    try:
        output = subprocess.run(cmd, capture_output=True, text=True, check=True)
    except OSError as err:
        raise ProofGenerationError(f"cannot run {cmd[0]}: {err}") from err
    except UnicodeDecodeError as err:
        raise ProofGenerationError(f"{cmd[0]} produced undecodable output: {err}") from err
    except subprocess.CalledProcessError as err:
        detail = (err.stderr or err.stdout or "").strip()
        raise ProofGenerationError(
            f"{' '.join(cmd[1:3])} failed with exit code {err.returncode}: {detail}"
        ) from err
    return output.stdout.strip()


def calculate_witness(
    circuit_input: CircuitInput,
    witness_program: str | Path,
    work_dir: str | Path,
    snarkjs: str = SNARKJS,
) -> Path:
    """
    Compute the full witness for `circuit_input`.

    A witness can only be computed when every circuit constraint holds, so
    an input the circuit rejects surfaces here as a failed command.

    Args:
        circuit_input: The circuit input record.
        witness_program: Path to the compiled circuit.wasm.
        work_dir: Directory receiving input.json and witness.wtns.
        snarkjs: The snarkjs executable.

    Returns:
        Path to the witness file.

    Raises:
        ProofGenerationError: If the witness cannot be calculated.
    """
    work_dir = Path(work_dir)
    input_path = work_dir / "input.json"
    witness_path = work_dir / "witness.wtns"
    save_json(input_path, circuit_input.to_json())

    _run([snarkjs, "wtns", "calculate", str(witness_program), str(input_path), str(witness_path)])
    return witness_path


def groth16_prove(
    witness_path: str | Path,
    proving_key: str | Path,
    work_dir: str | Path,
    snarkjs: str = SNARKJS,
) -> tuple[Proof, PublicSignals]:
    """
    Produce a Groth16 proof from a witness.

    Args:
        witness_path: The witness.wtns from `calculate_witness`.
        proving_key: Path to circuit_final.zkey.
        work_dir: Directory receiving proof.json and public.json.
        snarkjs: The snarkjs executable.

    Returns:
        The proof and its public signals.

    Raises:
        ProofGenerationError: If proving fails or its output is malformed.
    """
    work_dir = Path(work_dir)
    _run(
        [
            snarkjs,
            "groth16",
            "prove",
            str(proving_key),
            str(witness_path),
            str(work_dir / "proof.json"),
            str(work_dir / "public.json"),
        ]
    )

    try:
        proof, public_signals = load_proof(work_dir)
        validate_shape(proof, public_signals)
    except (OSError, ValueError, TypeError, AttributeError) as err:
        raise ProofGenerationError(f"prover output is malformed: {err}") from err
    return proof, public_signals


class SnarkjsProver:
    """
    Prover over a witness program and proving key on disk.

    Attributes:
        witness_program: Path to circuit.wasm.
        proving_key: Path to circuit_final.zkey.
        snarkjs: The snarkjs executable.
    """

    def __init__(
        self,
        witness_program: str | Path,
        proving_key: str | Path,
        snarkjs: str = SNARKJS,
    ):
        self.witness_program = Path(witness_program)
        self.proving_key = Path(proving_key)
        self.snarkjs = snarkjs

    def _check_artifacts(self) -> None:
        for name, path in (
            ("witness program", self.witness_program),
            ("proving key", self.proving_key),
        ):
            if not path.is_file():
                raise ProofGenerationError(f"cannot load {name}: {path} not found")

    def prove_sync(self, circuit_input: CircuitInput) -> tuple[Proof, PublicSignals]:
        """Blocking form of `prove`."""
        self._check_artifacts()
        try:
            with tempfile.TemporaryDirectory(prefix="zkage-") as work_dir:
                witness = calculate_witness(
                    circuit_input, self.witness_program, work_dir, self.snarkjs
                )
                proof, public_signals = groth16_prove(
                    witness, self.proving_key, work_dir, self.snarkjs
                )
        except OSError as err:
            raise ProofGenerationError(f"cannot use work directory: {err}") from err

        logger.info("Raw proof: %s", json.dumps(proof.to_snarkjs()))
        logger.info("Raw public signals: %s", json.dumps([str(s) for s in public_signals]))
        return proof, public_signals

    async def prove(self, circuit_input: CircuitInput) -> tuple[Proof, PublicSignals]:
        """
        Calculate the witness and prove, without blocking the event loop.

        Args:
            circuit_input: A validated circuit input.

        Returns:
            The proof and exactly three public signals, in circuit order.

        Raises:
            ProofGenerationError: If an artifact is missing, the circuit
                rejects the input, or snarkjs fails.
        """
        return await asyncio.to_thread(self.prove_sync, circuit_input)
