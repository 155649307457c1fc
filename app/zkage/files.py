# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import json

from pathlib import Path
from typing import Any

from zkage.proof import (
    Proof,
    PublicSignals,
    public_signals_from_snarkjs,
    public_signals_to_snarkjs,
)


def save_json(path: str | Path, data: Any) -> None:
    """
    Serialize data as pretty-printed JSON and write it to a file.

    Args:
        path: Destination file path (string or `Path`).
        data: Any JSON-serializable Python object.

    Side effects:
        - Creates `path.parent` directories if they do not exist.
        - Overwrites the file if it already exists.

    Raises:
        TypeError: If `data` contains non-JSON-serializable objects.
        OSError: If the file cannot be created or written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def load_json(path: str | Path) -> Any:
    """
    Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def save_proof(
    out_dir: str | Path,
    proof: Proof,
    public_signals: PublicSignals,
    proof_filename: str = "proof.json",
    public_filename: str = "public.json",
) -> tuple[Path, Path]:
    """
    Write a proof and its public signals in the snarkjs file layout.

    The files can be checked with `snarkjs groth16 verify` as they are.

    Returns:
        The (proof, public) paths written.
    """
    out_dir = Path(out_dir)
    proof_path = out_dir / proof_filename
    public_path = out_dir / public_filename
    save_json(proof_path, proof.to_snarkjs())
    save_json(public_path, public_signals_to_snarkjs(public_signals))
    return proof_path, public_path


def load_proof(
    out_dir: str | Path,
    proof_filename: str = "proof.json",
    public_filename: str = "public.json",
) -> tuple[Proof, PublicSignals]:
    """
    Read a snarkjs proof.json / public.json pair.

    Raises:
        FileNotFoundError: If either file is missing.
        FormatError: If the content is not a snarkjs proof.
    """
    out_dir = Path(out_dir)
    proof = Proof.from_snarkjs(load_json(out_dir / proof_filename))
    public_signals = public_signals_from_snarkjs(load_json(out_dir / public_filename))
    return proof, public_signals
