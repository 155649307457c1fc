# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# config.py

"""
Process-wide settings, read once at startup.

Values come from the environment (optionally a `.env` file) and fall back to
the defaults in `zkage.constants`. Nothing here is editable at runtime; the
dataclass is frozen.

Recognised variables:
    ZKAGE_RPC_URL            JSON-RPC endpoint used by the wallet provider
    ZKAGE_ACCOUNT            account address answering eth_requestAccounts
    ZKAGE_VERIFIER_ADDRESS   deployed verifier contract
    ZKAGE_WASM               witness-calculation program
    ZKAGE_ZKEY               proving key
    ZKAGE_VKEY               verification key (local verification only)
    ZKAGE_SNARKJS            snarkjs executable
    ZKAGE_CURRENT_YEAR       the fixed "current year"
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from zkage.constants import (
    CURRENT_YEAR,
    MINIMUM_AGE,
    PROVING_KEY,
    SNARKJS,
    VERIFICATION_KEY,
    VERIFIER_ADDRESS,
    WITNESS_PROGRAM,
)


@dataclass(frozen=True)
class Settings:
    current_year: int = CURRENT_YEAR
    verifier_address: str = VERIFIER_ADDRESS
    witness_program: Path = field(default_factory=lambda: Path(WITNESS_PROGRAM))
    proving_key: Path = field(default_factory=lambda: Path(PROVING_KEY))
    verification_key: Path = field(default_factory=lambda: Path(VERIFICATION_KEY))
    snarkjs: str = SNARKJS
    rpc_url: str | None = None
    account: str | None = None

    @property
    def threshold_year(self) -> int:
        return self.current_year - MINIMUM_AGE

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional `.env` file loaded before reading the
                environment. Without one, the nearest `.env` at or above the
                working directory is used. Variables already set in the
                process win.

        Returns:
            A frozen `Settings` instance.

        Raises:
            ValueError: If ZKAGE_CURRENT_YEAR is not an integer.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))

        year = os.getenv("ZKAGE_CURRENT_YEAR")
        try:
            current_year = int(year) if year else CURRENT_YEAR
        except ValueError:
            raise ValueError(f"ZKAGE_CURRENT_YEAR must be an integer, got {year!r}")

        return cls(
            current_year=current_year,
            verifier_address=os.getenv("ZKAGE_VERIFIER_ADDRESS", VERIFIER_ADDRESS),
            witness_program=Path(os.getenv("ZKAGE_WASM", WITNESS_PROGRAM)),
            proving_key=Path(os.getenv("ZKAGE_ZKEY", PROVING_KEY)),
            verification_key=Path(os.getenv("ZKAGE_VKEY", VERIFICATION_KEY)),
            snarkjs=os.getenv("ZKAGE_SNARKJS", SNARKJS),
            rpc_url=os.getenv("ZKAGE_RPC_URL") or None,
            account=os.getenv("ZKAGE_ACCOUNT") or None,
        )
