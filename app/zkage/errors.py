# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# errors.py

"""
Exceptions raised along the prove -> format -> verify flow.

Every failure a user can trigger is one of these; the session controller
catches them at the action boundary and turns them into a status line.
"""


class AgeProofError(Exception):
    """Base class for every error raised by zkage."""


class ValidationError(AgeProofError, ValueError):
    """
    Raw birth-year text could not become a circuit input.

    Attributes:
        reason: Short machine-friendly cause, one of "not a number",
            "future year" or "empty".
    """

    def __init__(self, reason: str, detail: str | None = None):
        self.reason = reason
        super().__init__(detail or reason)


class ProofGenerationError(AgeProofError):
    """Witness calculation or Groth16 proving failed."""


class FormatError(AgeProofError, ValueError):
    """
    A proof or its public signals does not have the shape the verifier needs.

    This points at a prover contract violation rather than a user mistake.

    Attributes:
        field: Name of the offending field, e.g. "pi_b[1]".
    """

    def __init__(self, field: str, detail: str):
        self.field = field
        super().__init__(f"invalid {field}: {detail}")


class NoWalletError(AgeProofError):
    """No wallet provider is connected."""

    def __init__(self, message: str = "no wallet provider is connected"):
        super().__init__(message)


class NoProofError(AgeProofError):
    """Verification was requested before a proof was generated."""

    def __init__(self, message: str = "proof or public signals not generated"):
        super().__init__(message)


class ChainCallError(AgeProofError):
    """The verifier call failed: transport, JSON-RPC error, revert or bad result."""
