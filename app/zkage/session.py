# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# session.py

"""
The single-session state machine behind the generate and verify actions.

    IDLE -> GENERATING -> GENERATED -> VERIFYING -> VERIFIED | INVALID
    GENERATING -> ERRORED
    VERIFYING -> ERRORED

Generation can be restarted from any settled state. While an action is in
flight the session refuses to start another one; that is the only guard, as
there is exactly one session on one event loop.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from zkage.chain import ChainVerifier
from zkage.constants import CURRENT_YEAR
from zkage.errors import NoProofError
from zkage.formatter import format_call_arguments
from zkage.inputs import parse_birth_year
from zkage.proof import Proof, PublicSignals
from zkage.prover import Prover

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATED = "generated"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    INVALID = "invalid"
    ERRORED = "errored"


BUSY = (State.GENERATING, State.VERIFYING)

STATUS_GENERATING = "Generating proof..."
STATUS_GENERATED = "Proof generated!"
STATUS_VERIFYING = "Verifying proof..."
STATUS_VERIFIED = "Proof verified! You are 18 or older."
STATUS_INVALID = "Proof invalid"


@dataclass
class Session:
    birth_year: str = ""
    proof: Proof | None = None
    public_signals: PublicSignals | None = None
    state: State = State.IDLE
    status: str = ""


class StatusController:
    """
    Owns the session and runs the generate and verify actions.

    Any error raised by the prover, formatter or chain verifier is caught
    here and shown in `status`; an action always leaves the busy states.

    Attributes:
        prover: Produces proofs from circuit inputs.
        verifier: Calls the on-chain verifier.
        current_year: The configured "current year".
        session: The session record.
    """

    def __init__(
        self,
        prover: Prover,
        verifier: ChainVerifier,
        current_year: int = CURRENT_YEAR,
    ):
        self.prover = prover
        self.verifier = verifier
        self.current_year = current_year
        self.session = Session()

    @property
    def state(self) -> State:
        return self.session.state

    @property
    def status(self) -> str:
        return self.session.status

    @property
    def busy(self) -> bool:
        return self.session.state in BUSY

    @property
    def can_verify(self) -> bool:
        """Whether the verify action is enabled."""
        return (
            not self.busy
            and self.session.proof is not None
            and self.session.public_signals is not None
        )

    def _enter(self, state: State, status: str) -> None:
        logger.debug("%s -> %s", self.session.state.value, state.value)
        self.session.state = state
        self.session.status = status

    async def generate(self, birth_year: str) -> str:
        """
        Validate the birth year and generate a proof for it.

        A previously generated proof is replaced only once the new one
        exists.

        Args:
            birth_year: Raw birth-year text.

        Returns:
            The status after the action.
        """
        if self.busy:
            logger.warning("Ignoring generate request while %s", self.session.state.value)
            return self.session.status

        self.session.birth_year = birth_year
        self._enter(State.GENERATING, STATUS_GENERATING)
        try:
            circuit_input = parse_birth_year(birth_year, self.current_year)
            proof, public_signals = await self.prover.prove(circuit_input)
        except Exception as err:
            logger.exception("Proof generation error")
            self._enter(State.ERRORED, f"Error generating proof: {err}")
            return self.session.status

        self.session.proof = proof
        self.session.public_signals = public_signals
        self._enter(State.GENERATED, STATUS_GENERATED)
        return self.session.status

    async def verify(self) -> str:
        """
        Verify the current proof on chain.

        Returns:
            The status after the action.

        Raises:
            NoProofError: If no proof has been generated yet. The session is
                left exactly as it was.
        """
        if self.busy:
            logger.warning("Ignoring verify request while %s", self.session.state.value)
            return self.session.status
        if self.session.proof is None or self.session.public_signals is None:
            raise NoProofError()

        self._enter(State.VERIFYING, STATUS_VERIFYING)
        try:
            args = format_call_arguments(self.session.proof, self.session.public_signals)
            verdict = await self.verifier.verify(args)
        except Exception as err:
            logger.exception("Verification error")
            self._enter(State.ERRORED, f"Error verifying proof: {err}")
            return self.session.status

        if verdict:
            self._enter(State.VERIFIED, STATUS_VERIFIED)
        else:
            self._enter(State.INVALID, STATUS_INVALID)
        return self.session.status
