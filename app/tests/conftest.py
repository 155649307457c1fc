# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/conftest.py

import asyncio

import pytest
from eth_abi import decode, encode

from zkage.bn254 import g1_point, g2_point
from zkage.chain import VERIFY_PROOF_INPUT_TYPES, VERIFY_PROOF_SELECTOR
from zkage.proof import Proof

ACCOUNT = "0x1111111111111111111111111111111111111111"

# real BN254 points: [2]G1, [3]G2, [5]G1
SAMPLE_PROOF = Proof(pi_a=g1_point(2), pi_b=g2_point(3), pi_c=g1_point(5))
SAMPLE_SIGNALS = (1, 2025, 2007)


def encoded_bool(value: bool) -> str:
    return "0x" + encode(["bool"], [value]).hex()


def decode_call(params) -> tuple:
    """Split eth_call params back into the four verifyProof arguments."""
    data = bytes.fromhex(params[0]["data"][2:])
    assert data[:4] == VERIFY_PROOF_SELECTOR
    return decode(VERIFY_PROOF_INPUT_TYPES, data[4:])


def circuit_verdict(params) -> str:
    """Stand-in verifier contract: accepts when the first public signal is 1."""
    _, _, _, public_inputs = decode_call(params)
    return encoded_bool(public_inputs[0] == 1)


class ScriptedProvider:
    """
    Wallet provider double.

    `responses` maps a JSON-RPC method to a value, an exception to raise, or
    a callable taking the params.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = {
            "eth_requestAccounts": [ACCOUNT],
            "eth_chainId": "0x7a69",
            "eth_call": encoded_bool(True),
        }
        self.responses.update(responses or {})
        self.calls: list[tuple[str, list]] = []

    async def request(self, method, params=None):
        self.calls.append((method, params))
        response = self.responses[method]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params)
        return response

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]


class CircuitProver:
    """
    Prover double modelling the age circuit's public output: the first
    signal is 1 when birthYear <= thresholdYear, followed by the restated
    public inputs.
    """

    def __init__(self):
        self.inputs = []

    async def prove(self, circuit_input):
        self.inputs.append(circuit_input)
        await asyncio.sleep(0)
        adult = int(circuit_input.birth_year <= circuit_input.threshold_year)
        return SAMPLE_PROOF, (adult, circuit_input.current_year, circuit_input.threshold_year)


class BlockingProver:
    """Prover double that holds every proof until `release` is set."""

    def __init__(self, error: Exception | None = None):
        self.release = asyncio.Event()
        self.started = asyncio.Event()
        self.error = error
        self.calls = 0

    async def prove(self, circuit_input):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return SAMPLE_PROOF, SAMPLE_SIGNALS


@pytest.fixture()
def provider() -> ScriptedProvider:
    return ScriptedProvider({"eth_call": circuit_verdict})
