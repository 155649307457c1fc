# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/test_providers.py

import pytest
from web3 import Web3

from zkage.errors import ChainCallError
from zkage.providers import Web3WalletProvider


class FakeRPC:
    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    async def make_request(self, method, params):
        self.requests.append((method, params))
        return self.responses[method]


def make_provider(responses, account=None) -> tuple[Web3WalletProvider, FakeRPC]:
    provider = Web3WalletProvider("http://127.0.0.1:8545", account)
    rpc = FakeRPC(responses)
    provider.w3.provider.make_request = rpc.make_request
    return provider, rpc


@pytest.mark.asyncio
async def test_configured_account_answers_request_accounts():
    provider, rpc = make_provider({}, account="0xabcdefabcdefabcdefabcdefabcdefabcdefabcd")
    accounts = await provider.request("eth_requestAccounts", [])
    assert accounts == [Web3.to_checksum_address("0xabcdefabcdefabcdefabcdefabcdefabcdefabcd")]
    assert rpc.requests == []


@pytest.mark.asyncio
async def test_node_accounts_without_configured_account():
    provider, rpc = make_provider({"eth_accounts": {"jsonrpc": "2.0", "id": 1, "result": []}})
    assert await provider.request("eth_requestAccounts") == []
    assert rpc.requests == [("eth_accounts", [])]


@pytest.mark.asyncio
async def test_forwards_calls():
    call = {"to": "0x54e6329b3865359c374f3af7090f8292f3e63e67", "data": "0x"}
    provider, rpc = make_provider({"eth_call": {"jsonrpc": "2.0", "id": 1, "result": "0x01"}})
    assert await provider.request("eth_call", [call, "latest"]) == "0x01"
    assert rpc.requests == [("eth_call", [call, "latest"])]


@pytest.mark.asyncio
async def test_rpc_error_becomes_chain_call_error():
    error = {"code": 3, "message": "execution reverted"}
    provider, _ = make_provider({"eth_call": {"jsonrpc": "2.0", "id": 1, "error": error}})
    with pytest.raises(ChainCallError, match="execution reverted"):
        await provider.request("eth_call", [{}, "latest"])


if __name__ == "__main__":
    pytest.main()
