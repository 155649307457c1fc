# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# providers.py

"""
Wallet providers.

A provider is anything with an EIP-1193 style `request(method, params)`
coroutine, the same capability set a browser wallet injects: request account
access, report the network, and forward read-only contract calls. The chain
verifier only talks to this interface, so tests can hand it a scripted double.
"""

import logging
from typing import Any, Protocol

from eth_typing import ChecksumAddress
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from zkage.errors import ChainCallError

logger = logging.getLogger(__name__)


class WalletProvider(Protocol):
    async def request(self, method: str, params: list[Any] | None = None) -> Any: ...


class Web3WalletProvider:
    """
    Provider backed by a JSON-RPC node through web3.py.

    A node has no notion of "asking the user" for accounts, so
    eth_requestAccounts is answered with the configured account, or with
    whatever the node reports through eth_accounts.

    Attributes:
        w3: The underlying `AsyncWeb3` instance.
        account: Fixed account used for eth_requestAccounts, if any.
    """

    def __init__(self, rpc_url: str, account: str | None = None):
        self.w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self.account: ChecksumAddress | None = (
            Web3.to_checksum_address(account) if account else None
        )

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        if method == "eth_requestAccounts":
            if self.account is not None:
                return [self.account]
            method = "eth_accounts"

        response = await self.w3.provider.make_request(method, params or [])
        error = response.get("error")
        if error:
            message = error.get("message", error) if isinstance(error, dict) else error
            raise ChainCallError(f"{method} failed: {message}")
        return response.get("result")
