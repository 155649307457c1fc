# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# chain.py

"""
Read-only call to the deployed Groth16 verifier contract.

The call goes through a wallet provider rather than a fixed RPC connection:
account access is requested on every verification, because the user may have
switched or revoked accounts since the last one.
"""

import logging
from typing import Any

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_typing import ChecksumAddress, HexStr
from eth_utils import function_abi_to_4byte_selector
from web3 import Web3

from zkage.constants import VERIFIER_ADDRESS
from zkage.errors import ChainCallError, NoProofError, NoWalletError
from zkage.formatter import CallArguments
from zkage.providers import WalletProvider

logger = logging.getLogger(__name__)

# Must match the deployed bytecode exactly.
VERIFIER_ABI = [
    {
        "inputs": [
            {"internalType": "uint256[2]", "name": "_pA", "type": "uint256[2]"},
            {"internalType": "uint256[2][2]", "name": "_pB", "type": "uint256[2][2]"},
            {"internalType": "uint256[2]", "name": "_pC", "type": "uint256[2]"},
            {"internalType": "uint256[3]", "name": "_pubSignals", "type": "uint256[3]"},
        ],
        "name": "verifyProof",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    }
]

_VERIFY_PROOF = VERIFIER_ABI[0]
VERIFY_PROOF_INPUT_TYPES = [i["type"] for i in _VERIFY_PROOF["inputs"]]
VERIFY_PROOF_SELECTOR = function_abi_to_4byte_selector(_VERIFY_PROOF)


def encode_verify_call(args: CallArguments) -> HexStr:
    """
    ABI-encode a verifyProof call.

    Args:
        args: Formatted call arguments.

    Returns:
        0x-prefixed calldata: selector followed by the static-array words.
    """
    body = encode(VERIFY_PROOF_INPUT_TYPES, args.as_args())
    return HexStr("0x" + (VERIFY_PROOF_SELECTOR + body).hex())


def decode_verify_result(result: Any) -> bool:
    """
    Decode the return data of verifyProof.

    Raises:
        ChainCallError: If the result is not an ABI-encoded bool.
    """
    if not isinstance(result, str):
        raise ChainCallError(f"malformed verifyProof result: {result!r}")
    raw = result[2:] if result.startswith("0x") else result
    try:
        (verdict,) = decode(["bool"], bytes.fromhex(raw))
    except (ValueError, DecodingError) as err:
        raise ChainCallError(f"malformed verifyProof result: {result!r}") from err
    return bool(verdict)


class ChainVerifier:
    """
    Verifies formatted proofs against the verifier contract.

    Attributes:
        provider: The wallet provider, or None when no wallet is present.
        address: Checksummed verifier contract address.
    """

    def __init__(
        self,
        provider: WalletProvider | None,
        address: str = VERIFIER_ADDRESS,
    ):
        if not Web3.is_address(address):
            raise ValueError(f"invalid verifier address: {address!r}")
        self.provider = provider
        self.address: ChecksumAddress = Web3.to_checksum_address(address)

    async def _request(self, method: str, params: list[Any]) -> Any:
        try:
            return await self.provider.request(method, params)
        except ChainCallError:
            raise
        except Exception as err:
            raise ChainCallError(f"{method} failed: {err}") from err

    async def verify(self, args: CallArguments | None) -> bool:
        """
        Call verifyProof and return the contract's verdict.

        Args:
            args: Formatted call arguments, None if no proof was generated.

        Returns:
            True if the verifier accepts the proof.

        Raises:
            NoWalletError: If there is no provider.
            NoProofError: If `args` is None.
            ChainCallError: On provider, network or revert failures, when no
                account is authorized, or when the result is malformed.
        """
        if self.provider is None:
            raise NoWalletError()
        if args is None:
            raise NoProofError()

        accounts = await self._request("eth_requestAccounts", [])
        if not isinstance(accounts, list):
            raise ChainCallError(f"malformed eth_requestAccounts result: {accounts!r}")
        if not accounts:
            raise ChainCallError("wallet did not authorize any account")
        account = accounts[0]

        chain_id = await self._request("eth_chainId", [])
        logger.info("Calling verifier %s on chain %s as %s", self.address, chain_id, account)

        data = encode_verify_call(args)
        logger.info("Encoded call data: %s", data)

        result = await self._request(
            "eth_call",
            [{"from": account, "to": self.address, "data": data}, "latest"],
        )
        verdict = decode_verify_result(result)
        logger.info("verifyProof result: %s", verdict)
        return verdict
