# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# cli.py

"""
Command line front end.

    zkage prove 2000            # writes out/proof.json and out/public.json
    zkage calldata              # prints the verifyProof arguments
    zkage verify                # asks the verifier contract
    zkage verify-local          # pairing check against verification_key.json
    zkage run 2000              # generate then verify, printing each status
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from zkage.chain import ChainVerifier
from zkage.config import Settings
from zkage.errors import AgeProofError
from zkage.files import load_proof, save_proof
from zkage.formatter import format_call_arguments
from zkage.inputs import parse_birth_year
from zkage.local_verify import verify_groth16
from zkage.providers import Web3WalletProvider
from zkage.prover import SnarkjsProver
from zkage.session import StatusController

logger = logging.getLogger(__name__)


def _prover(settings: Settings) -> SnarkjsProver:
    return SnarkjsProver(settings.witness_program, settings.proving_key, settings.snarkjs)


def _verifier(settings: Settings) -> ChainVerifier:
    provider = Web3WalletProvider(settings.rpc_url, settings.account) if settings.rpc_url else None
    return ChainVerifier(provider, settings.verifier_address)


def cmd_prove(args: argparse.Namespace, settings: Settings) -> int:
    circuit_input = parse_birth_year(args.birth_year, settings.current_year)
    proof, public_signals = _prover(settings).prove_sync(circuit_input)
    proof_path, public_path = save_proof(args.out, proof, public_signals)
    print(f"proof:  {proof_path}")
    print(f"public: {public_path}")
    return 0


def cmd_calldata(args: argparse.Namespace, settings: Settings) -> int:
    call_args = format_call_arguments(*load_proof(args.out))
    if args.json:
        print(json.dumps(call_args.to_json(), indent=2))
    else:
        print(call_args.to_solidity_calldata())
    return 0


def cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    call_args = format_call_arguments(*load_proof(args.out))
    verdict = asyncio.run(_verifier(settings).verify(call_args))
    print("Proof verified! You are 18 or older." if verdict else "Proof invalid")
    return 0 if verdict else 2


def cmd_verify_local(args: argparse.Namespace, settings: Settings) -> int:
    vkey = args.vkey or settings.verification_key
    verdict = verify_groth16(vkey, *load_proof(args.out))
    print("OK" if verdict else "INVALID")
    return 0 if verdict else 2


async def _run_flow(controller: StatusController, birth_year: str) -> int:
    print(await controller.generate(birth_year))
    if not controller.can_verify:
        return 1
    status = await controller.verify()
    print(status)
    return {"verified": 0, "invalid": 2}.get(controller.state.value, 1)


def cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    controller = StatusController(_prover(settings), _verifier(settings), settings.current_year)
    return asyncio.run(_run_flow(controller, args.birth_year))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zkage", description="Prove you are over 18 without revealing your birth year."
    )
    parser.add_argument("--env-file", help="load settings from this .env file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("prove", help="generate a proof for a birth year")
    p.add_argument("birth_year")
    p.set_defaults(func=cmd_prove)

    p = sub.add_parser("calldata", help="print verifyProof arguments for a proof")
    p.add_argument("--json", action="store_true", help="print decimal JSON instead")
    p.set_defaults(func=cmd_calldata)

    p = sub.add_parser("verify", help="verify a proof with the on-chain verifier")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("verify-local", help="verify a proof off chain")
    p.add_argument("--vkey", type=Path, help="snarkjs verification_key.json")
    p.set_defaults(func=cmd_verify_local)

    p = sub.add_parser("run", help="generate and verify in one go")
    p.add_argument("birth_year")
    p.set_defaults(func=cmd_run)

    for name in ("prove", "calldata", "verify", "verify-local"):
        sub.choices[name].add_argument(
            "--out", type=Path, default=Path("out"), help="proof directory (default: out)"
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env(args.env_file)
        return args.func(args, settings)
    except (AgeProofError, ValueError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
