# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# age threshold
CURRENT_YEAR = 2025
MINIMUM_AGE = 18
THRESHOLD_YEAR = CURRENT_YEAR - MINIMUM_AGE

# circuit layout
PUBLIC_SIGNAL_COUNT = 3

# deployed verifier
VERIFIER_ADDRESS = "0x54e6329b3865359c374f3af7090f8292f3e63e67"
VERIFY_PROOF_SIGNATURE = "verifyProof(uint256[2],uint256[2][2],uint256[2],uint256[3])"

# circuit artifacts
WITNESS_PROGRAM = "public/circuit.wasm"
PROVING_KEY = "public/circuit_final.zkey"
VERIFICATION_KEY = "public/verification_key.json"
SNARKJS = "snarkjs"

# largest value a uint256 argument can hold
UINT256_MAX = 2**256 - 1
