# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

"""Zero-knowledge proof of age with on-chain Groth16 verification."""

__version__ = "0.1.0"
