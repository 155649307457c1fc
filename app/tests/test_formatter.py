# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/test_formatter.py

import json

import pytest

from zkage.errors import FormatError
from zkage.formatter import (
    CallArguments,
    convert_proof_file,
    format_call_arguments,
    swap_g2,
    validate_shape,
)
from zkage.proof import Proof

PROOF = Proof(pi_a=(1, 2), pi_b=((3, 4), (5, 6)), pi_c=(7, 8))
SIGNALS = (1, 2025, 2007)


class TestFormatCallArguments:
    def test_swaps_each_pi_b_pair(self):
        args = format_call_arguments(PROOF, SIGNALS)
        assert args.p_b == ((4, 3), (6, 5))

    def test_other_fields_pass_through(self):
        args = format_call_arguments(PROOF, SIGNALS)
        assert args.p_a == (1, 2)
        assert args.p_c == (7, 8)
        assert args.public_inputs == (1, 2025, 2007)

    def test_signal_order_is_kept(self):
        args = format_call_arguments(PROOF, (2007, 1, 2025))
        assert args.public_inputs == (2007, 1, 2025)

    def test_swap_does_not_depend_on_values(self):
        proof = Proof(pi_a=(1, 2), pi_b=((9, 9), (0, 1)), pi_c=(7, 8))
        assert format_call_arguments(proof, SIGNALS).p_b == ((9, 9), (1, 0))

    def test_as_args_matches_abi_shapes(self):
        args = format_call_arguments(PROOF, SIGNALS)
        assert args.as_args() == [[1, 2], [[4, 3], [6, 5]], [7, 8], [1, 2025, 2007]]


class TestSwapG2:
    def test_involution(self):
        pairs = ((111, 222), (333, 444))
        assert swap_g2(swap_g2(pairs)) == pairs

    def test_pairs_swap_independently(self):
        assert swap_g2(((1, 2), (3, 4))) == ((2, 1), (4, 3))


class TestValidateShape:
    @pytest.mark.parametrize(
        "proof, field",
        [
            (Proof(pi_a=(1,), pi_b=PROOF.pi_b, pi_c=PROOF.pi_c), "pi_a"),
            (Proof(pi_a=(1, 2, 3), pi_b=PROOF.pi_b, pi_c=PROOF.pi_c), "pi_a"),
            (Proof(pi_a=PROOF.pi_a, pi_b=((3, 4),), pi_c=PROOF.pi_c), "pi_b"),
            (Proof(pi_a=PROOF.pi_a, pi_b=((3, 4), (5, 6), (1, 0)), pi_c=PROOF.pi_c), "pi_b"),
            (Proof(pi_a=PROOF.pi_a, pi_b=((3, 4), (5,)), pi_c=PROOF.pi_c), "pi_b[1]"),
            (Proof(pi_a=PROOF.pi_a, pi_b=((3, 4, 0), (5, 6)), pi_c=PROOF.pi_c), "pi_b[0]"),
            (Proof(pi_a=PROOF.pi_a, pi_b=PROOF.pi_b, pi_c=()), "pi_c"),
        ],
    )
    def test_names_offending_field(self, proof, field):
        with pytest.raises(FormatError) as exc:
            validate_shape(proof, SIGNALS)
        assert exc.value.field == field

    @pytest.mark.parametrize("signals", [(), (1, 2), (1, 2, 3, 4)])
    def test_requires_three_signals(self, signals):
        with pytest.raises(FormatError) as exc:
            validate_shape(PROOF, signals)
        assert exc.value.field == "public_signals"

    def test_rejects_values_outside_uint256(self):
        with pytest.raises(FormatError, match="uint256"):
            validate_shape(Proof(pi_a=(-1, 2), pi_b=PROOF.pi_b, pi_c=PROOF.pi_c), SIGNALS)
        with pytest.raises(FormatError, match="uint256"):
            validate_shape(PROOF, (1, 2, 2**256))

    def test_rejects_non_integers(self):
        with pytest.raises(FormatError):
            validate_shape(Proof(pi_a=("1", 2), pi_b=PROOF.pi_b, pi_c=PROOF.pi_c), SIGNALS)

    def test_malformed_proof_produces_nothing(self):
        bad = Proof(pi_a=PROOF.pi_a, pi_b=((3, 4),), pi_c=PROOF.pi_c)
        result = None
        with pytest.raises(FormatError):
            result = format_call_arguments(bad, SIGNALS)
        assert result is None


class TestEncodings:
    def test_to_json_uses_decimal_strings(self):
        args = format_call_arguments(PROOF, SIGNALS)
        assert args.to_json() == {
            "pA": ["1", "2"],
            "pB": [["4", "3"], ["6", "5"]],
            "pC": ["7", "8"],
            "pubSignals": ["1", "2025", "2007"],
        }

    def test_solidity_calldata(self):
        args = CallArguments(p_a=(1, 2), p_b=((3, 4), (5, 6)), p_c=(7, 8), public_inputs=(9, 10, 255))
        text = args.to_solidity_calldata()
        parsed = json.loads(f"[{text}]")
        assert parsed[0] == ["0x" + "0" * 63 + "1", "0x" + "0" * 63 + "2"]
        assert parsed[1][0] == ["0x" + "0" * 63 + "3", "0x" + "0" * 63 + "4"]
        assert parsed[3][2] == "0x" + "0" * 62 + "ff"


def test_convert_proof_file(tmp_path):
    proof_path = tmp_path / "proof.json"
    public_path = tmp_path / "public.json"
    proof_path.write_text(json.dumps(PROOF.to_snarkjs()))
    public_path.write_text(json.dumps(["1", "2025", "2007"]))

    out = tmp_path / "calldata" / "args.json"
    args = convert_proof_file(proof_path, public_path, out)

    assert args.p_b == ((4, 3), (6, 5))
    assert json.loads(out.read_text())["pB"] == [["4", "3"], ["6", "5"]]


if __name__ == "__main__":
    pytest.main()
