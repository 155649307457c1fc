# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

import re
from dataclasses import dataclass
from typing import Any

from zkage.constants import CURRENT_YEAR, MINIMUM_AGE
from zkage.errors import ValidationError

YEAR_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class CircuitInput:
    birth_year: int
    current_year: int
    threshold_year: int

    def to_json(self) -> dict[str, Any]:
        """The input record in the signal names the witness program expects."""
        return {
            "birthYear": self.birth_year,
            "currentYear": self.current_year,
            "thresholdYear": self.threshold_year,
        }


def parse_birth_year(text: str | None, current_year: int = CURRENT_YEAR) -> CircuitInput:
    """
    Turn raw birth-year text into a circuit input.

    The threshold year is derived from the configured current year, never
    from user input.

    Args:
        text: Raw text as typed by the user.
        current_year: The configured "current year".

    Returns:
        A `CircuitInput` whose birth year is at most `current_year`.

    Raises:
        ValidationError: "empty" for blank input, "not a number" when the text
            is not a base-10 integer, "future year" when it exceeds
            `current_year`.
    """
    if text is None or not text.strip():
        raise ValidationError("empty", "Please enter a valid birth year")

    text = text.strip()
    if not YEAR_PATTERN.fullmatch(text):
        raise ValidationError("not a number", f"not a number: {text!r}")
    birth_year = int(text)

    if birth_year > current_year:
        raise ValidationError("future year", f"future year: {birth_year} > {current_year}")

    return CircuitInput(
        birth_year=birth_year,
        current_year=current_year,
        threshold_year=current_year - MINIMUM_AGE,
    )
