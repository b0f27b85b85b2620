"""
Division primitives - validation and step arithmetic.

A division N is the number of equal steps per octave. Steps are
octave-equivalent: all step arithmetic is taken modulo N and normalised
to [0, N).
"""

from __future__ import annotations

import math

from chuk_mcp_tuning.constants import DIVISIONS, ErrorMessages


class InvalidDivisionError(ValueError):
    """Raised when a division is not a positive integer."""


class InvalidStepError(ValueError):
    """Raised when a step cannot be normalised (not an integer)."""


def validate_division(division: int) -> int:
    """
    Check that a division is a positive integer.

    Returns:
        The division, unchanged

    Raises:
        InvalidDivisionError: For non-integers (bools included) and N <= 0
    """
    if isinstance(division, bool) or not isinstance(division, int) or division <= 0:
        raise InvalidDivisionError(ErrorMessages.INVALID_DIVISION.format(division=division))
    return division


def validate_step(step: int) -> int:
    """Check that a step is an integer (integral floats are accepted)."""
    if isinstance(step, bool):
        raise InvalidStepError(ErrorMessages.INVALID_STEP.format(step=step))
    if isinstance(step, int):
        return step
    if isinstance(step, float) and math.isfinite(step) and step.is_integer():
        return int(step)
    raise InvalidStepError(ErrorMessages.INVALID_STEP.format(step=step))


def normalize_step(step: int, division: int) -> int:
    """
    Reduce a step to its octave-equivalent index in [0, division).

    Examples:
        normalize_step(14, 12) -> 2
        normalize_step(-1, 12) -> 11
    """
    validate_division(division)
    return validate_step(step) % division


def list_divisions() -> list[int]:
    """The built-in divisions, in display order."""
    return list(DIVISIONS)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties going up.

    Python's round() uses banker's rounding; step projection needs
    0.5 -> 1 so that quarter-tones map onto the upper semitone.
    """
    return math.floor(value + 0.5)
