"""
Note naming - display labels for the steps of a division.

Each step is placed on the 12-tone grid and labelled after its nearest
semitone: a natural when close to one, a half-sharp near the quarter-tone,
and a cents offset otherwise. Labels are presentation only; frequency and
chord resolution never look at them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from chuk_mcp_tuning.constants import (
    DIVISIONS,
    HALF_SHARP,
    HALF_THRESHOLD,
    NATURAL_THRESHOLD,
    SEMITONES_PER_OCTAVE,
)
from chuk_mcp_tuning.core.division import normalize_step, validate_division

SEMITONE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

# Divisions labelled by the nearest-semitone heuristic
NAMED_DIVISIONS: frozenset[int] = frozenset(DIVISIONS)


def note_name(step: int, division: int) -> str:
    """
    Label a step of a division by its nearest 12-tone neighbour.

    Examples:
        note_name(1, 12) -> 'C#'
        note_name(1, 24) -> 'C𝄲'
        note_name(2, 19) -> 'C# (26.3c)'
    """
    step = normalize_step(step, division)
    position = step * SEMITONES_PER_OCTAVE / division
    base = math.floor(position)
    index = base % SEMITONES_PER_OCTAVE
    frac = position - base

    if frac < NATURAL_THRESHOLD:
        return SEMITONE_NAMES[index]
    if 1 - frac < NATURAL_THRESHOLD:
        return SEMITONE_NAMES[(index + 1) % SEMITONES_PER_OCTAVE]
    if abs(frac - 0.5) <= HALF_THRESHOLD:
        return f"{SEMITONE_NAMES[index]}{HALF_SHARP}"

    cents = frac * 100
    return f"{SEMITONE_NAMES[index]} ({cents:.1f}c)"


def ordinal_name(step: int, division: int) -> str:
    """Generic label for divisions without a naming table."""
    return f"Step {normalize_step(step, division)}"


def note_names(division: int, manual: Sequence[str] | None = None) -> list[str]:
    """
    Labels for steps 0..N-1 of a division.

    Args:
        division: Number of steps per octave
        manual: Explicit naming table (one label per step), used verbatim

    Returns:
        N labels, in step order
    """
    validate_division(division)
    if manual is not None:
        if len(manual) != division:
            raise ValueError(
                f"Naming table has {len(manual)} labels, expected {division}"
            )
        return list(manual)
    if division in NAMED_DIVISIONS:
        return [note_name(step, division) for step in range(division)]
    return [ordinal_name(step, division) for step in range(division)]
