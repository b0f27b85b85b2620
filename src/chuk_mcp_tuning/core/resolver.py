"""
Chord resolver - root + chord type + division -> concrete steps and frequencies.

This is the resolved form handed to playback. An unknown chord name is not
an error: it resolves to an empty chord, which consumers read as
"nothing to highlight, nothing to play".
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from chuk_mcp_tuning.constants import TuningMode
from chuk_mcp_tuning.core.division import normalize_step, validate_division
from chuk_mcp_tuning.core.formulas import build_chord_set
from chuk_mcp_tuning.core.tuning import (
    equal_temperament_frequency,
    just_intonation_chord_frequencies,
)


@dataclass(frozen=True)
class ResolvedNote:
    """One chord tone: a step of the division and its frequency."""

    step: int
    frequency: float


@dataclass(frozen=True)
class ResolvedChord:
    """
    A chord resolved in a division under a tuning mode.

    Notes keep formula order (root first), which is what lines them up
    with just-intonation ratios. Created fresh for every query.
    """

    root: int
    name: str
    division: int
    tuning: TuningMode
    notes: tuple[ResolvedNote, ...] = field(default_factory=tuple)

    @property
    def steps(self) -> list[int]:
        return [note.step for note in self.notes]

    @property
    def frequencies(self) -> list[float]:
        return [note.frequency for note in self.notes]

    @property
    def is_empty(self) -> bool:
        return not self.notes

    def __len__(self) -> int:
        return len(self.notes)

    def __iter__(self) -> Iterator[ResolvedNote]:
        return iter(self.notes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "root": self.root,
            "chord_type": self.name,
            "division": self.division,
            "tuning": self.tuning.value,
            "steps": self.steps,
            "frequencies": [round(f, 4) for f in self.frequencies],
        }


def step_indices(root: int, offsets: Sequence[int], division: int) -> list[int]:
    """
    Absolute steps of a chord: (root + offset) mod N for each offset.

    Example:
        step_indices(10, [0, 4, 7], 12) -> [10, 2, 5]
    """
    validate_division(division)
    return [normalize_step(root + offset, division) for offset in offsets]


def resolve_chord(
    root: int,
    name: str,
    division: int,
    tuning: TuningMode | str = TuningMode.EQUAL_TEMPERAMENT,
    chord_set: Mapping[str, Sequence[int]] | None = None,
    just_ratios: Mapping[str, Sequence[Fraction]] | None = None,
) -> ResolvedChord:
    """
    Resolve a chord to ordered (step, frequency) pairs.

    Args:
        root: Root step (normalised modulo the division)
        name: Chord formula name
        division: Number of steps per octave
        tuning: Equal temperament or just intonation
        chord_set: Formula table to look the name up in
            (defaults to the division's built-in table)
        just_ratios: Extra just-intonation ratio tables

    Returns:
        A ResolvedChord; empty when the name is unknown in this division
    """
    mode = TuningMode.parse(tuning)
    root = normalize_step(root, division)
    formulas = build_chord_set(division) if chord_set is None else chord_set

    offsets = formulas.get(name)
    if not offsets:
        return ResolvedChord(root, name, division, mode)

    steps = step_indices(root, offsets, division)
    if mode is TuningMode.JUST_INTONATION:
        frequencies = just_intonation_chord_frequencies(
            division, root, name, len(steps), just_ratios
        )
    else:
        frequencies = [equal_temperament_frequency(division, step) for step in steps]

    notes = tuple(
        ResolvedNote(step, frequency)
        for step, frequency in zip(steps, frequencies, strict=False)
    )
    return ResolvedChord(root, name, division, mode, notes)
