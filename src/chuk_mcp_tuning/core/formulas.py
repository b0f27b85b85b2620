"""
Chord formulas - canonical 12-tone interval tables and their projection
onto arbitrary divisions.

Formulas are defined in semitones from the root (Major = 0, 4, 7) and
rescaled to N steps with round(offset * N / 12). The projection is lossy:
for small N different formulas may collide on the same steps. That is
accepted, not corrected.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from chuk_mcp_tuning.constants import SEMITONES_PER_OCTAVE
from chuk_mcp_tuning.core.division import round_half_up, validate_division


@dataclass(frozen=True)
class ChordFormula:
    """
    A named interval pattern measured in steps of a division.

    Offsets are measured from the root, not stacked, and keep their
    declared order (root first). Canonical formulas live in 12 steps.

    Immutable and hashable.
    """

    name: str
    offsets: tuple[int, ...]
    division: int = SEMITONES_PER_OCTAVE

    def __post_init__(self) -> None:
        """Validate the interval pattern."""
        validate_division(self.division)
        if not self.offsets:
            raise ValueError(f"Chord formula '{self.name}' has no offsets")
        if self.offsets[0] != 0:
            raise ValueError(f"Chord formula '{self.name}' must start at the root (0)")
        if any(offset < 0 for offset in self.offsets):
            raise ValueError(f"Chord formula '{self.name}' has negative offsets")

    def rescale(self, division: int) -> ChordFormula:
        """Project this formula onto another division (nearest step)."""
        if division == self.division:
            return self
        scaled = tuple(
            round_half_up(offset * division / self.division) for offset in self.offsets
        )
        return ChordFormula(self.name, scaled, division)

    def __len__(self) -> int:
        return len(self.offsets)

    def __str__(self) -> str:
        return f"{self.name} {list(self.offsets)} /{self.division}"


_CANONICAL: list[ChordFormula] = [
    ChordFormula("Major", (0, 4, 7)),
    ChordFormula("Minor", (0, 3, 7)),
    ChordFormula("Diminished", (0, 3, 6)),
    ChordFormula("Augmented", (0, 4, 8)),
    ChordFormula("Major 7th", (0, 4, 7, 11)),
    ChordFormula("Minor 7th", (0, 3, 7, 10)),
    ChordFormula("Dominant 7th", (0, 4, 7, 10)),
    ChordFormula("Sus2", (0, 2, 7)),
    ChordFormula("Sus4", (0, 5, 7)),
]

# Canonical 12-tone formulas, in display order
CANONICAL_FORMULAS: dict[str, ChordFormula] = {f.name: f for f in _CANONICAL}

# Division-tagged aliases of canonical formulas (alias -> canonical name)
DIVISION_ALIASES: dict[int, dict[str, str]] = {
    24: {
        "Quarter-tone Major": "Major",
        "Quarter-tone Minor": "Minor",
    },
}

# Formulas written directly in a division's own steps (not rescaled)
DIVISION_EXTRAS: dict[int, dict[str, tuple[int, ...]]] = {
    31: {
        "Supermajor": (0, 9, 13),
        "Subminor": (0, 6, 13),
    },
}


def rescale_offsets(offsets: Sequence[int], division: int) -> tuple[int, ...]:
    """
    Rescale 12-tone semitone offsets to a division.

    Rescaling to 12 returns the offsets unchanged.
    """
    validate_division(division)
    return tuple(round_half_up(offset * division / SEMITONES_PER_OCTAVE) for offset in offsets)


def build_chord_set(
    division: int,
    extras: Mapping[str, Sequence[int]] | None = None,
) -> dict[str, tuple[int, ...]]:
    """
    Build the name -> step offsets table available in a division.

    Order: the rescaled canonical formulas, then the division's built-in
    aliases and extras, then caller-supplied extras (literal step offsets,
    which may override any earlier entry by name).

    Args:
        division: Number of steps per octave
        extras: Additional formulas already expressed in this division's steps

    Returns:
        Ordered dictionary of formula name to step offsets
    """
    validate_division(division)
    chord_set = {
        name: formula.rescale(division).offsets for name, formula in CANONICAL_FORMULAS.items()
    }

    for alias, canonical in DIVISION_ALIASES.get(division, {}).items():
        chord_set[alias] = CANONICAL_FORMULAS[canonical].rescale(division).offsets

    for name, offsets in DIVISION_EXTRAS.get(division, {}).items():
        chord_set[name] = tuple(offsets)

    if extras:
        for name, offsets in extras.items():
            chord_set[name] = tuple(offsets)

    return chord_set


def chord_formula_names(
    division: int,
    extras: Mapping[str, Sequence[int]] | None = None,
) -> list[str]:
    """Names of the chord formulas available in a division, in display order."""
    return list(build_chord_set(division, extras))


def get_formula(
    name: str,
    division: int,
    extras: Mapping[str, Sequence[int]] | None = None,
) -> ChordFormula | None:
    """
    Look up a formula by name in a division.

    Returns:
        The formula in the division's steps, or None if unknown
    """
    offsets = build_chord_set(division, extras).get(name)
    if offsets is None:
        return None
    return ChordFormula(name, offsets, division)


def semitone_offsets(name: str) -> tuple[int, ...] | None:
    """Canonical 12-tone offsets for a formula name, or None."""
    formula = CANONICAL_FORMULAS.get(name)
    return formula.offsets if formula else None
