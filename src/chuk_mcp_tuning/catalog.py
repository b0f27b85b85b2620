"""
Tuning catalog - the query API consumed by tools and playback.

Combines the pure core with YAML tuning systems: a system can add chord
formulas and just ratios to a built-in division, or introduce a new
division with its own naming table. Without a loader the catalog exposes
the built-ins only.
"""

from __future__ import annotations

import logging
from fractions import Fraction

from chuk_mcp_tuning.constants import DIVISIONS, TuningMode
from chuk_mcp_tuning.core import (
    ResolvedChord,
    build_chord_set,
    equal_temperament_table,
    frequency_table,
    just_intonation_approx_table,
    note_names,
    resolve_chord,
    validate_division,
)
from chuk_mcp_tuning.models.system import TuningSystem
from chuk_mcp_tuning.systems import TuningSystemLoader

logger = logging.getLogger(__name__)


class TuningCatalog:
    """
    Query surface over divisions, labels, chord formulas and frequencies.

    Every method is a pure function of its arguments and the loaded
    systems; no selection state is kept here.
    """

    def __init__(self, loader: TuningSystemLoader | None = None):
        """
        Initialize the catalog.

        Args:
            loader: Optional tuning system loader for YAML extensions
        """
        self.loader = loader

    def list_divisions(self) -> list[int]:
        """Built-in divisions first, then divisions added by systems."""
        divisions = list(DIVISIONS)
        if self.loader:
            extra = {s.division for s in self.loader.load_all()} - set(divisions)
            divisions.extend(sorted(extra))
        return divisions

    def get_system(self, division: int) -> TuningSystem | None:
        """The tuning system extending a division, if one is loaded."""
        if not self.loader:
            return None
        return self.loader.get_by_division(division)

    def note_names(self, division: int) -> list[str]:
        """Display labels for steps 0..N-1."""
        validate_division(division)
        system = self.get_system(division)
        return note_names(division, system.note_names if system else None)

    def chord_set(self, division: int) -> dict[str, tuple[int, ...]]:
        """Formula name -> step offsets available in a division."""
        system = self.get_system(division)
        return build_chord_set(division, system.chords if system else None)

    def chord_formula_names(self, division: int) -> list[str]:
        """Names of the chord formulas available in a division."""
        return list(self.chord_set(division))

    def just_ratios(self, division: int) -> dict[str, list[Fraction]]:
        """Just ratios contributed by a division's system."""
        system = self.get_system(division)
        return dict(system.just_ratios) if system else {}

    def equal_temperament_table(self, division: int) -> list[float]:
        return equal_temperament_table(division)

    def just_intonation_approx_table(self, division: int) -> list[float]:
        return just_intonation_approx_table(division)

    def frequency_table(self, division: int, tuning: TuningMode | str) -> list[float]:
        return frequency_table(division, tuning)

    def resolve_chord(
        self,
        root: int,
        name: str,
        division: int,
        tuning: TuningMode | str = TuningMode.EQUAL_TEMPERAMENT,
    ) -> ResolvedChord:
        """
        Resolve a chord in a division.

        Returns:
            The resolved chord; empty when the name is unknown here
        """
        chord = resolve_chord(
            root,
            name,
            division,
            tuning,
            chord_set=self.chord_set(division),
            just_ratios=self.just_ratios(division),
        )
        if chord.is_empty:
            logger.debug(f"Chord '{name}' not available in {division}-EDO")
        return chord
