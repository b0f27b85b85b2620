#!/usr/bin/env python3
"""
Example: Resolve a chord in every division, in both tunings.

This demonstrates the core query layer: note names, chord formulas
rescaled from 12 steps, and how far just intonation sits from equal
temperament.

Usage:
    python examples/resolve_chords.py
    python examples/resolve_chords.py "Minor 7th" 2
"""

import sys

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.constants import TuningMode
from chuk_mcp_tuning.core import cents_between
from chuk_mcp_tuning.systems import TuningSystemLoader


def main() -> None:
    """Print the chord's steps, labels and frequencies per division."""
    chord_type = sys.argv[1] if len(sys.argv) > 1 else "Major"
    root = int(sys.argv[2]) if len(sys.argv) > 2 else 0

    catalog = TuningCatalog(TuningSystemLoader())

    print(f"{chord_type} on step {root}")
    print("=" * 40)

    for division in catalog.list_divisions():
        names = catalog.note_names(division)
        et = catalog.resolve_chord(root, chord_type, division, TuningMode.EQUAL_TEMPERAMENT)
        if et.is_empty:
            print(f"\n{division}-EDO: not available")
            continue

        ji = catalog.resolve_chord(root, chord_type, division, TuningMode.JUST_INTONATION)
        print(f"\n{division}-EDO  steps {et.steps}")
        for et_note, ji_note in zip(et, ji, strict=False):
            cents = cents_between(et_note.frequency, ji_note.frequency)
            print(
                f"  {names[et_note.step]:>12}  "
                f"ET {et_note.frequency:8.2f} Hz  "
                f"JI {ji_note.frequency:8.2f} Hz  ({cents:+.1f}c)"
            )

    print("\nChord types in 31-EDO:")
    for name, offsets in catalog.chord_set(31).items():
        print(f"  {name}: {list(offsets)}")


if __name__ == "__main__":
    main()
