#!/usr/bin/env python3
"""
Example: Render microtonal chords to MIDI.

This demonstrates the playback pipeline - resolved chord, tone plan,
MIDI file with one pitch-bent channel per voice. Receivers need a pitch
bend range of +/- 2 semitones (the GM default).

Usage:
    python examples/export_chord_midi.py
    # Creates: examples/output/*.mid
"""

from pathlib import Path

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.playback import plan_chord, tones_to_events, tones_to_midi
from chuk_mcp_tuning.systems import TuningSystemLoader

CHORDS = [
    ("Major", 12, "et"),
    ("Major", 12, "ji"),
    ("Quarter-tone Minor", 24, "et"),
    ("Supermajor", 31, "et"),
    ("Subminor", 31, "ji"),
    ("Harmonic 7th", 31, "ji"),
    ("Just Major", 53, "et"),
]


def main() -> None:
    """Render each chord on middle C."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    catalog = TuningCatalog(TuningSystemLoader())

    for chord_type, division, tuning in CHORDS:
        chord = catalog.resolve_chord(0, chord_type, division, tuning)
        tones = plan_chord(chord)
        if not tones:
            print(f"Skipping {chord_type} ({division}-EDO): nothing to play")
            continue

        filename = f"{chord_type.replace(' ', '_').lower()}_{division}edo_{tuning}.mid"
        path = output_dir / filename
        tones_to_midi(tones).save(str(path))

        print(f"{chord_type} ({division}-EDO, {tuning.upper()}) -> {path.name}")
        for event in tones_to_events(tones):
            print(f"  ch{event.channel:<2} note {event.pitch:3d}  bend {event.bend:+6d}")

    print("\nDone! Set your synth's pitch bend range to 2 semitones.")


if __name__ == "__main__":
    main()
