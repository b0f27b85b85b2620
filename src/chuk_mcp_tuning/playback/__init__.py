"""
Playback - turns resolved chords and steps into playable tones.

- envelope: what to sound (frequency, waveform, gain, decay)
- midi: rendering tones to MIDI files with per-voice pitch bend
"""

from chuk_mcp_tuning.playback.envelope import (
    CHORD_ENVELOPE,
    NOTE_ENVELOPE,
    ToneEnvelope,
    ToneEvent,
    plan_chord,
    plan_note,
    plan_step,
)
from chuk_mcp_tuning.playback.midi import (
    MidiEvent,
    events_to_midi,
    frequency_to_midi,
    tones_to_events,
    tones_to_midi,
)

__all__ = [
    "CHORD_ENVELOPE",
    "NOTE_ENVELOPE",
    "ToneEnvelope",
    "ToneEvent",
    "plan_chord",
    "plan_note",
    "plan_step",
    "MidiEvent",
    "events_to_midi",
    "frequency_to_midi",
    "tones_to_events",
    "tones_to_midi",
]
