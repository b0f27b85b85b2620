"""
Tone planning - which frequencies to sound and with what envelope.

This is the playback-triggering side of the core: it decides what to play,
never how. Audio backends (an oscillator, a synth, the MIDI renderer in
this package) consume ToneEvents.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from chuk_mcp_tuning.constants import (
    CHORD_DECAY_SECONDS,
    CHORD_PEAK_GAIN,
    CHORD_WAVEFORM,
    ENVELOPE_FLOOR_GAIN,
    NOTE_DECAY_SECONDS,
    NOTE_PEAK_GAIN,
    NOTE_WAVEFORM,
    TuningMode,
    Waveform,
)
from chuk_mcp_tuning.core import (
    ResolvedChord,
    equal_temperament_frequency,
    just_intonation_approx_frequency,
    normalize_step,
)


@dataclass(frozen=True)
class ToneEnvelope:
    """
    Attack-then-exponential-decay envelope.

    The tone starts at peak gain and decays exponentially to the floor
    gain over decay_seconds, then stops.
    """

    waveform: Waveform
    peak_gain: float
    decay_seconds: float
    floor_gain: float = ENVELOPE_FLOOR_GAIN

    def __post_init__(self) -> None:
        """Validate gains and duration."""
        if not 0 < self.floor_gain < self.peak_gain <= 1:
            raise ValueError(
                f"Gains must satisfy 0 < floor < peak <= 1, "
                f"got floor={self.floor_gain}, peak={self.peak_gain}"
            )
        if self.decay_seconds <= 0:
            raise ValueError(f"Decay must be positive, got {self.decay_seconds}")

    def gain_at(self, seconds: float) -> float:
        """Gain at a time offset from the attack (0 outside the tone)."""
        if seconds < 0 or seconds > self.decay_seconds:
            return 0.0
        return self.peak_gain * (self.floor_gain / self.peak_gain) ** (
            seconds / self.decay_seconds
        )


NOTE_ENVELOPE = ToneEnvelope(NOTE_WAVEFORM, NOTE_PEAK_GAIN, NOTE_DECAY_SECONDS)
CHORD_ENVELOPE = ToneEnvelope(CHORD_WAVEFORM, CHORD_PEAK_GAIN, CHORD_DECAY_SECONDS)


@dataclass(frozen=True)
class ToneEvent:
    """A single tone to sound, starting together with its siblings."""

    frequency: float
    envelope: ToneEnvelope
    step: int | None = None

    @property
    def duration(self) -> float:
        return self.envelope.decay_seconds

    def to_dict(self) -> dict[str, object]:
        return {
            "frequency": round(self.frequency, 4),
            "step": self.step,
            "waveform": self.envelope.waveform,
            "gain": self.envelope.peak_gain,
            "duration": self.envelope.decay_seconds,
        }


def _is_playable(frequency: float | None) -> bool:
    return frequency is not None and math.isfinite(frequency) and frequency > 0


def plan_note(frequency: float | None, step: int | None = None) -> list[ToneEvent]:
    """
    Plan a single note.

    Returns:
        One sine tone, or nothing for a missing or unplayable frequency
    """
    if not _is_playable(frequency):
        return []
    return [ToneEvent(frequency, NOTE_ENVELOPE, step)]


def plan_step(division: int, step: int, tuning: TuningMode | str) -> list[ToneEvent]:
    """
    Plan the note for a clicked step of the display circle.

    Uses the table shown for the tuning mode: equal temperament, or the
    approximate just-intonation table.
    """
    step = normalize_step(step, division)
    if TuningMode.parse(tuning) is TuningMode.JUST_INTONATION:
        frequency = just_intonation_approx_frequency(division, step)
    else:
        frequency = equal_temperament_frequency(division, step)
    return plan_note(frequency, step)


def plan_chord(chord: ResolvedChord) -> list[ToneEvent]:
    """
    Plan a resolved chord: one triangle tone per chord note.

    Returns:
        Tone events in chord order; empty for an empty chord
    """
    return [
        ToneEvent(note.frequency, CHORD_ENVELOPE, note.step)
        for note in chord
        if _is_playable(note.frequency)
    ]
