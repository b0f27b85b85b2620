"""
Constants and enums for the tuning system.

No magic strings - use enums and Literal types for constrained values.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

# Reference frequency for step 0 (middle C, C4)
BASE_FREQ = 261.63

# Built-in divisions of the octave (EDOs), in display order
DIVISIONS: tuple[int, ...] = (12, 19, 24, 31)
DEFAULT_DIVISION = 12

# Semitones per octave in the canonical (12-tone) formula tables
SEMITONES_PER_OCTAVE = 12

# Note naming thresholds, in fractions of a semitone
NATURAL_THRESHOLD = 0.125  # Snap to a natural when this close to it
HALF_THRESHOLD = 0.20  # Half-sharp band around 0.5

# Musical symbol half sharp (U+1D132)
HALF_SHARP = "\U0001d132"


class TuningMode(str, Enum):
    """
    Tuning model used to turn steps into frequencies.

    Equal temperament divides the octave into N equal logarithmic steps.
    Just intonation uses small-integer ratios relative to the chord root.
    """

    EQUAL_TEMPERAMENT = "et"
    JUST_INTONATION = "ji"

    @classmethod
    def parse(cls, value: TuningMode | str) -> TuningMode:
        """Parse a tuning mode from 'et', 'ji', 'equal' or 'just'."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        aliases = {
            "et": cls.EQUAL_TEMPERAMENT,
            "equal": cls.EQUAL_TEMPERAMENT,
            "equal_temperament": cls.EQUAL_TEMPERAMENT,
            "ji": cls.JUST_INTONATION,
            "just": cls.JUST_INTONATION,
            "just_intonation": cls.JUST_INTONATION,
        }
        if name not in aliases:
            raise ValueError(ErrorMessages.INVALID_TUNING.format(tuning=value))
        return aliases[name]


# Oscillator waveforms understood by playback consumers
Waveform = Literal["sine", "triangle", "square", "sawtooth"]

# Playback envelopes: single notes ring shorter and louder than chords
NOTE_WAVEFORM: Waveform = "sine"
NOTE_PEAK_GAIN = 0.25
NOTE_DECAY_SECONDS = 1.2

CHORD_WAVEFORM: Waveform = "triangle"
CHORD_PEAK_GAIN = 0.18
CHORD_DECAY_SECONDS = 1.5

# Gain the exponential decay ramps down to (near silence)
ENVELOPE_FLOOR_GAIN = 0.001

# Schema versions
SchemaVersion = Literal["tuning-system/v1", "selection/v1"]


class ErrorMessages:
    """Standardized error messages."""

    INVALID_DIVISION = "Invalid division: {division!r}. Must be a positive integer."
    INVALID_STEP = "Invalid step: {step!r}. Must be an integer."
    INVALID_TUNING = "Invalid tuning: {tuning!r}. Expected 'et' or 'ji'."
    SYSTEM_NOT_FOUND = "Tuning system '{name}' not found."
    NOTHING_TO_PLAY = "Nothing to play: chord '{chord_type}' is not available in {division}-EDO."


class SuccessMessages:
    """Standardized success messages."""

    SELECTION_UPDATED = "Selection updated for session '{session}'."
    CHORD_RENDERED = "Rendered '{chord}' to {path}."
