"""
MIDI export - renders planned tones to MIDI files with mido.

Microtonal frequencies are written as the nearest MIDI note plus a
pitch-bend offset. Pitch bend applies to a whole channel, so every voice
of a chord gets its own channel. All operations are deterministic:
same input → same output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_tuning.playback.envelope import NOTE_ENVELOPE, ToneEvent

if TYPE_CHECKING:
    from collections.abc import Sequence


# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

# GM Drum channel (0-indexed, so 9 = channel 10), never used for tones
DRUM_CHANNEL = 9

# Pitch bend sensitivity assumed by receivers (GM default: +/- 2 semitones)
DEFAULT_BEND_RANGE = 2

# Pitchwheel limits as used by mido
BEND_MIN = -8192
BEND_MAX = 8191

# A4 reference for frequency -> MIDI note conversion
A4_MIDI = 69
A4_FREQ = 440.0

# Melodic channels in allocation order
TONE_CHANNELS: tuple[int, ...] = tuple(c for c in range(16) if c != DRUM_CHANNEL)


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event with an optional pitch-bend offset.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int  # 0-127
    channel: int = 0  # 0-15
    bend: int = 0  # -8192..8191, applied to the channel before the note

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if not BEND_MIN <= self.bend <= BEND_MAX:
            raise ValueError(f"Bend must be {BEND_MIN}..{BEND_MAX}, got {self.bend}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def frequency_to_midi(frequency: float, bend_range: int = DEFAULT_BEND_RANGE) -> tuple[int, int]:
    """
    Split a frequency into the nearest MIDI note and a pitch-bend value.

    Args:
        frequency: Frequency in Hz
        bend_range: Receiver bend sensitivity in semitones

    Returns:
        (note, bend) with bend scaled to the pitchwheel range

    Example:
        frequency_to_midi(440.0) -> (69, 0)
    """
    if frequency <= 0 or not math.isfinite(frequency):
        raise ValueError(f"Frequency must be positive, got {frequency}")
    exact = A4_MIDI + 12 * math.log2(frequency / A4_FREQ)
    note = math.floor(exact + 0.5)
    bend = round((exact - note) / bend_range * 8192)
    return note, max(BEND_MIN, min(BEND_MAX, bend))


def seconds_to_ticks(
    seconds: float,
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> int:
    """Convert a duration in seconds to ticks at a tempo."""
    return int(round(seconds * tempo_bpm / 60 * ticks_per_beat))


def velocity_float_to_int(velocity: float) -> int:
    """Convert velocity from 0.0-1.0 range to 0-127."""
    return max(0, min(127, int(velocity * 127)))


def tones_to_events(
    tones: Sequence[ToneEvent],
    tempo_bpm: int = 120,
    start_ticks: int = 0,
    bend_range: int = DEFAULT_BEND_RANGE,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Convert simultaneous tones to MIDI events, one channel per voice.

    Velocity follows the envelope's peak gain relative to a single note
    (the loudest envelope).

    Raises:
        ValueError: For more voices than melodic channels
    """
    if len(tones) > len(TONE_CHANNELS):
        raise ValueError(f"At most {len(TONE_CHANNELS)} voices, got {len(tones)}")

    events: list[MidiEvent] = []
    for channel, tone in zip(TONE_CHANNELS, tones, strict=False):
        note, bend = frequency_to_midi(tone.frequency, bend_range)
        events.append(
            MidiEvent(
                pitch=note,
                start_ticks=start_ticks,
                duration_ticks=seconds_to_ticks(tone.duration, tempo_bpm, ticks_per_beat),
                velocity=velocity_float_to_int(
                    tone.envelope.peak_gain / NOTE_ENVELOPE.peak_gain
                ),
                channel=channel,
                bend=bend,
            )
        )
    return events


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved

    This function is deterministic: same events → same MIDI file.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    # Sort key: pitchwheel before note_on at the same time, note_off first of all
    order = {"note_off": 0, "pitchwheel": 1, "note_on": 2}
    messages: list[tuple[int, Message]] = []

    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message("pitchwheel", channel=event.channel, pitch=event.bend, time=0),
            )
        )
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message(
                    "note_off",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=0,
                    time=0,
                ),
            )
        )

    messages.sort(key=lambda x: (x[0], order[x[1].type]))

    # Convert to delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))

    return mid


def tones_to_midi(
    tones: Sequence[ToneEvent],
    tempo_bpm: int = 120,
    bend_range: int = DEFAULT_BEND_RANGE,
) -> MidiFile:
    """
    Render simultaneous tones to a MidiFile.

    Example:
        mid = tones_to_midi(plan_chord(resolve_chord(0, "Major", 31, "ji")))
        mid.save("c_major_31.mid")
    """
    return events_to_midi(tones_to_events(tones, tempo_bpm, bend_range=bend_range), tempo_bpm)
