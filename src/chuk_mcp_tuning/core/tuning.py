"""
Tuning model - step to frequency under equal temperament and just intonation.

Equal temperament is exact for any division. Just intonation has no
canonical ratios for arbitrary microtonal steps, so two policies apply:

- Display tables map each step to its nearest 12-tone neighbour and use
  the chromatic just ratio for that semitone.
- Chord playback anchors the root at its equal-tempered frequency and
  tunes the other chord tones with exact ratios relative to it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from fractions import Fraction

from chuk_mcp_tuning.constants import BASE_FREQ, SEMITONES_PER_OCTAVE, TuningMode
from chuk_mcp_tuning.core.division import (
    normalize_step,
    round_half_up,
    validate_division,
    validate_step,
)
from chuk_mcp_tuning.core.formulas import semitone_offsets

logger = logging.getLogger(__name__)

# 5-limit just ratios for the chromatic scale relative to the tonic
STANDARD_JI_RATIOS: tuple[Fraction, ...] = (
    Fraction(1, 1),
    Fraction(16, 15),
    Fraction(9, 8),
    Fraction(6, 5),
    Fraction(5, 4),
    Fraction(4, 3),
    Fraction(45, 32),
    Fraction(3, 2),
    Fraction(8, 5),
    Fraction(5, 3),
    Fraction(9, 5),
    Fraction(15, 8),
)

# Exact chord-tone ratios relative to the root, positionally aligned
# with the chord formula offsets
CHORD_JI_RATIOS: dict[str, tuple[Fraction, ...]] = {
    "Major": (Fraction(1), Fraction(5, 4), Fraction(3, 2)),
    "Minor": (Fraction(1), Fraction(6, 5), Fraction(3, 2)),
    "Diminished": (Fraction(1), Fraction(6, 5), Fraction(7, 5)),
    "Augmented": (Fraction(1), Fraction(5, 4), Fraction(25, 16)),
    "Major 7th": (Fraction(1), Fraction(5, 4), Fraction(3, 2), Fraction(15, 8)),
    "Minor 7th": (Fraction(1), Fraction(6, 5), Fraction(3, 2), Fraction(9, 5)),
    "Dominant 7th": (Fraction(1), Fraction(5, 4), Fraction(3, 2), Fraction(7, 4)),
    "Sus2": (Fraction(1), Fraction(9, 8), Fraction(3, 2)),
    "Sus4": (Fraction(1), Fraction(4, 3), Fraction(3, 2)),
    "Supermajor": (Fraction(1), Fraction(9, 8), Fraction(13, 8)),
    "Subminor": (Fraction(1), Fraction(6, 5), Fraction(13, 8)),
}


def equal_temperament_frequency(division: int, step: int) -> float:
    """
    Frequency of a step in N-EDO: BASE_FREQ * 2 ** (step / N).

    Any integer step is valid; steps outside [0, N) reach other octaves.
    The octave factor is applied separately so that adding N to a step
    doubles the frequency exactly.
    """
    validate_division(division)
    octave, remainder = divmod(validate_step(step), division)
    return BASE_FREQ * 2.0**octave * 2.0 ** (remainder / division)


def just_intonation_approx_frequency(division: int, step: int) -> float:
    """
    Approximate just-intonation frequency of a step, for display.

    The step is projected onto the 12-tone grid, rounded (ties up) to the
    nearest semitone and given that semitone's chromatic just ratio.
    """
    validate_division(division)
    position = validate_step(step) * SEMITONES_PER_OCTAVE / division
    semitone = round_half_up(position) % SEMITONES_PER_OCTAVE
    octave = math.floor(position / SEMITONES_PER_OCTAVE)
    return BASE_FREQ * float(STANDARD_JI_RATIOS[semitone]) * 2.0**octave


def equal_temperament_table(division: int) -> list[float]:
    """Equal-tempered frequencies for steps 0..N-1."""
    validate_division(division)
    return [equal_temperament_frequency(division, step) for step in range(division)]


def just_intonation_approx_table(division: int) -> list[float]:
    """Approximate just-intonation frequencies for steps 0..N-1 (display only)."""
    validate_division(division)
    return [just_intonation_approx_frequency(division, step) for step in range(division)]


def frequency_table(division: int, tuning: TuningMode | str) -> list[float]:
    """Display table for a division under either tuning mode."""
    if TuningMode.parse(tuning) is TuningMode.JUST_INTONATION:
        return just_intonation_approx_table(division)
    return equal_temperament_table(division)


def chord_ratios(
    name: str,
    count: int,
    just_ratios: Mapping[str, Sequence[Fraction]] | None = None,
) -> list[Fraction] | list[float]:
    """
    Ratios relative to the root for the first `count` voices of a chord.

    Resolution order:
    1. Exact ratios for the chord, when there are at least `count` of them.
    2. Exact ratios, padded by repeating the last one.
    3. Canonical semitone offsets mapped through STANDARD_JI_RATIOS.
    4. Equal spacing across the octave, 2 ** (i / count). Not musical;
       kept so unknown chord names still sound.
    """
    if count <= 0:
        return []

    table = CHORD_JI_RATIOS if just_ratios is None else {**CHORD_JI_RATIOS, **just_ratios}
    ratios = table.get(name)
    if ratios:
        if len(ratios) >= count:
            return list(ratios[:count])
        return [ratios[min(i, len(ratios) - 1)] for i in range(count)]

    offsets = semitone_offsets(name)
    if offsets is not None:
        logger.debug("No JI ratios for %r, using chromatic ratios", name)
        return [STANDARD_JI_RATIOS[offset % SEMITONES_PER_OCTAVE] for offset in offsets][:count]

    logger.debug("No JI ratios or semitone formula for %r, spacing equally", name)
    return [2.0 ** (i / count) for i in range(count)]


def just_intonation_chord_frequencies(
    division: int,
    root: int,
    name: str,
    count: int,
    just_ratios: Mapping[str, Sequence[Fraction]] | None = None,
) -> list[float]:
    """
    Just-intonation frequencies for a chord, anchored at the root's ET pitch.

    Args:
        division: Number of steps per octave
        root: Root step (normalised modulo the division)
        name: Chord formula name
        count: Number of voices to produce
        just_ratios: Extra ratio tables, overriding the built-in ones by name

    Returns:
        One frequency per voice (may be shorter than count when only the
        semitone formula is known)
    """
    root_frequency = equal_temperament_frequency(division, normalize_step(root, division))
    return [root_frequency * float(ratio) for ratio in chord_ratios(name, count, just_ratios)]


def cents_between(lower: float, upper: float) -> float:
    """Size of the interval from `lower` to `upper` in cents."""
    if lower <= 0 or upper <= 0:
        raise ValueError("Frequencies must be positive")
    return 1200.0 * math.log2(upper / lower)
