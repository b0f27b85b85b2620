"""
Tests for core tuning primitives.

Tests cover:
- Division validation and step normalisation (division.py)
- Equal temperament and just intonation frequencies (tuning.py)
- Chord formulas and rescaling (formulas.py)
- Note naming (naming.py)
- Chord resolution (resolver.py)
"""

from fractions import Fraction

import pytest

from chuk_mcp_tuning.constants import BASE_FREQ, DIVISIONS, HALF_SHARP, TuningMode
from chuk_mcp_tuning.core import (
    CANONICAL_FORMULAS,
    CHORD_JI_RATIOS,
    ChordFormula,
    InvalidDivisionError,
    InvalidStepError,
    build_chord_set,
    cents_between,
    chord_formula_names,
    equal_temperament_frequency,
    equal_temperament_table,
    frequency_table,
    get_formula,
    just_intonation_approx_frequency,
    just_intonation_approx_table,
    just_intonation_chord_frequencies,
    list_divisions,
    normalize_step,
    note_name,
    note_names,
    rescale_offsets,
    resolve_chord,
    round_half_up,
    step_indices,
    validate_division,
)
from chuk_mcp_tuning.core.tuning import chord_ratios


class TestDivision:
    """Tests for division validation and step arithmetic."""

    def test_list_divisions(self) -> None:
        """Built-in divisions in display order."""
        assert list_divisions() == [12, 19, 24, 31]

    def test_validate_division_accepts_positive(self) -> None:
        """Any positive integer is a division."""
        assert validate_division(1) == 1
        assert validate_division(53) == 53

    @pytest.mark.parametrize("bad", [0, -12, 12.0, "12", True, None])
    def test_validate_division_rejects(self, bad) -> None:
        """Non-integers and N <= 0 are rejected."""
        with pytest.raises(InvalidDivisionError):
            validate_division(bad)

    def test_invalid_division_is_value_error(self) -> None:
        """Callers can catch ValueError."""
        assert issubclass(InvalidDivisionError, ValueError)
        assert issubclass(InvalidStepError, ValueError)

    def test_normalize_wraps(self) -> None:
        """Steps wrap modulo N to a non-negative index."""
        assert normalize_step(14, 12) == 2
        assert normalize_step(-1, 12) == 11
        assert normalize_step(-31, 31) == 0
        assert normalize_step(5, 12) == 5

    def test_normalize_integral_float(self) -> None:
        """Integral floats are accepted as steps."""
        assert normalize_step(14.0, 12) == 2

    def test_normalize_rejects_fractional_step(self) -> None:
        """A fractional step cannot be normalised."""
        with pytest.raises(InvalidStepError):
            normalize_step(1.5, 12)

    def test_normalize_rejects_bad_division(self) -> None:
        """Normalising against N <= 0 fails."""
        with pytest.raises(InvalidDivisionError):
            normalize_step(3, 0)

    def test_round_half_up(self) -> None:
        """Ties go up, unlike round()."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2
        assert round_half_up(-0.5) == 0


class TestEqualTemperament:
    """Tests for equal temperament frequencies."""

    @pytest.mark.parametrize("division", [1, 5, 12, 19, 24, 31, 53])
    def test_step_zero_is_base(self, division: int) -> None:
        """Step 0 is exactly the reference frequency."""
        assert equal_temperament_frequency(division, 0) == BASE_FREQ
        assert BASE_FREQ == 261.63

    @pytest.mark.parametrize("division", DIVISIONS)
    def test_octave_doubling(self, division: int) -> None:
        """Adding N steps doubles the frequency."""
        for step in range(division):
            assert equal_temperament_frequency(division, step + division) == (
                2 * equal_temperament_frequency(division, step)
            )

    def test_negative_steps_descend(self) -> None:
        """Negative steps reach lower octaves."""
        assert equal_temperament_frequency(12, -12) == BASE_FREQ / 2

    def test_known_values(self) -> None:
        """E and G above middle C."""
        assert equal_temperament_frequency(12, 4) == pytest.approx(329.63, abs=0.01)
        assert equal_temperament_frequency(12, 7) == pytest.approx(392.00, abs=0.01)
        assert equal_temperament_frequency(24, 1) == pytest.approx(BASE_FREQ * 2 ** (1 / 24))

    def test_table(self) -> None:
        """Table has one ascending frequency per step."""
        table = equal_temperament_table(19)
        assert len(table) == 19
        assert table == sorted(table)
        assert table[0] == BASE_FREQ

    def test_invalid_step(self) -> None:
        """Non-integer steps are rejected."""
        with pytest.raises(InvalidStepError):
            equal_temperament_frequency(12, 0.5)


class TestJustIntonationApprox:
    """Tests for the display-only just intonation table."""

    def test_12_tone_uses_chromatic_ratios(self) -> None:
        """12-EDO steps map straight onto the chromatic ratios."""
        assert just_intonation_approx_frequency(12, 4) == pytest.approx(BASE_FREQ * 5 / 4)
        assert just_intonation_approx_frequency(12, 7) == pytest.approx(BASE_FREQ * 3 / 2)
        assert just_intonation_approx_frequency(12, 11) == pytest.approx(BASE_FREQ * 15 / 8)

    def test_quarter_tone_rounds_up(self) -> None:
        """A step halfway between semitones takes the upper one."""
        assert just_intonation_approx_frequency(24, 1) == pytest.approx(BASE_FREQ * 16 / 15)

    def test_top_step_wraps_to_tonic(self) -> None:
        """Near-octave steps round to semitone 12, which wraps to ratio 1."""
        assert just_intonation_approx_frequency(31, 30) == pytest.approx(BASE_FREQ)

    def test_octave_offset(self) -> None:
        """Steps beyond the octave are doubled."""
        assert just_intonation_approx_frequency(12, 12) == pytest.approx(BASE_FREQ * 2)
        assert just_intonation_approx_frequency(12, 16) == pytest.approx(BASE_FREQ * 2 * 5 / 4)

    def test_table_length(self) -> None:
        """One entry per step."""
        assert len(just_intonation_approx_table(31)) == 31

    def test_frequency_table_dispatch(self) -> None:
        """frequency_table picks the table by tuning mode."""
        assert frequency_table(12, "et") == equal_temperament_table(12)
        assert frequency_table(12, TuningMode.JUST_INTONATION) == just_intonation_approx_table(12)

    def test_frequency_table_bad_tuning(self) -> None:
        """Unknown tuning names are rejected."""
        with pytest.raises(ValueError, match="Invalid tuning"):
            frequency_table(12, "meantone")


class TestJustIntonationChords:
    """Tests for the chord just intonation fallback chain."""

    def test_exact_ratios(self) -> None:
        """Known chords use their exact ratios."""
        assert chord_ratios("Major", 3) == [Fraction(1), Fraction(5, 4), Fraction(3, 2)]

    def test_truncates_to_count(self) -> None:
        """Only the first count ratios are used."""
        assert chord_ratios("Major 7th", 2) == [Fraction(1), Fraction(5, 4)]

    def test_pads_with_last_ratio(self) -> None:
        """Short ratio lists repeat their last ratio."""
        assert chord_ratios("Major", 5) == [
            Fraction(1),
            Fraction(5, 4),
            Fraction(3, 2),
            Fraction(3, 2),
            Fraction(3, 2),
        ]

    def test_semitone_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without exact ratios, canonical semitones map through the chromatic table."""
        monkeypatch.delitem(CHORD_JI_RATIOS, "Sus2")
        assert chord_ratios("Sus2", 3) == [Fraction(1), Fraction(9, 8), Fraction(3, 2)]

    def test_equal_spacing_last_resort(self) -> None:
        """Unknown names space voices equally across the octave."""
        ratios = chord_ratios("Quarter-tone Major", 3)
        assert ratios == pytest.approx([1.0, 2 ** (1 / 3), 2 ** (2 / 3)])

    def test_zero_count(self) -> None:
        """No voices, no ratios."""
        assert chord_ratios("Major", 0) == []

    def test_override_ratios(self) -> None:
        """Caller ratios extend the built-in table."""
        ratios = chord_ratios("Wide", 4, {"Wide": [Fraction(1), Fraction(3, 2)]})
        assert ratios == [Fraction(1), Fraction(3, 2), Fraction(3, 2), Fraction(3, 2)]

    def test_root_anchored_at_et(self) -> None:
        """The chord root sits on its equal-tempered pitch."""
        freqs = just_intonation_chord_frequencies(12, 2, "Minor", 3)
        root = equal_temperament_frequency(12, 2)
        assert freqs == pytest.approx([root, root * 6 / 5, root * 3 / 2])

    def test_root_is_normalized(self) -> None:
        """Roots outside the octave wrap before anchoring."""
        assert just_intonation_chord_frequencies(12, 14, "Major", 3) == (
            just_intonation_chord_frequencies(12, 2, "Major", 3)
        )

    def test_cents_between(self) -> None:
        """Octave is 1200 cents, JI third is ~13.7 cents flat of ET."""
        assert cents_between(BASE_FREQ, 2 * BASE_FREQ) == pytest.approx(1200)
        et_third = equal_temperament_frequency(12, 4)
        assert cents_between(et_third, BASE_FREQ * 5 / 4) == pytest.approx(-13.69, abs=0.01)

    def test_cents_rejects_non_positive(self) -> None:
        """Cents are undefined for non-positive frequencies."""
        with pytest.raises(ValueError):
            cents_between(0, 440)


class TestChordFormula:
    """Tests for chord formulas and rescaling."""

    def test_canonical_table(self) -> None:
        """Nine canonical formulas in display order."""
        assert list(CANONICAL_FORMULAS) == [
            "Major",
            "Minor",
            "Diminished",
            "Augmented",
            "Major 7th",
            "Minor 7th",
            "Dominant 7th",
            "Sus2",
            "Sus4",
        ]
        assert CANONICAL_FORMULAS["Dominant 7th"].offsets == (0, 4, 7, 10)

    def test_rescale_to_12_is_identity(self) -> None:
        """Rescaling to 12 leaves the offsets unchanged."""
        assert rescale_offsets([0, 4, 7], 12) == (0, 4, 7)
        major = CANONICAL_FORMULAS["Major"]
        assert major.rescale(12) is major

    def test_rescale_other_divisions(self) -> None:
        """Major triad in 19, 24 and 31 steps."""
        assert rescale_offsets([0, 4, 7], 19) == (0, 6, 11)
        assert rescale_offsets([0, 4, 7], 24) == (0, 8, 14)
        assert rescale_offsets([0, 4, 7], 31) == (0, 10, 18)

    def test_rescale_ties_round_up(self) -> None:
        """2.5 steps round to 3."""
        assert rescale_offsets([0, 3, 7], 10) == (0, 3, 6)

    def test_rescale_may_collide(self) -> None:
        """Small divisions collapse distinct formulas."""
        assert rescale_offsets([0, 4, 7], 3) == rescale_offsets([0, 3, 7], 3)

    def test_formula_validation(self) -> None:
        """Formulas start at the root and never go negative."""
        with pytest.raises(ValueError, match="root"):
            ChordFormula("Rootless", (4, 7))
        with pytest.raises(ValueError, match="negative"):
            ChordFormula("Down", (0, -3))
        with pytest.raises(ValueError, match="no offsets"):
            ChordFormula("Empty", ())

    def test_formula_rescale_method(self) -> None:
        """ChordFormula.rescale carries name and division."""
        scaled = CANONICAL_FORMULAS["Sus4"].rescale(31)
        assert scaled.name == "Sus4"
        assert scaled.division == 31
        assert scaled.offsets == (0, 13, 18)
        assert len(scaled) == 3

    def test_names_per_division(self) -> None:
        """Division-specific extras follow the canonical formulas."""
        canonical = list(CANONICAL_FORMULAS)
        assert chord_formula_names(12) == canonical
        assert chord_formula_names(19) == canonical
        assert chord_formula_names(24) == canonical + ["Quarter-tone Major", "Quarter-tone Minor"]
        assert chord_formula_names(31) == canonical + ["Supermajor", "Subminor"]

    def test_division_extras(self) -> None:
        """31-EDO extras are literal steps; 24-EDO aliases are rescaled."""
        assert build_chord_set(31)["Supermajor"] == (0, 9, 13)
        assert build_chord_set(31)["Subminor"] == (0, 6, 13)
        assert build_chord_set(24)["Quarter-tone Major"] == (0, 8, 14)

    def test_caller_extras(self) -> None:
        """Caller extras are appended and may override."""
        chord_set = build_chord_set(12, {"Power": [0, 7], "Major": [0, 4, 7, 12]})
        assert chord_set["Power"] == (0, 7)
        assert chord_set["Major"] == (0, 4, 7, 12)
        assert list(chord_set)[-1] == "Power"

    def test_get_formula(self) -> None:
        """Lookup by name returns a formula in the division's steps."""
        formula = get_formula("Minor", 19)
        assert formula == ChordFormula("Minor", (0, 5, 11), 19)
        assert get_formula("Supermajor", 12) is None


class TestNoteNaming:
    """Tests for the note naming heuristic."""

    def test_12_tone_names(self) -> None:
        """12-EDO uses plain chromatic names."""
        assert note_names(12) == [
            "C",
            "C#",
            "D",
            "D#",
            "E",
            "F",
            "F#",
            "G",
            "G#",
            "A",
            "A#",
            "B",
        ]

    def test_24_tone_half_sharps(self) -> None:
        """Odd quarter-tone steps are half-sharps of the lower semitone."""
        names = note_names(24)
        assert names[0] == "C"
        assert names[1] == f"C{HALF_SHARP}"
        assert names[2] == "C#"
        assert names[23] == f"B{HALF_SHARP}"

    def test_19_tone_names(self) -> None:
        """19-EDO mixes naturals, half-sharps and cents labels."""
        names = note_names(19)
        assert names[0] == "C"
        assert names[1] == f"C{HALF_SHARP}"
        assert names[2] == "C# (26.3c)"
        assert names[3] == "D"
        assert names[5] == "D# (15.8c)"

    def test_31_tone_names(self) -> None:
        """31-EDO steps near a semitone boundary show cents."""
        names = note_names(31)
        assert names[1] == f"C{HALF_SHARP}"
        assert names[2] == "C (77.4c)"
        assert len(names) == 31

    def test_single_step_wraps(self) -> None:
        """note_name normalises the step first."""
        assert note_name(13, 12) == "C#"
        assert note_name(-1, 12) == "B"

    def test_ordinal_fallback(self) -> None:
        """Divisions without a naming table get ordinal labels."""
        assert note_names(5) == ["Step 0", "Step 1", "Step 2", "Step 3", "Step 4"]

    def test_manual_table(self) -> None:
        """A manual table is used verbatim."""
        labels = ["Sa", "Re", "Ga", "Ma", "Pa"]
        assert note_names(5, labels) == labels

    def test_manual_table_length_checked(self) -> None:
        """A manual table needs one label per step."""
        with pytest.raises(ValueError, match="expected 5"):
            note_names(5, ["Sa", "Re"])


class TestResolver:
    """Tests for chord resolution."""

    def test_step_indices_wrap(self) -> None:
        """Steps wrap around the octave."""
        assert step_indices(10, [0, 4, 7], 12) == [10, 2, 5]

    def test_c_major_et(self) -> None:
        """C major in 12-EDO, equal temperament."""
        chord = resolve_chord(0, "Major", 12, TuningMode.EQUAL_TEMPERAMENT)
        assert chord.steps == [0, 4, 7]
        assert chord.frequencies == pytest.approx(
            [BASE_FREQ, BASE_FREQ * 2 ** (4 / 12), BASE_FREQ * 2 ** (7 / 12)]
        )
        assert chord.frequencies == pytest.approx([261.63, 329.63, 392.00], abs=0.01)

    def test_c_major_ji(self) -> None:
        """C major in just intonation: root at ET, then 5/4 and 3/2."""
        chord = resolve_chord(0, "Major", 12, "ji")
        assert chord.steps == [0, 4, 7]
        assert chord.frequencies == pytest.approx(
            [BASE_FREQ, BASE_FREQ * 5 / 4, BASE_FREQ * 3 / 2]
        )
        assert chord.frequencies == pytest.approx([261.63, 327.04, 392.45], abs=0.01)

    def test_wraparound_chord(self) -> None:
        """A# major wraps into the octave."""
        assert resolve_chord(10, "Major", 12).steps == [10, 2, 5]

    def test_unknown_chord_is_empty(self) -> None:
        """Unknown names resolve to nothing, without raising."""
        chord = resolve_chord(0, "Supermajor", 12, "ji")
        assert chord.is_empty
        assert chord.steps == []
        assert chord.frequencies == []
        assert len(chord) == 0

    @pytest.mark.parametrize("division", DIVISIONS)
    def test_unknown_chord_every_division(self, division: int) -> None:
        """No division knows a nonsense chord."""
        assert resolve_chord(3, "Nonsense", division, "et").is_empty

    def test_31_tone_supermajor(self) -> None:
        """31-EDO extras resolve in both tunings."""
        et = resolve_chord(0, "Supermajor", 31, "et")
        assert et.steps == [0, 9, 13]
        ji = resolve_chord(0, "Supermajor", 31, "ji")
        assert ji.frequencies == pytest.approx([BASE_FREQ, BASE_FREQ * 9 / 8, BASE_FREQ * 13 / 8])

    def test_order_follows_formula(self) -> None:
        """Root first, then formula order, even after wrapping."""
        chord = resolve_chord(9, "Major 7th", 12, "ji")
        assert chord.steps == [9, 1, 4, 8]
        root = equal_temperament_frequency(12, 9)
        assert chord.frequencies[3] == pytest.approx(root * 15 / 8)

    def test_root_normalized(self) -> None:
        """Out-of-range roots wrap."""
        chord = resolve_chord(14, "Minor", 12)
        assert chord.root == 2
        assert chord.steps == [2, 5, 9]

    def test_invalid_division_raises(self) -> None:
        """Resolution against N <= 0 fails."""
        with pytest.raises(InvalidDivisionError):
            resolve_chord(0, "Major", 0)

    def test_custom_chord_set(self) -> None:
        """A caller chord set replaces the built-in lookup."""
        chord = resolve_chord(0, "Power", 12, "et", chord_set={"Power": (0, 7)})
        assert chord.steps == [0, 7]

    def test_to_dict(self) -> None:
        """Serialisable summary."""
        data = resolve_chord(0, "Sus2", 24, "et").to_dict()
        assert data["steps"] == [0, 4, 14]
        assert data["tuning"] == "et"
        assert data["division"] == 24
        assert data["chord_type"] == "Sus2"
        assert len(data["frequencies"]) == 3
