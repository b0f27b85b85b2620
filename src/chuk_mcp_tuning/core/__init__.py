"""
Core tuning primitives - the pure computation layer.

Everything here is a pure function of (division, tuning mode, root, chord type):
- Division: steps per octave, step normalisation
- Tuning model: ET and JI frequency math
- Note naming: display labels for steps
- Chord formulas: canonical 12-tone formulas rescaled to N steps
- Chord resolver: root + chord type + division -> (step, frequency) pairs
"""

from chuk_mcp_tuning.core.division import (
    InvalidDivisionError,
    InvalidStepError,
    list_divisions,
    normalize_step,
    round_half_up,
    validate_division,
    validate_step,
)
from chuk_mcp_tuning.core.formulas import (
    CANONICAL_FORMULAS,
    ChordFormula,
    build_chord_set,
    chord_formula_names,
    get_formula,
    rescale_offsets,
)
from chuk_mcp_tuning.core.naming import SEMITONE_NAMES, note_name, note_names
from chuk_mcp_tuning.core.resolver import (
    ResolvedChord,
    ResolvedNote,
    resolve_chord,
    step_indices,
)
from chuk_mcp_tuning.core.tuning import (
    CHORD_JI_RATIOS,
    STANDARD_JI_RATIOS,
    cents_between,
    equal_temperament_frequency,
    equal_temperament_table,
    frequency_table,
    just_intonation_approx_frequency,
    just_intonation_approx_table,
    just_intonation_chord_frequencies,
)

__all__ = [
    # Division
    "InvalidDivisionError",
    "InvalidStepError",
    "list_divisions",
    "normalize_step",
    "round_half_up",
    "validate_division",
    "validate_step",
    # Formulas
    "CANONICAL_FORMULAS",
    "ChordFormula",
    "build_chord_set",
    "chord_formula_names",
    "get_formula",
    "rescale_offsets",
    # Naming
    "SEMITONE_NAMES",
    "note_name",
    "note_names",
    # Resolver
    "ResolvedChord",
    "ResolvedNote",
    "resolve_chord",
    "step_indices",
    # Tuning
    "CHORD_JI_RATIOS",
    "STANDARD_JI_RATIOS",
    "cents_between",
    "equal_temperament_frequency",
    "equal_temperament_table",
    "frequency_table",
    "just_intonation_approx_frequency",
    "just_intonation_approx_table",
    "just_intonation_chord_frequencies",
]
