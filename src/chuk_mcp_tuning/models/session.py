"""
Selection model - the current (division, tuning, root, chord type) tuple.

This is the only state in the system. It is owned by the session layer
and passed into each core query; the core never holds on to it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from chuk_mcp_tuning.constants import DEFAULT_DIVISION, TuningMode


class Selection(BaseModel):
    """
    A user's current selection.

    The root is normalised modulo the division, preserving octave
    equivalence. An unknown chord type is allowed: it resolves to an
    empty chord rather than failing.
    """

    schema_version: str = Field(default="selection/v1", alias="schema")
    division: int = Field(default=DEFAULT_DIVISION, ge=1, description="Steps per octave")
    tuning: TuningMode = Field(default=TuningMode.EQUAL_TEMPERAMENT, description="Tuning mode")
    root: int = Field(default=0, description="Root step")
    chord_type: str | None = Field(default="Major", description="Chord formula name")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("tuning", mode="before")
    @classmethod
    def parse_tuning(cls, v: Any) -> TuningMode:
        """Accept 'et'/'ji' and their long forms."""
        return TuningMode.parse(v)

    @field_validator("root", mode="after")
    @classmethod
    def normalize_root(cls, v: int, info: ValidationInfo) -> int:
        """Reduce the (already int-coerced) root into [0, division)."""
        division = info.data.get("division")
        if division is None:
            return v
        return v % division

    def with_changes(self, **changes: Any) -> Selection:
        """Return a validated copy with some fields replaced."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return Selection.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "division": self.division,
            "tuning": self.tuning.value,
            "root": self.root,
            "chord_type": self.chord_type,
        }
