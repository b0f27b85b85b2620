"""
Tuning system models - YAML-defined divisions and their chord vocabularies.

A tuning system describes one division: its optional naming table, extra
chord formulas written in the division's own steps, and just-intonation
ratios for those chords. Built-in divisions are extended by them; new
divisions are added by them.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class TuningSystem(BaseModel):
    """
    A tuning system definition.

    Chord offsets are in steps of this system's division, root first.
    Ratios are given as strings like '5/4' in YAML and held as Fractions.
    """

    schema_version: str = Field(default="tuning-system/v1", alias="schema")
    name: str = Field(..., description="System name (e.g. 'edo-31')")
    division: int = Field(..., ge=1, description="Steps per octave")
    description: str = Field(default="", description="Human-readable description")
    note_names: list[str] | None = Field(default=None, description="Manual naming table")
    chords: dict[str, list[int]] = Field(
        default_factory=dict,
        description="Extra chord formulas in this division's steps",
    )
    just_ratios: dict[str, list[Fraction]] = Field(
        default_factory=dict,
        description="Just-intonation ratios relative to the root",
    )

    model_config = {"populate_by_name": True, "arbitrary_types_allowed": True}

    @field_validator("just_ratios", mode="before")
    @classmethod
    def parse_ratios(cls, v: Any) -> dict[str, list[Fraction]]:
        """Parse '5/4', 1.25 or 1 into Fractions."""
        if v is None:
            return {}
        return {name: [Fraction(str(r)) for r in ratios] for name, ratios in v.items()}

    @field_validator("chords")
    @classmethod
    def validate_chords(cls, v: dict[str, list[int]]) -> dict[str, list[int]]:
        """Each chord starts at the root and has no negative offsets."""
        for name, offsets in v.items():
            if not offsets or offsets[0] != 0:
                raise ValueError(f"Chord '{name}' must start at the root (0)")
            if any(o < 0 for o in offsets):
                raise ValueError(f"Chord '{name}' has negative offsets")
        return v

    @model_validator(mode="after")
    def validate_note_names(self) -> TuningSystem:
        """A naming table needs exactly one label per step."""
        if self.note_names is not None and len(self.note_names) != self.division:
            raise ValueError(
                f"note_names has {len(self.note_names)} labels, expected {self.division}"
            )
        return self

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-serializable dictionary."""
        data: dict[str, Any] = {
            "schema": self.schema_version,
            "name": self.name,
            "division": self.division,
            "description": self.description,
        }
        if self.note_names is not None:
            data["note_names"] = list(self.note_names)
        if self.chords:
            data["chords"] = {name: list(offsets) for name, offsets in self.chords.items()}
        if self.just_ratios:
            data["just_ratios"] = {
                name: [str(r) for r in ratios] for name, ratios in self.just_ratios.items()
            }
        return data


class TuningSystemMetadata(BaseModel):
    """Lightweight metadata for listing tuning systems."""

    name: str
    division: int
    description: str
    chord_count: int

    model_config = {"frozen": True}

    @classmethod
    def from_system(cls, system: TuningSystem) -> TuningSystemMetadata:
        """Create metadata from a tuning system."""
        return cls(
            name=system.name,
            division=system.division,
            description=system.description,
            chord_count=len(system.chords),
        )
