"""
Tuning system loader - discovers and loads YAML tuning systems.

Systems can come from:
1. Built-in library (shipped with package)
2. Project systems (user's project/systems directory)

Several systems may describe the same division; their chords, ratios and
naming tables are merged, project systems winning over library ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_tuning.models.system import TuningSystem, TuningSystemMetadata

logger = logging.getLogger(__name__)


class TuningSystemLoader:
    """
    Discovers and loads tuning system definitions.

    Systems are loaded from YAML files in the library and project directories.
    Project systems override library systems with the same name. Files are
    read once; writes through the loader and clear_cache() force a rescan.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the loader.

        Args:
            library_path: Path to built-in system library
            project_path: Path to project systems directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        # Name -> system, in precedence order (library first, project last)
        self._cache: dict[str, TuningSystem] | None = None
        self._by_division: dict[int, TuningSystem] = {}

    def _systems(self) -> dict[str, TuningSystem]:
        """All systems by name, scanning the directories on first use."""
        if self._cache is not None:
            return self._cache

        systems: dict[str, TuningSystem] = {}
        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                system = self._load_system_file(path)
                if system:
                    # Re-insert so an override moves to the end of the order
                    systems.pop(system.name, None)
                    systems[system.name] = system

        logger.debug(f"Loaded {len(systems)} tuning systems")
        self._cache = systems
        self._by_division = {}
        return systems

    def load_all(self) -> list[TuningSystem]:
        """
        Load every available system, project systems taking precedence.

        Returns:
            Systems ordered by division, then name
        """
        return sorted(self._systems().values(), key=lambda s: (s.division, s.name))

    def list_systems(self) -> list[TuningSystemMetadata]:
        """List all available systems as lightweight metadata."""
        return [TuningSystemMetadata.from_system(s) for s in self.load_all()]

    def get_system(self, name: str) -> TuningSystem | None:
        """
        Get a system by name.

        Project systems take precedence over library systems.

        Args:
            name: System name

        Returns:
            TuningSystem if found, None otherwise
        """
        return self._systems().get(name)

    def get_all_by_division(self, division: int) -> list[TuningSystem]:
        """Systems defined for a division, lowest precedence first."""
        return [s for s in self._systems().values() if s.division == division]

    def get_by_division(self, division: int) -> TuningSystem | None:
        """
        Get the combined system for a division, if any.

        Chords and just ratios of every system for the division are merged
        by name, and the last naming table wins; later (project) systems
        override earlier (library) ones.
        """
        systems = self._systems()
        if division not in self._by_division:
            matching = [s for s in systems.values() if s.division == division]
            if not matching:
                return None
            self._by_division[division] = self._merge(matching)
        return self._by_division[division]

    def _merge(self, systems: list[TuningSystem]) -> TuningSystem:
        if len(systems) == 1:
            return systems[0]

        top = systems[-1]
        chords: dict[str, list[int]] = {}
        just_ratios: dict[str, list[Any]] = {}
        note_names: list[str] | None = None
        for system in systems:
            chords.update(system.chords)
            just_ratios.update(system.just_ratios)
            if system.note_names is not None:
                note_names = system.note_names

        return TuningSystem(
            name=top.name,
            division=top.division,
            description=top.description,
            note_names=note_names,
            chords=chords,
            just_ratios=just_ratios,
        )

    def save_to_project(self, system: TuningSystem) -> Path:
        """
        Write a system to the project directory.

        Returns:
            Path to the written file
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        self.project_path.mkdir(parents=True, exist_ok=True)
        path = self.project_path / f"{system.name}.yaml"
        with open(path, "w") as f:
            yaml.safe_dump(system.to_yaml_dict(), f, sort_keys=False, allow_unicode=True)

        self.clear_cache()
        return path

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library system to the project for customization.

        Args:
            name: System name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        library_file = self.library_path / f"{name}.yaml"
        if not library_file.exists():
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / f"{name}.yaml"
        if dest_file.exists():
            raise ValueError(f"Tuning system already exists in project: {name}")

        dest_file.write_text(library_file.read_text(encoding="utf-8"), encoding="utf-8")

        self.clear_cache()

        return dest_file

    def _load_system_file(self, path: Path) -> TuningSystem | None:
        """Load a system from a YAML file, skipping unreadable ones."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            return self._parse_system(data, default_name=path.stem)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning(f"Skipping tuning system {path}: {e}")
            return None

    def _parse_system(self, data: dict[str, Any] | None, default_name: str) -> TuningSystem:
        """Parse a system from YAML data."""
        if not isinstance(data, dict):
            raise ValueError("Tuning system file must contain a mapping")
        data = dict(data)
        data.setdefault("name", default_name)
        return TuningSystem.model_validate(data)

    def clear_cache(self) -> None:
        """Clear the system cache; the next query rescans the directories."""
        self._cache = None
        self._by_division = {}
