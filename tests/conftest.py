"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.systems import TuningSystemLoader


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def system_loader(temp_dir: Path) -> TuningSystemLoader:
    """Loader over the shipped library with an empty project directory."""
    return TuningSystemLoader(project_path=temp_dir / "systems")


@pytest.fixture
def catalog(system_loader: TuningSystemLoader) -> TuningCatalog:
    """Catalog with the shipped tuning systems loaded."""
    return TuningCatalog(system_loader)
