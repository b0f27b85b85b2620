"""
Pydantic models for the tuning system.

This module provides:
- Selection: The current division, tuning, root and chord type
- TuningSystem: A YAML-defined division with its chord vocabulary
- TuningSystemMetadata: Listing summary of a tuning system
"""

from chuk_mcp_tuning.models.session import Selection
from chuk_mcp_tuning.models.system import TuningSystem, TuningSystemMetadata

__all__ = [
    "Selection",
    "TuningSystem",
    "TuningSystemMetadata",
]
