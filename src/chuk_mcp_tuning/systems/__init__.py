"""
Tuning systems - YAML definitions of divisions and their chord vocabularies.

The library ships descriptions of the built-in divisions plus a 53-EDO
system; projects can add or override systems in their own directory.
"""

from chuk_mcp_tuning.systems.loader import TuningSystemLoader

__all__ = [
    "TuningSystemLoader",
]
