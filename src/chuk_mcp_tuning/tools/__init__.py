"""
MCP tool implementations.

Tools are organized by domain:
- tuning - Divisions, labels, chord types, frequency tables, systems
- session - Current selection per session
- playback - Tone plans and MIDI rendering
"""

from chuk_mcp_tuning.tools.playback import register_playback_tools
from chuk_mcp_tuning.tools.session import register_session_tools
from chuk_mcp_tuning.tools.tuning import register_tuning_tools

__all__ = [
    "register_playback_tools",
    "register_session_tools",
    "register_tuning_tools",
]
