#!/usr/bin/env python3
"""
Async Tuning MCP Server using chuk-mcp-server

This server provides MCP tools for exploring equal divisions of the octave
and just intonation. It computes note names, frequency tables and chords
for any division, and renders chords as playable tones.

The server provides tools for:
- Listing divisions, note names and chord types
- Frequency tables in equal temperament and just intonation
- Resolving chords to steps and frequencies
- Per-session selection of division, tuning, root and chord type
- Rendering chords and notes to MIDI with microtonal pitch bend
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.session import SessionManager
from chuk_mcp_tuning.systems import TuningSystemLoader
from chuk_mcp_tuning.tools import (
    register_playback_tools,
    register_session_tools,
    register_tuning_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-tuning")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
SYSTEMS_DIR = Path(os.environ.get("CHUK_TUNING_SYSTEMS_DIR", BASE_PATH / "systems"))
OUTPUT_DIR = Path(os.environ.get("CHUK_TUNING_OUTPUT_DIR", BASE_PATH / "output"))
SYSTEMS_LIBRARY_PATH = Path(__file__).parent / "systems" / "library"

# Create managers
system_loader = TuningSystemLoader(
    library_path=SYSTEMS_LIBRARY_PATH,
    project_path=SYSTEMS_DIR,
)
catalog = TuningCatalog(system_loader)
session_manager = SessionManager(catalog)

# Register all tools
tuning_tools = register_tuning_tools(mcp, catalog)
session_tools = register_session_tools(mcp, session_manager)
playback_tools = register_playback_tools(mcp, session_manager, OUTPUT_DIR)

# Export tool functions for direct access
tuning_list_divisions = tuning_tools["tuning_list_divisions"]
tuning_note_names = tuning_tools["tuning_note_names"]
tuning_chord_types = tuning_tools["tuning_chord_types"]
tuning_frequency_table = tuning_tools["tuning_frequency_table"]
tuning_resolve_chord = tuning_tools["tuning_resolve_chord"]
tuning_list_systems = tuning_tools["tuning_list_systems"]
tuning_describe_system = tuning_tools["tuning_describe_system"]

tuning_get_selection = session_tools["tuning_get_selection"]
tuning_select = session_tools["tuning_select"]
tuning_reset_selection = session_tools["tuning_reset_selection"]

tuning_play_chord = playback_tools["tuning_play_chord"]
tuning_play_note = playback_tools["tuning_play_note"]

logger.info("CHUK Tuning MCP Server initialized")
logger.info(f"  Systems library: {SYSTEMS_LIBRARY_PATH}")
logger.info(f"  Project systems dir: {SYSTEMS_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
