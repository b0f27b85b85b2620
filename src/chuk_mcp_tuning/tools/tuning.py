"""
Tuning tools - MCP tools for querying divisions, labels and chords.

Tools for listing divisions, note names, chord types and frequency tables,
resolving chords, and browsing tuning systems.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.constants import ErrorMessages, TuningMode
from chuk_mcp_tuning.core import cents_between

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_tuning_tools(
    mcp: ChukMCPServer,
    catalog: TuningCatalog,
) -> dict[str, Any]:
    """
    Register tuning query tools with the MCP server.

    Args:
        mcp: The MCP server instance
        catalog: The tuning catalog

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_list_divisions() -> str:
        """
        List the supported divisions of the octave.

        Returns:
            JSON string with the divisions in display order

        Example:
            tuning_list_divisions()
        """
        try:
            divisions = catalog.list_divisions()
            return json.dumps(
                {"status": "success", "divisions": divisions, "count": len(divisions)}
            )
        except Exception as e:
            logger.exception("Failed to list divisions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_list_divisions"] = tuning_list_divisions

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_note_names(division: int) -> str:
        """
        Get the note labels for every step of a division.

        Args:
            division: Steps per octave (e.g. 12, 19, 24, 31)

        Returns:
            JSON string with one label per step

        Example:
            tuning_note_names(division=24)
        """
        try:
            names = catalog.note_names(division)
            return json.dumps(
                {"status": "success", "division": division, "note_names": names},
                ensure_ascii=False,
            )
        except Exception as e:
            logger.exception("Failed to name notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_note_names"] = tuning_note_names

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_chord_types(division: int) -> str:
        """
        List the chord types available in a division with their step offsets.

        Args:
            division: Steps per octave

        Returns:
            JSON string with chord names and offsets

        Example:
            tuning_chord_types(division=31)
        """
        try:
            chord_set = catalog.chord_set(division)
            return json.dumps(
                {
                    "status": "success",
                    "division": division,
                    "chord_types": [
                        {"name": name, "offsets": list(offsets)}
                        for name, offsets in chord_set.items()
                    ],
                    "count": len(chord_set),
                }
            )
        except Exception as e:
            logger.exception("Failed to list chord types")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_chord_types"] = tuning_chord_types

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_frequency_table(division: int, tuning: str = "et") -> str:
        """
        Get the frequency of every step of a division.

        In just intonation the table is an approximation for display: each
        step takes the just ratio of its nearest semitone.

        Args:
            division: Steps per octave
            tuning: 'et' (equal temperament) or 'ji' (just intonation)

        Returns:
            JSON string with labelled frequencies

        Example:
            tuning_frequency_table(division=19, tuning="ji")
        """
        try:
            mode = TuningMode.parse(tuning)
            frequencies = catalog.frequency_table(division, mode)
            names = catalog.note_names(division)
            return json.dumps(
                {
                    "status": "success",
                    "division": division,
                    "tuning": mode.value,
                    "steps": [
                        {"step": step, "name": name, "frequency": round(freq, 4)}
                        for step, (name, freq) in enumerate(zip(names, frequencies, strict=True))
                    ],
                },
                ensure_ascii=False,
            )
        except Exception as e:
            logger.exception("Failed to build frequency table")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_frequency_table"] = tuning_frequency_table

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_resolve_chord(
        root: int,
        chord_type: str,
        division: int = 12,
        tuning: str = "et",
    ) -> str:
        """
        Resolve a chord to concrete steps and frequencies.

        An unknown chord type is not an error: the result is an empty chord.

        Args:
            root: Root step (wraps modulo the division)
            chord_type: Chord formula name (e.g. 'Major', 'Supermajor')
            division: Steps per octave
            tuning: 'et' or 'ji'

        Returns:
            JSON string with steps, labels, frequencies and, in JI, the
            deviation of each tone from its equal-tempered step in cents

        Example:
            tuning_resolve_chord(root=0, chord_type="Major", division=12, tuning="ji")
        """
        try:
            chord = catalog.resolve_chord(root, chord_type, division, tuning)
            names = catalog.note_names(division)
            result: dict[str, Any] = {
                "status": "success",
                "chord": chord.to_dict(),
                "note_names": [names[step] for step in chord.steps],
                "empty": chord.is_empty,
            }
            if chord.tuning is TuningMode.JUST_INTONATION and not chord.is_empty:
                et_table = catalog.equal_temperament_table(division)
                result["cents_from_et"] = [
                    round(cents_between(et_table[note.step], note.frequency), 2)
                    for note in chord
                ]
            return json.dumps(result, ensure_ascii=False)
        except Exception as e:
            logger.exception("Failed to resolve chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_resolve_chord"] = tuning_resolve_chord

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_list_systems() -> str:
        """
        List the YAML tuning systems available from library and project.

        Returns:
            JSON string with system summaries

        Example:
            tuning_list_systems()
        """
        try:
            systems = catalog.loader.list_systems() if catalog.loader else []
            return json.dumps(
                {
                    "status": "success",
                    "systems": [s.model_dump() for s in systems],
                    "count": len(systems),
                }
            )
        except Exception as e:
            logger.exception("Failed to list tuning systems")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_list_systems"] = tuning_list_systems

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_describe_system(name: str) -> str:
        """
        Get a tuning system's full definition.

        Args:
            name: System name (e.g. 'edo-31')

        Returns:
            JSON string with the system's chords, ratios and labels

        Example:
            tuning_describe_system(name="edo-53")
        """
        try:
            system = catalog.loader.get_system(name) if catalog.loader else None
            if system is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.SYSTEM_NOT_FOUND.format(name=name)}
                )
            return json.dumps(
                {
                    "status": "success",
                    "system": system.to_yaml_dict(),
                    "chord_types": catalog.chord_formula_names(system.division),
                },
                ensure_ascii=False,
            )
        except Exception as e:
            logger.exception("Failed to describe tuning system")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_describe_system"] = tuning_describe_system

    return tools
