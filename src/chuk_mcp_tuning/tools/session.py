"""
Session tools - MCP tools for the current selection.

Tools for reading and changing a session's division, tuning, root and
chord type. Every change returns the resolved chord so the caller can
highlight the active steps.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.constants import SuccessMessages
from chuk_mcp_tuning.session import DEFAULT_SESSION, SessionManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_session_tools(
    mcp: ChukMCPServer,
    sessions: SessionManager,
) -> dict[str, Any]:
    """
    Register selection tools with the MCP server.

    Args:
        mcp: The MCP server instance
        sessions: The session manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def _snapshot(session: str) -> dict[str, Any]:
        selection = sessions.get(session)
        chord = sessions.resolve(session)
        catalog = sessions.catalog
        return {
            "session": session,
            "selection": selection.to_dict(),
            "note_names": catalog.note_names(selection.division),
            "chord_types": catalog.chord_formula_names(selection.division),
            "frequencies": [
                round(f, 4) for f in catalog.frequency_table(selection.division, selection.tuning)
            ],
            "active_steps": chord.steps,
        }

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_get_selection(session: str = DEFAULT_SESSION) -> str:
        """
        Get a session's selection with everything needed to display it.

        Args:
            session: Session name (default: 'default')

        Returns:
            JSON string with selection, labels, chord types, frequencies
            and active steps

        Example:
            tuning_get_selection()
        """
        try:
            return json.dumps({"status": "success", **_snapshot(session)}, ensure_ascii=False)
        except Exception as e:
            logger.exception("Failed to get selection")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_get_selection"] = tuning_get_selection

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_select(
        session: str = DEFAULT_SESSION,
        division: int | None = None,
        tuning: str | None = None,
        root: int | None = None,
        chord_type: str | None = None,
    ) -> str:
        """
        Change part of a session's selection.

        Changing the division resets the root to step 0 and the chord type
        to the first one available, unless given in the same call.

        Args:
            session: Session name
            division: Steps per octave
            tuning: 'et' or 'ji'
            root: Root step
            chord_type: Chord formula name

        Returns:
            JSON string with the updated selection and active steps

        Example:
            tuning_select(division=31, root=0, chord_type="Supermajor")
        """
        try:
            sessions.select(
                session,
                division=division,
                tuning=tuning,
                root=root,
                chord_type=chord_type,
            )
            return json.dumps(
                {
                    "status": "success",
                    **_snapshot(session),
                    "message": SuccessMessages.SELECTION_UPDATED.format(session=session),
                },
                ensure_ascii=False,
            )
        except Exception as e:
            logger.exception("Failed to update selection")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_select"] = tuning_select

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_reset_selection(session: str = DEFAULT_SESSION) -> str:
        """
        Reset a session to 12-EDO, equal temperament, C Major.

        Args:
            session: Session name

        Returns:
            JSON string with the reset selection

        Example:
            tuning_reset_selection()
        """
        try:
            sessions.reset(session)
            return json.dumps({"status": "success", **_snapshot(session)}, ensure_ascii=False)
        except Exception as e:
            logger.exception("Failed to reset selection")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_reset_selection"] = tuning_reset_selection

    return tools
