"""
Session manager - owns the selection state for each session.

Each event (select a division, pick a root, switch tuning) is a single
read-modify-write of one session's Selection. The catalog is consulted to
keep the chord type valid when the division changes.
"""

from __future__ import annotations

import logging

from chuk_mcp_tuning.catalog import TuningCatalog
from chuk_mcp_tuning.constants import DEFAULT_DIVISION, TuningMode
from chuk_mcp_tuning.core import ResolvedChord, validate_division
from chuk_mcp_tuning.models.session import Selection

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class SessionManager:
    """
    In-memory store of selections keyed by session name.

    Selections are immutable; every update replaces the stored value.
    """

    def __init__(self, catalog: TuningCatalog):
        """
        Initialize the manager.

        Args:
            catalog: Catalog used to look up chord formulas per division
        """
        self.catalog = catalog
        self._sessions: dict[str, Selection] = {}

    def get(self, session: str = DEFAULT_SESSION) -> Selection:
        """Get a session's selection, creating the default one on first use."""
        if session not in self._sessions:
            self._sessions[session] = self._initial_selection(DEFAULT_DIVISION)
        return self._sessions[session]

    def select(
        self,
        session: str = DEFAULT_SESSION,
        division: int | None = None,
        tuning: TuningMode | str | None = None,
        root: int | None = None,
        chord_type: str | None = None,
    ) -> Selection:
        """
        Update part of a session's selection.

        Changing the division rebuilds the selection for that division:
        root back to 0 and chord type back to the first available formula,
        unless new values are given in the same call.

        Returns:
            The new selection
        """
        current = self.get(session)

        if division is not None and division != current.division:
            validate_division(division)
            current = self._initial_selection(division, current.tuning)
            logger.debug(f"Session '{session}' switched to {division}-EDO")

        updated = current.with_changes(
            tuning=TuningMode.parse(tuning) if tuning is not None else None,
            root=root,
            chord_type=chord_type,
        )
        self._sessions[session] = updated
        return updated

    def reset(self, session: str = DEFAULT_SESSION) -> Selection:
        """Return a session to the default selection."""
        self._sessions[session] = self._initial_selection(DEFAULT_DIVISION)
        return self._sessions[session]

    def remove(self, session: str) -> bool:
        """Forget a session. Returns False if it did not exist."""
        return self._sessions.pop(session, None) is not None

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def resolve(self, session: str = DEFAULT_SESSION) -> ResolvedChord:
        """Resolve the chord currently selected in a session."""
        selection = self.get(session)
        return self.catalog.resolve_chord(
            selection.root,
            selection.chord_type or "",
            selection.division,
            selection.tuning,
        )

    def _initial_selection(
        self,
        division: int,
        tuning: TuningMode = TuningMode.EQUAL_TEMPERAMENT,
    ) -> Selection:
        names = self.catalog.chord_formula_names(division)
        return Selection(
            division=division,
            tuning=tuning,
            root=0,
            chord_type=names[0] if names else None,
        )
