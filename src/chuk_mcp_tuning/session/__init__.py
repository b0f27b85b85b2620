"""
Session management - selection state per session.
"""

from chuk_mcp_tuning.session.manager import DEFAULT_SESSION, SessionManager

__all__ = [
    "DEFAULT_SESSION",
    "SessionManager",
]
