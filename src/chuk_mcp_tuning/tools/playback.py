"""
Playback tools - MCP tools that render chords and notes as tones.

Each tool returns the tone plan (frequency, waveform, gain, duration per
voice) and writes a MIDI file with per-voice pitch bend.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.constants import ErrorMessages, SuccessMessages
from chuk_mcp_tuning.playback import plan_chord, plan_step, tones_to_midi
from chuk_mcp_tuning.session import DEFAULT_SESSION, SessionManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_playback_tools(
    mcp: ChukMCPServer,
    sessions: SessionManager,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register playback tools with the MCP server.

    Args:
        mcp: The MCP server instance
        sessions: The session manager
        output_dir: Directory for MIDI output

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def _write_midi(tones: list, filename: str) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"{filename}.mid"
        tones_to_midi(tones).save(str(output_path))
        return output_path

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_play_chord(
        session: str = DEFAULT_SESSION,
        root: int | None = None,
        chord_type: str | None = None,
        division: int | None = None,
        tuning: str | None = None,
        output_name: str | None = None,
    ) -> str:
        """
        Play a chord: plan its tones and render them to MIDI.

        Any argument given updates the session's selection first, so the
        played chord is always the selected one.

        Args:
            session: Session name
            root: Root step
            chord_type: Chord formula name
            division: Steps per octave
            tuning: 'et' or 'ji'
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with the tone plan and MIDI path, or an error when
            the chord has nothing to play

        Example:
            tuning_play_chord(root=0, chord_type="Major", tuning="ji")
        """
        try:
            selection = sessions.select(
                session,
                division=division,
                tuning=tuning,
                root=root,
                chord_type=chord_type,
            )
            chord = sessions.resolve(session)
            tones = plan_chord(chord)
            if not tones:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NOTHING_TO_PLAY.format(
                            chord_type=selection.chord_type, division=selection.division
                        ),
                        "active_steps": [],
                    }
                )

            filename = output_name or (
                f"{session}_{selection.division}edo_{selection.root}_"
                f"{(selection.chord_type or '').replace(' ', '_')}_{selection.tuning.value}"
            )
            output_path = _write_midi(tones, filename)

            return json.dumps(
                {
                    "status": "success",
                    "chord": chord.to_dict(),
                    "active_steps": chord.steps,
                    "tones": [t.to_dict() for t in tones],
                    "path": str(output_path),
                    "message": SuccessMessages.CHORD_RENDERED.format(
                        chord=selection.chord_type, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to play chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_play_chord"] = tuning_play_chord

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_play_note(
        step: int,
        session: str = DEFAULT_SESSION,
        output_name: str | None = None,
    ) -> str:
        """
        Play a single step of the session's division.

        Uses the session's tuning: equal temperament, or the approximate
        just-intonation table shown for display.

        Args:
            step: Step to play (wraps modulo the division)
            session: Session name
            output_name: Optional output filename (without .mid extension)

        Returns:
            JSON string with the tone and MIDI path

        Example:
            tuning_play_note(step=7)
        """
        try:
            selection = sessions.get(session)
            tones = plan_step(selection.division, step, selection.tuning)
            if not tones:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_STEP.format(step=step)}
                )
            note_step = tones[0].step
            filename = output_name or (
                f"{session}_{selection.division}edo_step{note_step}_{selection.tuning.value}"
            )
            output_path = _write_midi(tones, filename)
            return json.dumps(
                {
                    "status": "success",
                    "step": note_step,
                    "name": sessions.catalog.note_names(selection.division)[note_step],
                    "tones": [t.to_dict() for t in tones],
                    "path": str(output_path),
                },
                ensure_ascii=False,
            )
        except Exception as e:
            logger.exception("Failed to play note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_play_note"] = tuning_play_note

    return tools
