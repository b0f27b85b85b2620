"""
chuk-mcp-tuning - microtonal chords in equal temperament and just intonation.

Computes note names, frequency tables and chord voicings for equal
divisions of the octave (12, 19, 24, 31 and custom systems), and renders
them as playable tones.
"""

__version__ = "0.1.0"
