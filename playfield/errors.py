"""
Exceptions raised by the harness.
"""


class PlayfieldError(Exception):
    """Base class for harness errors."""


class MarshalError(PlayfieldError):
    """A task could not be run on the UI thread (stopped, timed out, or the task raised)."""
