"""Exceptions raised by Whistle Trainer components."""


class TrainerError(Exception):
    """Base class for trainer failures."""


class CaptureError(TrainerError):
    """The audio capture device could not be opened.

    The message is the failure reason shown to the user.
    """


class NoEnabledNotesError(TrainerError, ValueError):
    """A target sequence was requested while no notes are enabled."""

    def __init__(self, message: str = "No notes selected. Please select at least one note."):
        super().__init__(message)
