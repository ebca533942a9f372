"""Whistle Trainer: pitch detection and note-sequence practice for the tin whistle."""

__version__ = "0.1.0"
