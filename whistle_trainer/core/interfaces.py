"""Defines the core interfaces for the Whistle Trainer application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from ..note_types import SampleFrame


class IAudioInput(ABC):
    """Interface for capture inputs feeding the detection cycle.

    Implementations deliver audio on their own thread and keep only the most
    recent frame; the detection cycle pulls it with ``latest_frame``.
    """

    @abstractmethod
    def start(self) -> None:
        """Start capturing audio.

        Raises:
            CaptureError: If the capture device cannot be opened
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing audio."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if audio is running."""
        pass

    @abstractmethod
    def latest_frame(self) -> Optional[SampleFrame]:
        """Return the most recent full frame, or None if none is available yet."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the audio stream."""
        pass
