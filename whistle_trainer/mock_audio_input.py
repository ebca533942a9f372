from collections import deque
from typing import Deque, Iterable, Optional

import numpy as np

from .core.interfaces import IAudioInput
from .errors import CaptureError
from .note_types import SampleFrame


class MockAudioInput(IAudioInput):
    """A scripted capture input for unit tests and offline runs.

    Frames queued with ``push`` are handed out one per ``latest_frame`` call;
    once the queue is empty the last frame keeps being returned, like a
    microphone that holds its most recent window.
    """

    def __init__(self, sample_rate: int = 44100, fail_reason: Optional[str] = None):
        self._sample_rate = sample_rate
        self._fail_reason = fail_reason
        self._frames: Deque[SampleFrame] = deque()
        self._last: Optional[SampleFrame] = None
        self.is_started = False
        self.start_calls = 0

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def push(self, samples: np.ndarray) -> None:
        self._frames.append(SampleFrame(samples, self._sample_rate))

    def extend(self, frames: Iterable[np.ndarray]) -> None:
        for samples in frames:
            self.push(samples)

    def start(self) -> None:
        self.start_calls += 1
        if self._fail_reason:
            raise CaptureError(self._fail_reason)
        self.is_started = True

    def stop(self) -> None:
        self.is_started = False

    def is_running(self) -> bool:
        return self.is_started

    def latest_frame(self) -> Optional[SampleFrame]:
        if self._frames:
            self._last = self._frames.popleft()
        return self._last

    @property
    def pending(self) -> int:
        return len(self._frames)
