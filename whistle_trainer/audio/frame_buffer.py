"""Latest-frame hand-off between a capture thread and the detection cycle."""

import threading
from typing import Optional

import numpy as np

from ..note_types import SampleFrame


class FrameBuffer:
    """Rolling window over the most recent ``frame_size`` samples.

    One capture thread writes blocks of any size; the detection cycle reads
    the newest full window. Older audio is overwritten, never queued.
    """

    def __init__(self, frame_size: int, sample_rate: int):
        if frame_size < 2:
            raise ValueError("frame_size must be at least 2")
        self._frame_size = frame_size
        self._sample_rate = sample_rate
        self._window = np.zeros(frame_size, dtype=np.float64)
        self._filled = 0
        self._lock = threading.Lock()

    @property
    def frame_size(self) -> int:
        return self._frame_size

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, value: int) -> None:
        if value <= 0:
            raise ValueError("Sample rate must be positive")
        with self._lock:
            self._sample_rate = value
            self._window[:] = 0.0
            self._filled = 0

    def write(self, block: np.ndarray) -> None:
        """Append a block of mono samples (multi-channel blocks use channel 0)."""
        block = np.asarray(block, dtype=np.float64)
        if block.ndim > 1:
            block = block[:, 0]
        if block.size == 0:
            return
        block = block[-self._frame_size :]
        n = block.size
        with self._lock:
            self._window = np.roll(self._window, -n)
            self._window[-n:] = block
            self._filled = min(self._frame_size, self._filled + n)

    def latest(self) -> Optional[SampleFrame]:
        """The newest full window, or None until one has been captured."""
        with self._lock:
            if self._filled < self._frame_size:
                return None
            samples = self._window.copy()
            sample_rate = self._sample_rate
        return SampleFrame(samples, sample_rate)

    def clear(self) -> None:
        with self._lock:
            self._window[:] = 0.0
            self._filled = 0
