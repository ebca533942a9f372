"""Volume gate deciding whether a frame is loud enough to analyze."""

from typing import ClassVar

import numpy as np

from ..logger import get_logger
from ..note_types import SampleFrame

logger = get_logger(__name__)


def compute_rms(samples: np.ndarray) -> float:
    """Root-mean-square amplitude of a block of samples."""
    if len(samples) == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(samples))))


class VolumeGate:
    """Classifies frames as active or silent by RMS level."""

    DEFAULT_THRESHOLD: ClassVar[float] = 0.01  # On a [-1, 1] normalized scale

    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        if threshold < 0:
            raise ValueError("Volume threshold must not be negative")
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def is_active(self, frame: SampleFrame) -> bool:
        """Return True if the frame's RMS reaches the threshold."""
        rms = compute_rms(frame.samples)
        active = rms >= self._threshold
        if not active:
            logger.debug(f"Signal too weak: rms={rms:.4f} < {self._threshold}")
        return active
