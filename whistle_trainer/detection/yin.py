"""Fundamental frequency estimation with the YIN difference-function method."""

from __future__ import annotations

from typing import ClassVar, Optional, TypeAlias

import numpy as np

from ..logger import get_logger
from ..note_types import SampleFrame

logger = get_logger(__name__)


class YinPitchEstimator:
    """Estimates the fundamental frequency of a monophonic frame.

    The frame is compared against delayed copies of itself over lags in
    ``[0, L/2)``. The first lag whose cumulative-mean-normalized difference
    falls under the threshold is followed down to the bottom of its dip,
    refined by parabolic interpolation and converted to Hz.
    """

    # Type aliases
    Frequency: TypeAlias = float

    DEFAULT_THRESHOLD: ClassVar[float] = 0.1
    MIN_FREQUENCY: ClassVar[Frequency] = 50.0  # Hz - lowest plausible fundamental
    MAX_FREQUENCY: ClassVar[Frequency] = 1600.0  # Hz - upper end of the tin whistle
    MIN_TAU: ClassVar[int] = 2

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        min_frequency: float = MIN_FREQUENCY,
        max_frequency: float = MAX_FREQUENCY,
    ) -> None:
        """Initialize the estimator.

        Args:
            threshold: Absolute threshold on the normalized difference (0.0 to 1.0)
            min_frequency: Lowest frequency accepted, in Hz
            max_frequency: Highest frequency accepted, in Hz
        """
        if not 0.0 < threshold < 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0")
        if not 0 < min_frequency < max_frequency:
            raise ValueError("min_frequency must be positive and below max_frequency")
        self._threshold = threshold
        self._min_frequency = min_frequency
        self._max_frequency = max_frequency

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def min_frequency(self) -> float:
        return self._min_frequency

    @property
    def max_frequency(self) -> float:
        return self._max_frequency

    def estimate(self, frame: SampleFrame) -> Optional[Frequency]:
        """Estimate the fundamental frequency of a frame.

        Args:
            frame: Time-domain samples and their sample rate

        Returns:
            The frequency in Hz, or None if no pitch was found or the
            candidate lies outside the accepted range
        """
        cmnd = self.normalized_difference(frame.samples)
        tau = self._find_tau(cmnd)
        if tau is None:
            logger.debug("No lag below threshold")
            return None

        exact_tau = self.parabolic_interpolation(cmnd, tau)
        if exact_tau <= 0:
            return None
        f0 = frame.sample_rate / exact_tau

        if self._min_frequency <= f0 <= self._max_frequency:
            return float(f0)

        logger.debug(
            f"Candidate {f0:.1f}Hz outside range "
            f"{self._min_frequency:.0f}-{self._max_frequency:.0f}Hz"
        )
        return None

    @staticmethod
    def difference(samples: np.ndarray) -> np.ndarray:
        """d[tau] = sum over i < L/2 of (x[i] - x[i + tau])^2, for tau in [0, L/2).

        Each sum is accumulated strictly left to right (``cumsum`` rather
        than ``dot``/``sum``), so results are bit-identical across builds.
        """
        x = np.asarray(samples, dtype=np.float64)
        half = len(x) // 2
        d = np.zeros(half, dtype=np.float64)
        if half == 0:
            return d
        head = x[:half]
        for tau in range(1, half):
            delta = head - x[tau : tau + half]
            d[tau] = np.cumsum(delta * delta)[-1]
        return d

    @classmethod
    def normalized_difference(cls, samples: np.ndarray) -> np.ndarray:
        """Cumulative mean normalized difference d'[tau].

        d'[0] is 1; where the running sum is still zero (e.g. a constant
        signal) d' is also 1 so those lags never pass the threshold.
        """
        d = cls.difference(samples)
        cmnd = np.ones_like(d)
        if len(d) < 2:
            return cmnd
        running_sum = np.cumsum(d[1:])
        taus = np.arange(1, len(d), dtype=np.float64)
        nonzero = running_sum > 0
        cmnd[1:][nonzero] = d[1:][nonzero] * taus[nonzero] / running_sum[nonzero]
        return cmnd

    def _find_tau(self, cmnd: np.ndarray) -> Optional[int]:
        """First lag under the threshold, advanced to the bottom of its dip."""
        below = np.flatnonzero(cmnd[self.MIN_TAU :] < self._threshold)
        if below.size == 0:
            return None
        tau = int(below[0]) + self.MIN_TAU
        while tau + 1 < len(cmnd) and cmnd[tau + 1] < cmnd[tau]:
            tau += 1
        return tau

    @staticmethod
    def parabolic_interpolation(values: np.ndarray, x: int) -> float:
        """Refine an integer minimum to sub-sample precision.

        Neighbours outside ``(0, len(values))`` are clamped to ``x`` itself.
        """
        x0 = x - 1 if x - 1 > 0 else x
        x2 = x + 1 if x + 1 < len(values) else x
        denominator = 2 * (2 * values[x] - values[x0] - values[x2])
        if denominator == 0:
            return float(x)
        return float(x + (values[x2] - values[x0]) / denominator)
