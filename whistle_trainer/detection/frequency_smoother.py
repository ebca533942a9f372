from collections import deque
from typing import Deque, Optional, Tuple

from ..logger import get_logger

logger = get_logger(__name__)


class FrequencySmoother:
    """
    Keeps a short rolling history of accepted frequency estimates and
    reports their arithmetic mean.
    """

    def __init__(self, history_size: int = 5):
        if history_size < 1:
            raise ValueError("history_size must be at least 1")
        self._history: Deque[float] = deque(maxlen=history_size)

    def add(self, frequency: float) -> float:
        """Append an estimate, evicting the oldest when full, and return the new mean."""
        self._history.append(float(frequency))
        return self.average

    def clear(self) -> None:
        """Forget all estimates, e.g. after silence."""
        if self._history:
            logger.debug(f"Clearing frequency history ({len(self._history)} readings)")
        self._history.clear()

    @property
    def average(self) -> Optional[float]:
        if not self._history:
            return None
        return sum(self._history) / len(self._history)

    @property
    def history(self) -> Tuple[float, ...]:
        return tuple(self._history)

    @property
    def history_size(self) -> int:
        return self._history.maxlen

    def __len__(self) -> int:
        return len(self._history)
