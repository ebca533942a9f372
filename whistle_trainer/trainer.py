"""Practice trainer tying capture, the detection cycle and the timer together."""

from __future__ import annotations

import random
import threading
from typing import Callable, ClassVar, Optional, Tuple

from .core.config import ExerciseSettings
from .core.events import TrainerEvents
from .core.interfaces import IAudioInput
from .detection import FrequencySmoother, VolumeGate, YinPitchEstimator
from .errors import CaptureError, NoEnabledNotesError
from .exercise import SequenceMatcher, TargetSequenceGenerator
from .logger import get_logger
from .note_types import CycleReport, TargetNote
from .session import PracticeSession
from .timer import RepeatingTask

logger = get_logger(__name__)


class PracticeTrainer:
    """Runs practice sessions against a capture input.

    ``start`` opens the capture input, then a new PracticeSession with its
    first targets, and arms a timer that runs one detection cycle
    per ``interval``. ``stop`` halts the timer, waits for any cycle in
    flight, discards its result and drops the session.
    """

    DETECTION_INTERVAL: ClassVar[float] = 0.1  # Seconds between detection cycles

    def __init__(
        self,
        audio_input: IAudioInput,
        settings: Optional[ExerciseSettings] = None,
        interval: float = DETECTION_INTERVAL,
        estimator_factory: Callable[[], YinPitchEstimator] = YinPitchEstimator,
        gate_factory: Callable[[], VolumeGate] = VolumeGate,
        smoother_factory: Callable[[], FrequencySmoother] = FrequencySmoother,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the trainer.

        Args:
            audio_input: Capture input delivering the most recent frame
            settings: Enabled notes and sequence length, read at generation time
            interval: Seconds between detection cycles
            estimator_factory: Builds the pitch estimator for each session
            gate_factory: Builds the volume gate for each session
            smoother_factory: Builds the frequency smoother for each session
            rng: Random source for target generation
        """
        self._audio_input = audio_input
        self._settings = settings or ExerciseSettings()
        self._interval = interval
        self._estimator_factory = estimator_factory
        self._gate_factory = gate_factory
        self._smoother_factory = smoother_factory
        self._rng = rng or random.Random()

        self.events = TrainerEvents()
        self._session: Optional[PracticeSession] = None
        self._timer: Optional[RepeatingTask] = None
        self._cycle_lock = threading.RLock()

    @property
    def settings(self) -> ExerciseSettings:
        return self._settings

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._session is not None

    @property
    def score(self) -> int:
        return self._session.score if self._session else 0

    @property
    def sequence(self) -> Tuple[TargetNote, ...]:
        return self._session.sequence if self._session else ()

    @property
    def last_report(self) -> Optional[CycleReport]:
        return self._session.last_report if self._session else None

    @property
    def session(self) -> Optional[PracticeSession]:
        return self._session

    def start(self) -> None:
        """Start a practice session.

        Raises:
            NoEnabledNotesError: If no note is enabled
            CaptureError: If the capture input cannot be opened
        """
        if self._session is not None:
            logger.warning("Practice session already running")
            return

        generator = TargetSequenceGenerator(self._settings, self._rng)
        session = PracticeSession(
            generator,
            estimator=self._estimator_factory(),
            gate=self._gate_factory(),
            smoother=self._smoother_factory(),
            matcher=SequenceMatcher(generator, self.events),
        )
        # Nothing is opened or emitted if no notes are enabled
        if not self._settings.available_notes():
            raise NoEnabledNotesError()

        try:
            self._audio_input.start()
        except CaptureError as e:
            logger.error(f"Error accessing audio input: {e}")
            raise

        # First targets go out only once capture is running
        try:
            session.begin()
        except NoEnabledNotesError:
            self._audio_input.stop()
            raise

        self._session = session
        self._timer = RepeatingTask(self._interval, self.tick, name="detection-cycle")
        self._timer.start()
        logger.info("Recording started")

    def stop(self) -> None:
        """Stop the session. No partial state survives into the next one."""
        session = self._session
        if session is None:
            return

        session.cancel()
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self._audio_input.stop()

        with self._cycle_lock:
            self._session = None
            session.end()
        logger.info("Recording stopped")

    def tick(self) -> Optional[CycleReport]:
        """Run one detection cycle on the most recent captured frame.

        Called by the timer; may also be called directly. Returns None when
        there is no session or no frame yet.
        """
        with self._cycle_lock:
            session = self._session
            if session is None:
                return None
            frame = self._audio_input.latest_frame()
            if frame is None:
                logger.debug("No audio frame available yet")
                return None
            return session.process_frame(frame)
