"""One practice session: the state that lives from start to stop."""

from __future__ import annotations

from typing import Optional

from .detection import FrequencySmoother, VolumeGate, YinPitchEstimator
from .exercise import SequenceMatcher, TargetSequenceGenerator
from .logger import get_logger
from .note_types import CycleReport, MatchResult, SampleFrame
from .note_utils import frequency_to_note

logger = get_logger(__name__)

MESSAGES = {
    MatchResult.MATCHED: "Correct! Note {note} marked as played.",
    MatchResult.COMPLETED: "All notes played correctly! New targets generated.",
    MatchResult.REJECTED: "Incorrect or out of order. Try again!",
}


class PracticeSession:
    """Owns the frequency history, target sequence and score of one session.

    ``process_frame`` runs one detection cycle:
    volume gate -> pitch estimator -> smoother -> note mapper -> matcher.
    A session is created on start and thrown away on stop, so nothing
    carries over into the next one.
    """

    def __init__(
        self,
        generator: TargetSequenceGenerator,
        estimator: Optional[YinPitchEstimator] = None,
        gate: Optional[VolumeGate] = None,
        smoother: Optional[FrequencySmoother] = None,
        matcher: Optional[SequenceMatcher] = None,
    ) -> None:
        self._estimator = estimator or YinPitchEstimator()
        self._gate = gate or VolumeGate()
        self._smoother = smoother or FrequencySmoother()
        self._matcher = matcher or SequenceMatcher(generator)
        self._active = False
        self.last_report: Optional[CycleReport] = None

    @property
    def matcher(self) -> SequenceMatcher:
        return self._matcher

    @property
    def smoother(self) -> FrequencySmoother:
        return self._smoother

    @property
    def events(self):
        return self._matcher.events

    @property
    def score(self) -> int:
        return self._matcher.score

    @property
    def sequence(self):
        return self._matcher.sequence

    @property
    def is_active(self) -> bool:
        return self._active

    def begin(self) -> None:
        """Generate the first target sequence and accept cycles.

        Raises:
            NoEnabledNotesError: If no note is enabled
        """
        self._matcher.regenerate()
        self._active = True
        logger.info("Practice session started")

    def cancel(self) -> None:
        """Stop accepting cycles; a cycle already running discards its result."""
        self._active = False

    def end(self) -> None:
        """Stop accepting cycles and drop history, sequence and score."""
        self._active = False
        self._smoother.clear()
        self._matcher.reset()
        self.last_report = None
        logger.info("Practice session ended")

    def process_frame(self, frame: SampleFrame) -> Optional[CycleReport]:
        """Run one detection cycle over a frame.

        Returns:
            The cycle's telemetry, or None if the session is not active
        """
        if not self._active:
            return None

        if not self._gate.is_active(frame):
            self._smoother.clear()
            report = CycleReport(active=False, message="Volume below threshold")
            return self._finish(report)

        frequency = self._estimator.estimate(frame)
        if frequency is None:
            report = CycleReport(active=True, message="No pitch detected")
            return self._finish(report)

        average = self._smoother.add(frequency)
        note = frequency_to_note(average)
        logger.debug(f"Detected {note} ({average:.1f}Hz, raw {frequency:.1f}Hz)")

        if not self._active:
            # Stopped while estimating; the result is discarded
            return None
        result = self._matcher.submit(note)
        report = CycleReport(
            active=True,
            frequency=int(round(average)),
            note=str(note),
            match=result,
            message=MESSAGES[result].format(note=note),
        )
        return self._finish(report)

    def _finish(self, report: CycleReport) -> CycleReport:
        self.last_report = report
        self._matcher.events.emit_cycle_completed(report)
        return report
