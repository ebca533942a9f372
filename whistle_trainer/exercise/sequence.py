import random
from dataclasses import replace
from typing import List, Optional, Tuple

from ..core.config import ExerciseSettings
from ..core.events import TrainerEvents
from ..errors import NoEnabledNotesError
from ..logger import get_logger
from ..note_types import MatchResult, NoteName, TargetNote

# Get logger for this module
logger = get_logger(__name__)


class TargetSequenceGenerator:
    """Draws target sequences from the currently enabled notes."""

    def __init__(self, settings: ExerciseSettings, rng: Optional[random.Random] = None):
        self._settings = settings
        self._rng = rng or random.Random()

    @property
    def settings(self) -> ExerciseSettings:
        return self._settings

    def generate(self) -> List[TargetNote]:
        """Pick ``consecutive_notes`` notes uniformly at random, with replacement.

        Raises:
            NoEnabledNotesError: If no note is enabled
        """
        available = self._settings.available_notes()
        if not available:
            raise NoEnabledNotesError()

        length = self._settings.consecutive_notes
        sequence = [TargetNote(self._rng.choice(available)) for _ in range(length)]
        names = " ".join(str(t.note) for t in sequence)
        logger.info(f"New target notes generated: {names}")
        return sequence


class SequenceMatcher:
    """
    Matches detected notes against the target sequence in order and keeps
    the score.

    The cursor is the first unplayed note. A detected note equal to the
    cursor note marks it played and scores a point; anything else is
    rejected without changing state. Completing the sequence replaces it
    with a freshly generated one.
    """

    def __init__(self, generator: TargetSequenceGenerator, events: Optional[TrainerEvents] = None):
        self._generator = generator
        self._events = events or TrainerEvents()
        self._sequence: List[TargetNote] = []
        self._score = 0

    @property
    def events(self) -> TrainerEvents:
        return self._events

    @property
    def score(self) -> int:
        return self._score

    @property
    def sequence(self) -> Tuple[TargetNote, ...]:
        return tuple(self._sequence)

    @property
    def cursor(self) -> Optional[int]:
        """Index of the first unplayed note, or None if there is none."""
        for index, target in enumerate(self._sequence):
            if not target.played:
                return index
        return None

    @property
    def is_complete(self) -> bool:
        return self.cursor is None

    def regenerate(self) -> Tuple[TargetNote, ...]:
        """Replace the current sequence with a new one.

        Raises:
            NoEnabledNotesError: If no note is enabled; the current sequence is kept
        """
        self._sequence = self._generator.generate()
        self._events.emit_sequence_changed(self._sequence)
        return self.sequence

    def submit(self, note: NoteName) -> MatchResult:
        """Offer a detected note to the matcher."""
        index = self.cursor
        if index is None or self._sequence[index].note != note:
            expected = self._sequence[index].note if index is not None else None
            logger.debug(f"Incorrect or out of order note: {note} (expected {expected})")
            self._events.emit_note_rejected(note, expected)
            return MatchResult.REJECTED

        self._sequence[index] = replace(self._sequence[index], played=True)
        self._score += 1
        logger.info(f"Correct note {note}, score {self._score}")
        self._events.emit_score_changed(self._score)
        self._events.emit_sequence_changed(self._sequence)

        if not self.is_complete:
            return MatchResult.MATCHED

        try:
            self.regenerate()
        except NoEnabledNotesError as e:
            # The completed sequence stays until a later regenerate() succeeds
            logger.error(f"Could not generate new targets: {e}")
            self._events.emit_error(e)
        return MatchResult.COMPLETED

    def reset(self) -> None:
        """Clear the sequence and the score."""
        self._sequence = []
        self._score = 0
        self._events.emit_sequence_changed(self._sequence)
        self._events.emit_score_changed(self._score)
