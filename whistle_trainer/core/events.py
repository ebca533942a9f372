"""Event system for Whistle Trainer components."""

from typing import Dict, List, Callable, Any, Optional, Sequence
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class TrainerEventType(Enum):
    """Event types emitted during a practice session."""

    SEQUENCE_CHANGED = auto()
    NOTE_REJECTED = auto()
    SCORE_CHANGED = auto()
    CYCLE_COMPLETED = auto()
    ERROR = auto()


class EventEmitter:
    """Event emitter for Whistle Trainer components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a previously registered callback."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Args:
            event_type: Event type to emit
            *args: Positional arguments to pass to listeners
            **kwargs: Keyword arguments to pass to listeners
        """
        if event_type not in self._listeners:
            return

        for callback in list(self._listeners[event_type]):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class TrainerEvents:
    """Typed wrapper around EventEmitter for practice-session events."""

    def __init__(self):
        """Initialize the trainer events."""
        self._emitter = EventEmitter()

    def on_sequence_changed(self, callback: Callable) -> None:
        """Register a callback receiving the current target sequence.

        The callback gets a tuple of TargetNote snapshots; an empty tuple
        means the sequence was cleared.
        """
        self._emitter.on(TrainerEventType.SEQUENCE_CHANGED, callback)

    def emit_sequence_changed(self, sequence: Sequence) -> None:
        self._emitter.emit(TrainerEventType.SEQUENCE_CHANGED, tuple(sequence))

    def on_note_rejected(self, callback: Callable) -> None:
        """Register a callback for incorrect or out-of-order notes.

        Args:
            callback: Called with the detected note and the expected note (or None)
        """
        self._emitter.on(TrainerEventType.NOTE_REJECTED, callback)

    def emit_note_rejected(self, detected, expected: Optional[Any]) -> None:
        self._emitter.emit(TrainerEventType.NOTE_REJECTED, detected, expected)

    def on_score_changed(self, callback: Callable) -> None:
        self._emitter.on(TrainerEventType.SCORE_CHANGED, callback)

    def emit_score_changed(self, score: int) -> None:
        self._emitter.emit(TrainerEventType.SCORE_CHANGED, score)

    def on_cycle_completed(self, callback: Callable) -> None:
        """Register a callback receiving the CycleReport of every detection cycle."""
        self._emitter.on(TrainerEventType.CYCLE_COMPLETED, callback)

    def emit_cycle_completed(self, report) -> None:
        self._emitter.emit(TrainerEventType.CYCLE_COMPLETED, report)

    def on_error(self, callback: Callable) -> None:
        self._emitter.on(TrainerEventType.ERROR, callback)

    def emit_error(self, error: Exception) -> None:
        self._emitter.emit(TrainerEventType.ERROR, error)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
