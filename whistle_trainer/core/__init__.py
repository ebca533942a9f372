"""Core components for the Whistle Trainer application."""

# Import interfaces for easier access
from .interfaces import IAudioInput
from .events import EventEmitter, TrainerEvents, TrainerEventType

__all__ = ["IAudioInput", "EventEmitter", "TrainerEvents", "TrainerEventType"]
