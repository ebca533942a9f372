"""Utility functions for working with musical notes and frequencies."""

import math

import numpy as np

from .note_types import NoteName

A4_FREQUENCY = 440.0
A4_MIDI_NUMBER = 69  # C-1 is 0, so C4 (middle C) is 60


def frequency_to_note(frequency: float, tuning: float = A4_FREQUENCY) -> NoteName:
    """Map a frequency to the nearest note in 12-tone equal temperament.

    Args:
        frequency: Frequency in Hz, positive and finite
        tuning: Reference frequency of A4 in Hz

    Returns:
        The nearest NoteName, e.g. 440 Hz -> A4, 523.25 Hz -> C5

    Raises:
        ValueError: If frequency is not a positive finite number
    """
    if not isinstance(frequency, (int, float, np.floating)) or not math.isfinite(frequency):
        raise ValueError(f"Invalid frequency value: {frequency}")
    if frequency <= 0:
        raise ValueError(f"Frequency must be positive, got {frequency}")

    half_steps = round(12 * np.log2(frequency / tuning))
    return NoteName(A4_MIDI_NUMBER + int(half_steps))


def note_to_frequency(note: NoteName, tuning: float = A4_FREQUENCY) -> float:
    """Return the equal-tempered frequency of a note in Hz."""
    return tuning * 2.0 ** ((note.midi_number - A4_MIDI_NUMBER) / 12.0)
