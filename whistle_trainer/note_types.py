"""Type definitions for the Whistle Trainer project."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

# Pitch class names in semitone order, starting at C
SHARP_NOTES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

ENHARMONIC_TO_SHARP = {
    "Ab": "G#",
    "Bb": "A#",
    "Cb": "B",
    "Db": "C#",
    "Eb": "D#",
    "Fb": "E",
    "Gb": "F#",
    "E#": "F",
    "B#": "C",
}

# Note name (A-G, case insensitive), optional accidental, signed octave
NOTE_PATTERN = re.compile(r"^([A-Ga-g])([#b]?)(-?[0-9]+)$")


@dataclass(frozen=True)
class SampleFrame:
    """A fixed-length block of mono time-domain samples.

    The samples are copied into a read-only float64 array on construction.
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"Sample frame must be 1-D, got shape {samples.shape}")
        if self.sample_rate <= 0:
            raise ValueError("Sample rate must be positive")
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True, order=True)
class NoteName:
    """A pitch class paired with an octave in scientific pitch notation."""

    midi_number: int = field(compare=True)

    @classmethod
    def from_parts(cls, pitch_class: str, octave: int) -> "NoteName":
        if pitch_class not in SHARP_NOTES:
            raise ValueError(f"Unknown pitch class: {pitch_class!r}")
        return cls((octave + 1) * 12 + SHARP_NOTES.index(pitch_class))

    @classmethod
    def parse(cls, text: str) -> "NoteName":
        """Parse a note such as 'F#5', 'Bb4' or 'c6'.

        Flats are normalized to their sharp equivalents; B# and E# roll over
        to the natural above, so 'B#4' is the same note as 'C5'.
        """
        match = NOTE_PATTERN.match(str(text).strip())
        if not match:
            raise ValueError(f"Invalid note name: {text!r}")
        letter, accidental, octave = match.groups()
        name = letter.upper() + accidental
        octave = int(octave)
        if name in ENHARMONIC_TO_SHARP:
            sharp = ENHARMONIC_TO_SHARP[name]
            # Cb belongs to the octave below, B# to the octave above
            if name == "Cb":
                octave -= 1
            elif name == "B#":
                octave += 1
            name = sharp
        return cls.from_parts(name, octave)

    @property
    def pitch_class(self) -> str:
        return SHARP_NOTES[self.midi_number % 12]

    @property
    def octave(self) -> int:
        return self.midi_number // 12 - 1

    def __str__(self) -> str:
        return f"{self.pitch_class}{self.octave}"

    def __repr__(self) -> str:
        return f"NoteName('{self}')"


@dataclass(frozen=True)
class TargetNote:
    """One entry of a target sequence."""

    note: NoteName
    played: bool = False

    def __str__(self):
        return f"{self.note}{'✓' if self.played else ''}"


class MatchResult(Enum):
    """Outcome of offering a detected note to the sequence matcher."""

    MATCHED = "matched"
    COMPLETED = "completed"  # Matched the last note; a new sequence was generated
    REJECTED = "rejected"


@dataclass
class CycleReport:
    """Telemetry for one detection cycle. Observational only."""

    active: bool
    frequency: int = 0  # Smoothed frequency in Hz, rounded
    note: str = ""  # Detected note name, or empty
    match: Optional[MatchResult] = None
    message: str = ""
