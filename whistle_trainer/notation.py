"""Text and ABC notation for target sequences.

These helpers belong to the display side: they consume the sequence emitted
with SEQUENCE_CHANGED and never feed back into matching.
"""

from typing import Dict, Iterable, Set

from .note_types import NoteName, TargetNote

# Sharps carried by each supported key signature
KEY_SHARPS: Dict[str, Set[str]] = {
    "C": set(),
    "G": {"F"},
    "D": {"F", "C"},
    "A": {"F", "C", "G"},
    "E": {"F", "C", "G", "D"},
}

ABC_MIDDLE_OCTAVE = 4  # ABC 'C' is C4; 'c' is C5


def format_text(sequence: Iterable[TargetNote]) -> str:
    """Render a sequence as e.g. 'D5✓ E5 F#5'."""
    return " ".join(str(target) for target in sequence)


def abc_note(note: NoteName, key: str = "D", octave_shift: int = 0) -> str:
    """Spell one note in ABC notation relative to a key signature.

    Args:
        note: The note to spell
        key: Major key whose signature applies
        octave_shift: Octaves added to the written pitch, e.g. -1 to write
            whistle parts an octave below sounding pitch
    """
    if key not in KEY_SHARPS:
        raise ValueError(f"Unsupported key: {key}")
    sharps = KEY_SHARPS[key]
    letter = note.pitch_class[0]
    is_sharp = note.pitch_class.endswith("#")

    if is_sharp:
        accidental = "" if letter in sharps else "^"
    else:
        accidental = "=" if letter in sharps else ""

    octave = note.octave + octave_shift
    if octave > ABC_MIDDLE_OCTAVE:
        body = letter.lower() + "'" * (octave - ABC_MIDDLE_OCTAVE - 1)
    else:
        body = letter.upper() + "," * (ABC_MIDDLE_OCTAVE - octave)
    return accidental + body


def to_abc(sequence: Iterable[TargetNote], key: str = "D", octave_shift: int = 0) -> str:
    """Render a sequence as an ABC tune body, marking played notes."""
    notes = []
    for target in sequence:
        spelled = abc_note(target.note, key, octave_shift)
        notes.append(f"!mark!{spelled}" if target.played else spelled)
    return f"L:1/4\nK:{key}\n" + " ".join(notes)
