"""Target sequences and in-order matching."""

from .sequence import SequenceMatcher, TargetSequenceGenerator

__all__ = ["SequenceMatcher", "TargetSequenceGenerator"]
