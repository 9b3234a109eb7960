"""Alignment grid: corner-marking of consistent phrase spans."""

from .alignment_grid import AlignmentGrid, MAX_SENT_LEN, OutOfRangeAccess, SentenceTooLong
from .cell import GridCell

__all__ = [
    "AlignmentGrid",
    "GridCell",
    "MAX_SENT_LEN",
    "OutOfRangeAccess",
    "SentenceTooLong",
]
