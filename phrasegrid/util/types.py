"""Core data types for the PhraseGrid phrase extraction pipeline.

This module defines the fundamental data structures shared by the alignment
grid, the word alignment and the corpus readers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class RelativePos(Enum):
    """Position of a grid point relative to a span's bounding box.

    Rows are e (north is smaller e), columns are f (west is smaller f).
    """
    N = "N"
    NW = "NW"
    W = "W"
    SW = "SW"
    S = "S"
    SE = "SE"
    E = "E"
    NE = "NE"
    I = "I"


class Corner(Enum):
    """Corner role of a span's bounding box inside a grid cell."""
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


@dataclass(frozen=True, eq=False)
class PhraseSpan:
    """Bounding box of a candidate bilingual phrase pair.

    All indices are 0-based and inclusive. Spans compare and hash by
    identity: two spans with the same bounds are still distinct entries.

    Attributes:
        f_start: First source position
        f_end: Last source position
        e_start: First target position
        e_end: Last target position

    Invariant: 0 <= f_start <= f_end and 0 <= e_start <= e_end
    """
    f_start: int
    f_end: int
    e_start: int
    e_end: int

    def __post_init__(self) -> None:
        if min(self.f_start, self.f_end, self.e_start, self.e_end) < 0:
            raise ValueError(f"Negative index in span: {self}")
        if self.f_start > self.f_end or self.e_start > self.e_end:
            raise ValueError(f"Span start exceeds end: {self}")

    @property
    def f_len(self) -> int:
        return self.f_end - self.f_start + 1

    @property
    def e_len(self) -> int:
        return self.e_end - self.e_start + 1

    def contains(self, f: int, e: int) -> bool:
        """Return True if ``(f, e)`` lies inside the bounding box."""
        return self.f_start <= f <= self.f_end and self.e_start <= e <= self.e_end

    def hull(self, other: "PhraseSpan") -> "PhraseSpan":
        """Return a new span covering both ``self`` and ``other``."""
        return PhraseSpan(
            min(self.f_start, other.f_start),
            max(self.f_end, other.f_end),
            min(self.e_start, other.e_start),
            max(self.e_end, other.e_end),
        )

    def __repr__(self) -> str:
        return f"PhraseSpan(f={self.f_start}-{self.f_end}, e={self.e_start}-{self.e_end})"


@dataclass
class SentencePair:
    """A word-aligned sentence pair read from a parallel corpus.

    Attributes:
        f_tokens: Source sentence tokens
        e_tokens: Target sentence tokens
        links: Alignment links as (f_index, e_index) pairs
        line_no: 1-based line number in the corpus files (0 if unknown)
    """
    f_tokens: List[str]
    e_tokens: List[str]
    links: List[Tuple[int, int]] = field(default_factory=list)
    line_no: int = 0
