"""Alignment grid: corner markers of consistent phrase spans.

The grid is an F x E matrix of ``GridCell`` objects (columns are f, rows are
e). For every span judged consistent with the word alignment, the four
corners of its bounding box are marked, so that extraction code can test in
constant time whether another consistent span touches a given span
diagonally.

The backing matrix has a fixed capacity of ``MAX_SENT_LEN`` x
``MAX_SENT_LEN`` and is reused across sentence pairs: ``init`` only resets the
working rectangle of the new sentence, it never reallocates.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .cell import GridCell
from ..util.types import Corner, PhraseSpan, RelativePos

logger = logging.getLogger(__name__)

MAX_SENT_LEN = 256


class SentenceTooLong(ValueError):
    """Raised by ``AlignmentGrid.init`` when a sentence exceeds the grid capacity."""

    def __init__(self, e_size: int, f_size: int, limit: int = MAX_SENT_LEN) -> None:
        super().__init__(f"Sentence too long: fsize={f_size} esize={e_size} (limit {limit - 1})")
        self.e_size = e_size
        self.f_size = f_size
        self.limit = limit


class OutOfRangeAccess(IndexError):
    """Raised when a coordinate falls outside the current working rectangle."""

    def __init__(self, f: int, e: int, f_size: int, e_size: int) -> None:
        super().__init__(f"Coordinate (f={f}, e={e}) outside working grid {f_size}x{e_size}")
        self.f = f
        self.e = e
        self.f_size = f_size
        self.e_size = e_size


class AlignmentGrid:
    """Fixed-capacity grid of corner markers, reused across sentence pairs.

    Not safe for concurrent use; each worker should own its own grid.
    """

    def __init__(self, e_size: int = 0, f_size: int = 0) -> None:
        self._cells: List[List[Optional[GridCell]]] = [
            [None] * MAX_SENT_LEN for _ in range(MAX_SENT_LEN)
        ]
        self._spans: List[PhraseSpan] = []
        self._f_size = 0
        self._e_size = 0
        logger.debug("AlignmentGrid: allocated %d x %d", MAX_SENT_LEN, MAX_SENT_LEN)
        self.init(e_size, f_size)

    @property
    def f_size(self) -> int:
        return self._f_size

    @property
    def e_size(self) -> int:
        return self._e_size

    def init(self, e_size: int, f_size: int) -> None:
        """Start a new sentence pair of size ``e_size`` x ``f_size``.

        Resets every cell of the working rectangle and clears the span list.
        Cells outside the rectangle keep whatever they held, but are no
        longer reachable through ``cell_at``.

        Raises:
            SentenceTooLong: if either dimension is >= ``MAX_SENT_LEN``.
                The grid is left untouched in that case.
        """
        if e_size >= MAX_SENT_LEN or f_size >= MAX_SENT_LEN:
            raise SentenceTooLong(e_size, f_size)
        if e_size < 0 or f_size < 0:
            raise ValueError(f"Negative grid size: fsize={f_size} esize={e_size}")
        self._e_size = e_size
        self._f_size = f_size
        self._spans.clear()
        for fi in range(f_size):
            column = self._cells[fi]
            for ei in range(e_size):
                cell = column[ei]
                if cell is None:
                    column[ei] = GridCell()
                else:
                    cell.reset()

    def _check(self, f: int, e: int) -> None:
        if not (0 <= f < self._f_size and 0 <= e < self._e_size):
            raise OutOfRangeAccess(f, e, self._f_size, self._e_size)

    def cell_at(self, f: int, e: int) -> GridCell:
        """Return the cell at ``(f, e)`` of the working rectangle."""
        self._check(f, e)
        return self._cells[f][e]

    def get_spans(self) -> List[PhraseSpan]:
        """Return all spans added with ``add_span`` since the last ``init``.

        Includes spans flagged inconsistent, in insertion order.
        """
        return self._spans

    def add_span(self, span: PhraseSpan, is_consistent: bool) -> None:
        """Add ``span`` to the grid.

        Consistent spans are recorded at their four corners. The span is
        appended to the span list either way.
        """
        f1, f2, e1, e2 = span.f_start, span.f_end, span.e_start, span.e_end
        self._check(f1, e1)
        self._check(f2, e2)
        if is_consistent:
            self._cells[f1][e1].add(Corner.TOP_LEFT, span)
            self._cells[f2][e1].add(Corner.TOP_RIGHT, span)
            self._cells[f1][e2].add(Corner.BOTTOM_LEFT, span)
            self._cells[f2][e2].add(Corner.BOTTOM_RIGHT, span)
        self._spans.append(span)

    def add_corners_only(self, f_start: int, f_end: int, e_start: int, e_end: int) -> None:
        """Mark the four corners of a span without retaining a span object."""
        self._check(f_start, e_start)
        self._check(f_end, e_end)
        self._cells[f_start][e_start].mark(Corner.TOP_LEFT)
        self._cells[f_end][e_start].mark(Corner.TOP_RIGHT)
        self._cells[f_start][e_end].mark(Corner.BOTTOM_LEFT)
        self._cells[f_end][e_end].mark(Corner.BOTTOM_RIGHT)

    @staticmethod
    def relative_pos(span: PhraseSpan, f: int, e: int) -> RelativePos:
        """Classify ``(f, e)`` into one of nine regions around ``span``.

        Does not consult grid state; any integer coordinate is accepted.
        """
        if f < span.f_start:
            if e < span.e_start:
                return RelativePos.NW
            if e > span.e_end:
                return RelativePos.SW
            return RelativePos.W
        if f > span.f_end:
            if e < span.e_start:
                return RelativePos.NE
            if e > span.e_end:
                return RelativePos.SE
            return RelativePos.E
        if e < span.e_start:
            return RelativePos.N
        if e > span.e_end:
            return RelativePos.S
        return RelativePos.I
