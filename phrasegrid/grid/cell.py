"""Per-coordinate state of the alignment grid.

A cell holds four fixed corner slots (top-left, top-right, bottom-left,
bottom-right). Each slot is a presence flag plus the spans recorded under
that corner role, in insertion order.
"""

from __future__ import annotations

from typing import List

from ..util.types import Corner, PhraseSpan


class GridCell:
    """Four corner slots for one ``(f, e)`` coordinate."""

    __slots__ = ("_present", "_spans")

    def __init__(self) -> None:
        self._present: List[bool] = [False] * len(Corner)
        self._spans: List[List[PhraseSpan]] = [[] for _ in Corner]

    def reset(self) -> None:
        """Clear all four slots in place."""
        for i in range(len(self._present)):
            self._present[i] = False
            self._spans[i].clear()

    def add(self, corner: Corner, span: PhraseSpan) -> None:
        """Record ``span`` under ``corner`` and mark the corner present."""
        self._present[corner.value] = True
        self._spans[corner.value].append(span)

    def mark(self, corner: Corner, present: bool = True) -> None:
        """Set the presence flag of ``corner`` without storing a span."""
        self._present[corner.value] = present

    def has(self, corner: Corner) -> bool:
        return self._present[corner.value]

    def spans(self, corner: Corner) -> List[PhraseSpan]:
        return self._spans[corner.value]

    def is_empty(self) -> bool:
        return not any(self._present)

    @property
    def has_top_left(self) -> bool:
        return self._present[Corner.TOP_LEFT.value]

    @property
    def has_top_right(self) -> bool:
        return self._present[Corner.TOP_RIGHT.value]

    @property
    def has_bottom_left(self) -> bool:
        return self._present[Corner.BOTTOM_LEFT.value]

    @property
    def has_bottom_right(self) -> bool:
        return self._present[Corner.BOTTOM_RIGHT.value]

    @property
    def top_left(self) -> List[PhraseSpan]:
        return self._spans[Corner.TOP_LEFT.value]

    @property
    def top_right(self) -> List[PhraseSpan]:
        return self._spans[Corner.TOP_RIGHT.value]

    @property
    def bottom_left(self) -> List[PhraseSpan]:
        return self._spans[Corner.BOTTOM_LEFT.value]

    @property
    def bottom_right(self) -> List[PhraseSpan]:
        return self._spans[Corner.BOTTOM_RIGHT.value]

    def __repr__(self) -> str:
        flags = "".join("1" if p else "0" for p in self._present)
        return f"GridCell(corners={flags})"
