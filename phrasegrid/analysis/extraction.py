"""Phrase extraction on top of the alignment grid.

This module feeds candidate spans of one sentence pair into an
``AlignmentGrid`` and answers adjacency questions from the grid's corner
markers:

- ``fill_grid`` enumerates source ranges, projects them onto the target side
  and inserts each (span, is_consistent) event into the grid
- ``has_diagonal_neighbor`` / ``diagonal_neighbors`` test the facing corner
  of the cell one step diagonal from a span
- ``concatenate`` builds larger consistent spans from diagonally adjacent ones
- ``orientation`` derives the monotone/swap/discontinuous class of a span
  with respect to its previous or next phrase

Consistency itself is decided by ``WordAlignment.is_consistent``; the grid
only stores the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..grid.alignment_grid import AlignmentGrid
from ..grid.cell import GridCell
from ..util.types import Corner, PhraseSpan, RelativePos
from .word_alignment import WordAlignment

MONOTONE = "monotone"
SWAP = "swap"
DISCONTINUOUS = "discontinuous"

# For each diagonal region: (df, de) step from the span corner, the span corner
# the step starts from, and the corner of the neighbouring span facing it.
_DIAGONALS: Dict[RelativePos, Tuple[int, int, Corner, Corner]] = {
    RelativePos.NW: (-1, -1, Corner.TOP_LEFT, Corner.BOTTOM_RIGHT),
    RelativePos.NE: (+1, -1, Corner.TOP_RIGHT, Corner.BOTTOM_LEFT),
    RelativePos.SW: (-1, +1, Corner.BOTTOM_LEFT, Corner.TOP_RIGHT),
    RelativePos.SE: (+1, +1, Corner.BOTTOM_RIGHT, Corner.TOP_LEFT),
}

DIAGONAL_POSITIONS: Tuple[RelativePos, ...] = tuple(_DIAGONALS)


@dataclass
class ExtractionConfig:
    """Configuration for filling the grid of one sentence pair."""
    max_f_phrase_len: int = 7
    max_e_phrase_len: int = 7
    keep_inconsistent: bool = False  # also add inconsistent spans (listed, no corners)
    corners_only: bool = False       # mark corners without retaining span objects


def _span_corner(span: PhraseSpan, corner: Corner) -> Tuple[int, int]:
    if corner is Corner.TOP_LEFT:
        return span.f_start, span.e_start
    if corner is Corner.TOP_RIGHT:
        return span.f_end, span.e_start
    if corner is Corner.BOTTOM_LEFT:
        return span.f_start, span.e_end
    return span.f_end, span.e_end


def fill_grid(
    grid: AlignmentGrid,
    alignment: WordAlignment,
    config: Optional[ExtractionConfig] = None,
) -> Dict[str, int]:
    """Re-initialize ``grid`` for ``alignment`` and insert all candidate spans.

    For every source range within the length limit, the candidate span is the
    range's projection onto the target side. Unaligned ranges produce no
    candidate.

    Returns:
        Counts with keys ``candidates``, ``consistent`` and ``inserted``.

    Raises:
        SentenceTooLong: propagated from ``grid.init``.
    """
    config = config or ExtractionConfig()
    grid.init(alignment.e_len, alignment.f_len)

    counts = {"candidates": 0, "consistent": 0, "inserted": 0}
    for f1 in range(alignment.f_len):
        f_limit = min(alignment.f_len, f1 + config.max_f_phrase_len)
        for f2 in range(f1, f_limit):
            projection = alignment.e_projection(f1, f2)
            if projection is None:
                continue
            e1, e2 = projection
            if e2 - e1 + 1 > config.max_e_phrase_len:
                continue
            counts["candidates"] += 1
            span = PhraseSpan(f1, f2, e1, e2)
            consistent = alignment.is_consistent(span)
            if consistent:
                counts["consistent"] += 1

            if config.corners_only:
                if consistent:
                    grid.add_corners_only(f1, f2, e1, e2)
                    counts["inserted"] += 1
            elif consistent or config.keep_inconsistent:
                grid.add_span(span, consistent)
                counts["inserted"] += 1
    return counts


def _facing_cell(grid: AlignmentGrid, span: PhraseSpan, pos: RelativePos) -> Optional[Tuple[GridCell, Corner]]:
    if pos not in _DIAGONALS:
        raise ValueError(f"Not a diagonal position: {pos}")
    df, de, own_corner, facing = _DIAGONALS[pos]
    f, e = _span_corner(span, own_corner)
    f, e = f + df, e + de
    if not (0 <= f < grid.f_size and 0 <= e < grid.e_size):
        return None
    return grid.cell_at(f, e), facing


def has_diagonal_neighbor(grid: AlignmentGrid, span: PhraseSpan, pos: RelativePos) -> bool:
    """True if a consistent span touches ``span`` diagonally in region ``pos``."""
    found = _facing_cell(grid, span, pos)
    if found is None:
        return False
    cell, facing = found
    return cell.has(facing)


def diagonal_neighbors(grid: AlignmentGrid, span: PhraseSpan, pos: RelativePos) -> List[PhraseSpan]:
    """Spans whose facing corner sits one step diagonal from ``span`` in region ``pos``.

    Empty when the grid was filled with ``add_corners_only``.
    """
    found = _facing_cell(grid, span, pos)
    if found is None:
        return []
    cell, facing = found
    return list(cell.spans(facing))


def context_corners(grid: AlignmentGrid, span: PhraseSpan) -> Dict[RelativePos, List[Tuple[int, int]]]:
    """Scan the working rectangle for facing corners in the four diagonal regions.

    A coordinate is reported under NW when it carries a bottom-right marker,
    under SW for top-right, under NE for bottom-left and under SE for
    top-left. Coordinates are (f, e) pairs in row-major (e, then f) order.
    """
    result: Dict[RelativePos, List[Tuple[int, int]]] = {pos: [] for pos in DIAGONAL_POSITIONS}
    for ei in range(grid.e_size):
        for fi in range(grid.f_size):
            pos = grid.relative_pos(span, fi, ei)
            if pos not in _DIAGONALS:
                continue
            facing = _DIAGONALS[pos][3]
            if grid.cell_at(fi, ei).has(facing):
                result[pos].append((fi, ei))
    return result


def concatenate(grid: AlignmentGrid, span: PhraseSpan) -> List[Tuple[PhraseSpan, RelativePos]]:
    """Combine ``span`` with every diagonally adjacent consistent span.

    The hull of two consistent spans that touch diagonally is itself
    consistent, so each result can be fed back into the grid.
    """
    combined: List[Tuple[PhraseSpan, RelativePos]] = []
    for pos in DIAGONAL_POSITIONS:
        for neighbor in diagonal_neighbors(grid, span, pos):
            combined.append((span.hull(neighbor), pos))
    return combined


def orientation(grid: AlignmentGrid, span: PhraseSpan, previous: bool = True) -> str:
    """Reordering class of ``span`` relative to its previous or next phrase.

    Previous phrase: monotone when a consistent span ends at the NW diagonal
    (or ``span`` starts the sentence pair), swap when one ends at the NE
    diagonal. Next phrase: monotone at the SE diagonal (or at the end of the
    sentence pair), swap at the SW diagonal. Everything else is
    discontinuous.
    """
    if previous:
        if span.f_start == 0 and span.e_start == 0:
            return MONOTONE
        if has_diagonal_neighbor(grid, span, RelativePos.NW):
            return MONOTONE
        if has_diagonal_neighbor(grid, span, RelativePos.NE):
            return SWAP
        return DISCONTINUOUS

    if span.f_end == grid.f_size - 1 and span.e_end == grid.e_size - 1:
        return MONOTONE
    if has_diagonal_neighbor(grid, span, RelativePos.SE):
        return MONOTONE
    if has_diagonal_neighbor(grid, span, RelativePos.SW):
        return SWAP
    return DISCONTINUOUS
