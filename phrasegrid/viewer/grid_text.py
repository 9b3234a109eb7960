"""Plain-text rendering of an alignment grid for inspection.

Rows are target positions (e), columns are source positions (f). Each cell is
two characters: a phrase symbol and an alignment symbol.

- ``x``: word alignment link
- ``.``: no link
- ``#``: cell inside the highlighted span
- ``1``/``2``/``3``/``4``: facing corner of a consistent span located
  NW/SW/NE/SE of the highlighted span
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..analysis.word_alignment import WordAlignment
from ..grid.alignment_grid import AlignmentGrid
from ..util.types import Corner, PhraseSpan, RelativePos

SYM_C = "+"
SYM_V = "|"
SYM_H = "-"
SYM_U = "."  # unaligned
SYM_P = "#"  # highlighted span
SYM_A = "x"  # word alignment

_CONTEXT_SYMBOLS = {
    RelativePos.NW: (Corner.BOTTOM_RIGHT, "1"),
    RelativePos.SW: (Corner.TOP_RIGHT, "2"),
    RelativePos.NE: (Corner.BOTTOM_LEFT, "3"),
    RelativePos.SE: (Corner.TOP_LEFT, "4"),
}


def _border(f_size: int) -> str:
    return SYM_C + SYM_H.join([SYM_H * 2] * f_size) + SYM_H + SYM_C


def render_grid(
    grid: AlignmentGrid,
    alignment: WordAlignment,
    span: Optional[PhraseSpan] = None,
    f_tokens: Optional[Sequence[str]] = None,
    e_tokens: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
) -> str:
    """Render the working rectangle of ``grid`` with ``alignment`` overlaid."""
    f_size, e_size = grid.f_size, grid.e_size
    if (alignment.f_len, alignment.e_len) != (f_size, e_size):
        raise ValueError(
            f"Alignment {alignment.f_len}x{alignment.e_len} does not match grid {f_size}x{e_size}"
        )

    lines: List[str] = []
    if title is not None:
        lines.append(title)
    lines.append(_border(f_size))
    for ei in range(e_size):
        cells: List[str] = []
        for fi in range(f_size):
            align_sym = SYM_A if alignment.matrix[fi, ei] else SYM_U
            phrase_sym = " "
            if span is not None:
                if span.contains(fi, ei):
                    phrase_sym = SYM_P
                    if align_sym == SYM_U:
                        align_sym = SYM_P
                else:
                    pos = grid.relative_pos(span, fi, ei)
                    if pos in _CONTEXT_SYMBOLS:
                        corner, sym = _CONTEXT_SYMBOLS[pos]
                        if grid.cell_at(fi, ei).has(corner):
                            phrase_sym = sym
            cells.append(phrase_sym + align_sym)
        word = e_tokens[ei] if e_tokens is not None else ""
        lines.append(f"{SYM_V}{' '.join(cells)} {SYM_V} {ei:2d} {word}".rstrip())
    lines.append(_border(f_size))
    lines.append(" " + " ".join(f"{fi:2d}" for fi in range(f_size)))
    if f_tokens is not None:
        lines.append(" ".join(f"{fi}={f_tokens[fi]}" for fi in range(f_size)))
    return "\n".join(lines) + "\n"
