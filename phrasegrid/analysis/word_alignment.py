"""Word alignment between a source (f) and a target (e) sentence.

Links are stored in a boolean numpy matrix of shape (f_len, e_len), which
makes the phrase consistency test a handful of slice reductions.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..util.types import PhraseSpan


class WordAlignment:
    """Symmetrical word alignment with f->e and e->f lookups."""

    def __init__(self, f_len: int, e_len: int, links: Iterable[Tuple[int, int]] = ()) -> None:
        if f_len < 0 or e_len < 0:
            raise ValueError(f"Negative sentence length: f_len={f_len} e_len={e_len}")
        self.f_len = f_len
        self.e_len = e_len
        self.matrix = np.zeros((f_len, e_len), dtype=bool)
        for f, e in links:
            self.add_link(f, e)

    def add_link(self, f: int, e: int) -> None:
        if not (0 <= f < self.f_len and 0 <= e < self.e_len):
            raise ValueError(f"Link {f}-{e} outside sentence pair {self.f_len}x{self.e_len}")
        self.matrix[f, e] = True

    def f2e(self, f: int) -> List[int]:
        """Target positions aligned to source position ``f``."""
        return [int(e) for e in np.flatnonzero(self.matrix[f])]

    def e2f(self, e: int) -> List[int]:
        """Source positions aligned to target position ``e``."""
        return [int(f) for f in np.flatnonzero(self.matrix[:, e])]

    def is_aligned_f(self, f: int) -> bool:
        return bool(self.matrix[f].any())

    def is_aligned_e(self, e: int) -> bool:
        return bool(self.matrix[:, e].any())

    @property
    def num_links(self) -> int:
        return int(self.matrix.sum())

    def links(self) -> List[Tuple[int, int]]:
        """All links as (f, e) pairs, sorted by f then e."""
        return [(int(f), int(e)) for f, e in np.argwhere(self.matrix)]

    def e_projection(self, f_start: int, f_end: int) -> Optional[Tuple[int, int]]:
        """Return (min_e, max_e) aligned to ``f_start..f_end``, or None if unaligned."""
        cols = np.flatnonzero(self.matrix[f_start:f_end + 1].any(axis=0))
        if cols.size == 0:
            return None
        return int(cols[0]), int(cols[-1])

    def is_consistent(self, span: PhraseSpan) -> bool:
        """Check that ``span`` is consistent with the alignment.

        A span is consistent when it contains at least one link and no link
        connects a word inside one of its ranges to a word outside the other.
        """
        f1, f2, e1, e2 = span.f_start, span.f_end, span.e_start, span.e_end
        rows = self.matrix[f1:f2 + 1]
        if not rows[:, e1:e2 + 1].any():
            return False
        if rows[:, :e1].any() or rows[:, e2 + 1:].any():
            return False
        cols = self.matrix[:, e1:e2 + 1]
        if cols[:f1].any() or cols[f2 + 1:].any():
            return False
        return True

    def __repr__(self) -> str:
        return f"WordAlignment(f_len={self.f_len}, e_len={self.e_len}, links={self.num_links})"


def alignment_from_derivation(
    f_len: int,
    e_len: int,
    segments: Sequence[Tuple[int, int, int, int]],
) -> WordAlignment:
    """Build a word alignment from a decoder derivation.

    Each segment is ``(f_start, f_phrase_len, e_start, e_phrase_len)``, one per
    phrase application. Every word pair inside a segment is linked.
    """
    alignment = WordAlignment(f_len, e_len)
    for f_start, f_phrase_len, e_start, e_phrase_len in segments:
        if f_start + f_phrase_len > f_len or e_start + e_phrase_len > e_len:
            raise ValueError(
                f"Derivation segment {(f_start, f_phrase_len, e_start, e_phrase_len)} "
                f"exceeds sentence pair {f_len}x{e_len}"
            )
        alignment.matrix[f_start:f_start + f_phrase_len, e_start:e_start + e_phrase_len] = True
    return alignment
