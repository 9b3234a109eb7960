"""Readers for word-aligned parallel corpora.

A corpus is three line-parallel text files: tokenized source sentences,
tokenized target sentences and Pharaoh-style alignments (``"0-0 1-2 2-1"``,
one ``f-e`` link per token).
"""

from __future__ import annotations

from itertools import zip_longest
from pathlib import Path
from typing import Iterator, List, Tuple

from ..util.types import SentencePair


def parse_alignment_line(line: str) -> List[Tuple[int, int]]:
	"""Parse one Pharaoh alignment line into (f, e) links.

	Blank lines yield no links. Duplicate links are kept as given.
	"""
	links: List[Tuple[int, int]] = []
	for token in line.split():
		left, sep, right = token.partition("-")
		if not sep or not left.isdigit() or not right.isdigit():
			raise ValueError(f"Malformed alignment link: {token!r}")
		links.append((int(left), int(right)))
	return links


def parse_sentence_pair(f_line: str, e_line: str, align_line: str, *, line_no: int = 0) -> SentencePair:
	"""Build a SentencePair from one line of each corpus file, checking link bounds."""
	f_tokens = f_line.split()
	e_tokens = e_line.split()
	try:
		links = parse_alignment_line(align_line)
	except ValueError as exc:
		raise ValueError(f"Line {line_no}: {exc}") from exc
	for f, e in links:
		if f >= len(f_tokens) or e >= len(e_tokens):
			raise ValueError(
				f"Line {line_no}: link {f}-{e} outside sentence pair "
				f"({len(f_tokens)} source / {len(e_tokens)} target tokens)"
			)
	return SentencePair(f_tokens=f_tokens, e_tokens=e_tokens, links=links, line_no=line_no)


def read_sentence_pairs(f_path: Path, e_path: Path, align_path: Path) -> Iterator[SentencePair]:
	"""Yield sentence pairs from three line-parallel files.

	Raises ValueError naming the line number when the files differ in length,
	a link is malformed, or a link points outside its sentence pair.
	"""
	with open(f_path, encoding="utf-8") as f_file, \
			open(e_path, encoding="utf-8") as e_file, \
			open(align_path, encoding="utf-8") as a_file:
		for line_no, (f_line, e_line, a_line) in enumerate(zip_longest(f_file, e_file, a_file), start=1):
			if f_line is None or e_line is None or a_line is None:
				raise ValueError(f"Line {line_no}: corpus files have different lengths")
			yield parse_sentence_pair(f_line, e_line, a_line, line_no=line_no)
