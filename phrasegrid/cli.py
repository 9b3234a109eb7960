"""PhraseGrid CLI - Command-line interface for alignment-grid phrase extraction.

Primary Commands:
  - extract: Extract consistent phrase pairs from a word-aligned corpus
  - show-grid: Render the alignment grid of one sentence pair
  - show-derivation: Render the grid of a decoder derivation
  - classify: Print the relative position of a grid point to a span
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import typer
from rich import print
from rich.console import Console

from .config import LOG_LEVEL, MAX_PHRASE_LEN, OUTPUT_DIR


logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _parse_span(text: str):
	"""Parse 'f1,f2,e1,e2' into a PhraseSpan."""
	from .util.types import PhraseSpan
	parts = [p.strip() for p in text.split(",")]
	if len(parts) != 4 or not all(p.isdigit() for p in parts):
		raise typer.BadParameter(f"Span must be 'f_start,f_end,e_start,e_end': {text}")
	try:
		return PhraseSpan(*(int(p) for p in parts))
	except ValueError as e:
		raise typer.BadParameter(str(e))


def _parse_segments(text: str) -> List[Tuple[int, int, int, int]]:
	"""Parse 'f:flen:e:elen f:flen:e:elen ...' derivation segments."""
	segments: List[Tuple[int, int, int, int]] = []
	for token in text.split():
		parts = token.split(":")
		if len(parts) != 4 or not all(p.isdigit() for p in parts):
			raise typer.BadParameter(f"Segment must be 'f_start:f_len:e_start:e_len': {token}")
		f_start, f_len, e_start, e_len = (int(p) for p in parts)
		segments.append((f_start, f_len, e_start, e_len))
	return segments


@app.command(name="extract")
def extract_cmd(
	f_path: str = typer.Argument(..., help="Tokenized source sentences, one per line"),
	e_path: str = typer.Argument(..., help="Tokenized target sentences, one per line"),
	align_path: str = typer.Argument(..., help="Pharaoh alignments ('f-e' links), one line per sentence pair"),
	max_len: int = typer.Option(MAX_PHRASE_LEN, "--max-len", help="Maximum phrase length on either side"),
	out: Optional[str] = typer.Option(None, "--out", help="Write phrase pairs as JSON lines to this file"),
	keep_inconsistent: bool = typer.Option(False, help="Also list inconsistent spans (no corner markers)"),
	max_sentences: Optional[int] = typer.Option(None, help="Stop after this many sentence pairs"),
) -> None:
	"""Extract consistent phrase pairs with reordering orientations."""
	from pathlib import Path as _Path
	from .pipelines.extraction_pipeline import ExtractionPipeline, ExtractionPipelineConfig

	for p in (f_path, e_path, align_path):
		if not _Path(p).is_file():
			raise typer.BadParameter(f"File not found: {p}")
	if max_len < 1:
		raise typer.BadParameter("--max-len must be >= 1")
	if out is not None and not _Path(out).parent.name:
		out = str(OUTPUT_DIR / out)

	config = ExtractionPipelineConfig(
		f_path=f_path,
		e_path=e_path,
		align_path=align_path,
		max_f_phrase_len=max_len,
		max_e_phrase_len=max_len,
		keep_inconsistent=keep_inconsistent,
		output_file=out,
		max_sentences=max_sentences,
	)
	pipeline = ExtractionPipeline(config)
	result = pipeline.run()
	print({"counts": result["counts"], "output_file": result["output_file"]})


@app.command(name="show-grid")
def show_grid_cmd(
	f_sentence: str = typer.Argument(..., help="Tokenized source sentence"),
	e_sentence: str = typer.Argument(..., help="Tokenized target sentence"),
	alignment: str = typer.Argument(..., help="Pharaoh alignment, e.g. '0-0 1-2 2-1'"),
	span: Optional[str] = typer.Option(None, "--span", help="Highlight span 'f_start,f_end,e_start,e_end'"),
	max_len: int = typer.Option(MAX_PHRASE_LEN, "--max-len", help="Maximum phrase length on either side"),
) -> None:
	"""Render the alignment grid of one sentence pair."""
	from .analysis.extraction import ExtractionConfig, concatenate, fill_grid, orientation
	from .analysis.word_alignment import WordAlignment
	from .grid.alignment_grid import AlignmentGrid, SentenceTooLong
	from .parsers.corpus import parse_sentence_pair
	from .viewer.grid_text import render_grid

	try:
		pair = parse_sentence_pair(f_sentence, e_sentence, alignment)
	except ValueError as e:
		raise typer.BadParameter(str(e))
	word_alignment = WordAlignment(len(pair.f_tokens), len(pair.e_tokens), pair.links)
	grid = AlignmentGrid()
	try:
		counts = fill_grid(grid, word_alignment, ExtractionConfig(max_f_phrase_len=max_len, max_e_phrase_len=max_len))
	except SentenceTooLong as e:
		raise typer.BadParameter(str(e))

	highlight = _parse_span(span) if span else None
	if highlight is not None and (highlight.f_end >= grid.f_size or highlight.e_end >= grid.e_size):
		raise typer.BadParameter(f"Span {highlight} outside sentence pair {grid.f_size}x{grid.e_size}")

	text = render_grid(
		grid,
		word_alignment,
		span=highlight,
		f_tokens=pair.f_tokens,
		e_tokens=pair.e_tokens,
		title=f"Alignment grid ({grid.f_size} x {grid.e_size})",
	)
	Console().print(text, markup=False, highlight=False)
	print(f"[green]Consistent spans:[/green] {counts['consistent']} of {counts['candidates']} candidates")
	if highlight is not None:
		print(f"[blue]Previous orientation:[/blue] {orientation(grid, highlight, previous=True)}")
		print(f"[blue]Next orientation:[/blue] {orientation(grid, highlight, previous=False)}")
		for hull, pos in concatenate(grid, highlight):
			print(f"  {pos.value}: {hull!r}")


@app.command(name="show-derivation")
def show_derivation_cmd(
	f_sentence: str = typer.Argument(..., help="Tokenized source sentence"),
	e_sentence: str = typer.Argument(..., help="Tokenized translation"),
	segments: str = typer.Argument(..., help="Phrase applications 'f_start:f_len:e_start:e_len ...'"),
) -> None:
	"""Render the alignment grid implied by a decoder derivation."""
	from .analysis.word_alignment import alignment_from_derivation
	from .grid.alignment_grid import AlignmentGrid
	from .viewer.grid_text import render_grid

	f_tokens = f_sentence.split()
	e_tokens = e_sentence.split()
	try:
		word_alignment = alignment_from_derivation(len(f_tokens), len(e_tokens), _parse_segments(segments))
		grid = AlignmentGrid(len(e_tokens), len(f_tokens))
	except ValueError as e:
		raise typer.BadParameter(str(e))
	text = render_grid(
		grid,
		word_alignment,
		f_tokens=f_tokens,
		e_tokens=e_tokens,
		title=f"Alignment grid for decoded sentence: {' '.join(e_tokens)}",
	)
	Console().print(text, markup=False, highlight=False)


@app.command(name="classify")
def classify_cmd(
	span: str = typer.Argument(..., help="Span 'f_start,f_end,e_start,e_end'"),
	f: int = typer.Argument(..., help="Source position of the query point"),
	e: int = typer.Argument(..., help="Target position of the query point"),
) -> None:
	"""Print the relative position of (f, e) to a span."""
	from .grid.alignment_grid import AlignmentGrid

	pos = AlignmentGrid.relative_pos(_parse_span(span), f, e)
	print(pos.value)


if __name__ == "__main__":
	app()
