"""Corpus-level phrase extraction pipeline.

This pipeline reads a word-aligned parallel corpus, fills one reusable
alignment grid per sentence pair, and collects the consistent phrase pairs
together with their reordering orientation. Sentences longer than the grid
capacity are skipped and counted.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from ..analysis.extraction import ExtractionConfig, fill_grid, orientation
from ..analysis.word_alignment import WordAlignment
from ..grid.alignment_grid import AlignmentGrid, SentenceTooLong
from ..parsers.corpus import read_sentence_pairs
from ..util.types import PhraseSpan, SentencePair

logger = logging.getLogger(__name__)


@dataclass
class ExtractionPipelineConfig:
    """Configuration for the phrase extraction pipeline."""
    f_path: str
    e_path: str
    align_path: str
    max_f_phrase_len: int = 7
    max_e_phrase_len: int = 7
    keep_inconsistent: bool = False
    output_file: Optional[str] = None  # JSON lines, one phrase pair per line
    max_sentences: Optional[int] = None


@dataclass
class PhrasePairRecord:
    """One extracted phrase pair."""
    line_no: int
    f_start: int
    f_end: int
    e_start: int
    e_end: int
    f_phrase: str
    e_phrase: str
    prev_orientation: str
    next_orientation: str


class ExtractionPipeline:
    """Pipeline for extracting consistent phrase pairs from an aligned corpus."""

    def __init__(self, config: ExtractionPipelineConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()
        self.grid = AlignmentGrid()
        self.records: List[PhrasePairRecord] = []
        self.counts: Dict[str, int] = {
            "sentences": 0,
            "skipped_too_long": 0,
            "candidates": 0,
            "spans": 0,
            "consistent_spans": 0,
            "phrase_pairs": 0,
        }

    def run(self) -> Dict[str, Any]:
        """Run the complete extraction pipeline."""
        start_time = time.time()

        try:
            # Phase 1: Extract per sentence pair
            self._log_progress(f"Extracting phrase pairs from {self.config.f_path} / {self.config.e_path}...")
            pairs = read_sentence_pairs(
                Path(self.config.f_path), Path(self.config.e_path), Path(self.config.align_path)
            )
            for pair in pairs:
                if self.config.max_sentences is not None and self.counts["sentences"] >= self.config.max_sentences:
                    break
                self.process_sentence(pair)

            # Phase 2: Write output
            if self.config.output_file:
                self._write_records(Path(self.config.output_file))

            processing_time = time.time() - start_time
            result = {
                "counts": dict(self.counts),
                "config": {
                    "max_f_phrase_len": self.config.max_f_phrase_len,
                    "max_e_phrase_len": self.config.max_e_phrase_len,
                    "keep_inconsistent": self.config.keep_inconsistent,
                },
                "output_file": self.config.output_file,
                "processing_time": round(processing_time, 3),
            }

            # Phase 3: Output summary
            self._output_summary(result)
            return result

        except Exception as e:
            self._log_error(f"Pipeline failed: {str(e)}")
            raise

    def process_sentence(self, pair: SentencePair) -> List[PhrasePairRecord]:
        """Fill the grid for one sentence pair and collect its phrase pairs."""
        self.counts["sentences"] += 1
        alignment = WordAlignment(len(pair.f_tokens), len(pair.e_tokens), pair.links)
        extraction_config = ExtractionConfig(
            max_f_phrase_len=self.config.max_f_phrase_len,
            max_e_phrase_len=self.config.max_e_phrase_len,
            keep_inconsistent=self.config.keep_inconsistent,
        )
        try:
            counts = fill_grid(self.grid, alignment, extraction_config)
        except SentenceTooLong as e:
            self.counts["skipped_too_long"] += 1
            logger.warning("Skipping line %d: %s", pair.line_no, e)
            return []

        self.counts["candidates"] += counts["candidates"]
        self.counts["spans"] += len(self.grid.get_spans())
        self.counts["consistent_spans"] += counts["consistent"]

        sentence_records: List[PhrasePairRecord] = []
        for span in self.grid.get_spans():
            # Inconsistent spans are listed but carry no corner markers
            if not self._has_own_corners(span):
                continue
            sentence_records.append(
                PhrasePairRecord(
                    line_no=pair.line_no,
                    f_start=span.f_start,
                    f_end=span.f_end,
                    e_start=span.e_start,
                    e_end=span.e_end,
                    f_phrase=" ".join(pair.f_tokens[span.f_start:span.f_end + 1]),
                    e_phrase=" ".join(pair.e_tokens[span.e_start:span.e_end + 1]),
                    prev_orientation=orientation(self.grid, span, previous=True),
                    next_orientation=orientation(self.grid, span, previous=False),
                )
            )
        self.counts["phrase_pairs"] += len(sentence_records)
        self.records.extend(sentence_records)
        return sentence_records

    def _has_own_corners(self, span: PhraseSpan) -> bool:
        return any(s is span for s in self.grid.cell_at(span.f_start, span.e_start).top_left)

    def _write_records(self, path: Path) -> None:
        """Write phrase pair records as JSON lines."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            for record in self.records:
                f.write(json.dumps(asdict(record), ensure_ascii=False) + "\n")
        self._log_progress(f"Wrote {len(self.records)} phrase pairs to {path}")

    def _log_progress(self, message: str) -> None:
        """Log progress message."""
        if self.console:
            self.console.print(f"[blue]{message}[/blue]")

    def _log_error(self, message: str) -> None:
        """Log error message."""
        if self.console:
            self.console.print(f"[red]{message}[/red]")

    def _output_summary(self, result: Dict[str, Any]) -> None:
        """Print the extraction counts as a table."""
        table = Table(title="Phrase Extraction Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")
        for key, value in result["counts"].items():
            table.add_row(key.replace("_", " ").title(), str(value))
        table.add_row("Processing Time (s)", str(result["processing_time"]))
        self.console.print(table)
