"""Project-level configuration for phrase extraction defaults and output paths.

Values can be overridden via environment variables:
- PHRASEGRID_OUTPUT_DIR: where extracted phrase pairs are written (defaults to <project>/output)
- PHRASEGRID_MAX_PHRASE_LEN: maximum phrase length on either side (defaults to 7)
- PHRASEGRID_LOG_LEVEL: logging level used by the CLI (defaults to INFO)
"""

import os
from pathlib import Path
from typing import Final


def _project_root() -> Path:
	"""Return an approximation of the project root (parent of the package)."""
	return Path(__file__).resolve().parents[1]


OUTPUT_DIR: Final[Path] = Path(os.getenv("PHRASEGRID_OUTPUT_DIR", _project_root() / "output"))
MAX_PHRASE_LEN: Final[int] = int(os.getenv("PHRASEGRID_MAX_PHRASE_LEN", "7"))
LOG_LEVEL: Final[str] = os.getenv("PHRASEGRID_LOG_LEVEL", "INFO").upper()


def ensure_output_dir() -> Path:
	"""Create the output directory if it does not already exist."""
	OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
	return OUTPUT_DIR
