"""PhraseGrid: alignment-grid corner marking for phrase-pair extraction."""

__version__ = "0.1.0"
