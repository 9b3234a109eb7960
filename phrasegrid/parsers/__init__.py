"""Readers for word-aligned parallel corpora."""
