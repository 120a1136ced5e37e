"""Spades rules engine and heuristic bot players."""

__version__ = "1.0.0"
