"""Webtoon typesetting team dashboard."""

__version__ = "0.1.0"
