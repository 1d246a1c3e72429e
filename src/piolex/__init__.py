"""Lexical classifier and highlighter for PIO assembly."""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from piolex.classifier import Classification

__version__ = "0.1.0"

PIO_SUFFIX = ".pio"


def classify(source: str) -> Classification:
    """Classify PIO source text into ordered, non-overlapping tokens."""
    from piolex.classifier import classify as _classify

    return _classify(source)


def is_pio_path(path: str | PurePath) -> bool:
    """Return True if *path* names a file associated with this highlighter."""
    return PurePath(path).suffix.lower() == PIO_SUFFIX
