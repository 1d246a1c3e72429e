"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from piolex.classifier import Classification
from piolex.tokens import LineIndex


def dump_tokens(classification: Classification, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: ``line:col-line:col CATEGORY 'text'``."""
    index = LineIndex(classification.source)
    for tok in classification:
        start = index.position(tok.span.start)
        end = index.position(tok.span.end)
        file.write(
            f"{start.line}:{start.column}-{end.line}:{end.column} "
            f"{tok.category.name} {tok.text!r}\n"
        )
    for region in classification.foreign_blocks:
        if not region.terminated:
            pos = index.position(region.head.start)
            file.write(f"{pos.line}:{pos.column} unterminated {region.language} block\n")
