"""Text helpers shared by the extractor and the presentation layers."""

from __future__ import annotations

import re
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split text into physical lines on LF or CRLF.

    A trailing newline produces a final empty line, which keeps line indices
    aligned with what an editor shows.
    """
    return _LINE_BREAK.split(text)


def one_line(text: str, *, max_chars: int = 180) -> str:
    """Collapse a multi-line match for single-row display."""
    flat = " ".join(part.strip() for part in split_lines(text) if part.strip())
    if len(flat) <= max_chars:
        return flat
    return flat[: max_chars - 1] + "…"
