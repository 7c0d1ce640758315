"""Core AnnoFinder data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict


class Category(str, Enum):
    """The three independent extraction concerns."""

    COMMENT = "comment"
    LOG = "log"
    TODO = "todo"


@dataclass(slots=True, frozen=True)
class SourceFile:
    """Full text of one file, read once per scan."""

    path: Path
    text: str


@dataclass(slots=True, frozen=True)
class Occurrence:
    """One extracted annotation tied to its source file.

    ``line`` is the 0-based line index and is only set for TODOs, whose
    ``text`` is the trimmed line rather than a matched substring.
    """

    path: Path
    category: Category
    text: str
    rule: str
    line: int | None = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "category": self.category.value,
            "text": self.text,
            "rule": self.rule,
            "line": self.line,
        }


@dataclass(slots=True, frozen=True)
class TodoSelection:
    """A TODO as the presentation layer displays it."""

    label: str
    description: str


@dataclass(slots=True, frozen=True)
class NavigationTarget:
    """Where the host should move the caret. ``line`` is 0-based."""

    path: Path
    line: int
    column: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {"path": str(self.path), "line": self.line, "column": self.column}
