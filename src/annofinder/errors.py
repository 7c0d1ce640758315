"""Exceptions raised by the scanning pipeline."""

from __future__ import annotations

from pathlib import Path

from annofinder.models import TodoSelection


class AnnoFinderError(Exception):
    """Base class for AnnoFinder failures."""


class FileUnreadable(AnnoFinderError):
    """A corpus file could not be opened or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class NavigationNotFound(AnnoFinderError):
    """A displayed TODO could not be mapped back to a unique occurrence."""

    def __init__(self, selection: TodoSelection, reason: str = "no matching TODO") -> None:
        super().__init__(f"{reason}: {selection.label}")
        self.selection = selection
        self.reason = reason


class NavigationTargetGone(AnnoFinderError):
    """The resolved file can no longer be opened."""

    def __init__(self, path: Path, reason: str = "file is no longer available") -> None:
        super().__init__(f"Cannot open {path}: {reason}")
        self.path = path
        self.reason = reason


class ScanCancelled(AnnoFinderError):
    """The scan was cancelled before every file was processed."""
