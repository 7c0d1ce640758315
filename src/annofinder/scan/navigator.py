"""Map a displayed TODO back to its source location.

The presentation layer shows each TODO as a label built from the file path and
1-based line number, with the trimmed line as its description. The label is
unique per (file, line); the description check is kept as a second guard.
"""

from __future__ import annotations

import logging
import os

from annofinder.errors import NavigationNotFound, NavigationTargetGone
from annofinder.models import Category, NavigationTarget, Occurrence, TodoSelection
from annofinder.scan.aggregator import ResultSet

LOGGER = logging.getLogger(__name__)


def todo_label(occurrence: Occurrence) -> str:
    if occurrence.line is None:
        raise ValueError(f"Occurrence has no line index: {occurrence}")
    return f"{occurrence.path} (Line {occurrence.line + 1})"


def selection_for(occurrence: Occurrence) -> TodoSelection:
    return TodoSelection(label=todo_label(occurrence), description=occurrence.text)


def resolve(selection: TodoSelection, result_set: ResultSet) -> Occurrence:
    """Return the TODO occurrence ``selection`` was built from.

    Raises ``NavigationNotFound`` when no occurrence reconstructs to the label,
    when more than one does, or when the description does not match.
    """
    candidates = [
        occurrence
        for occurrence in result_set
        if occurrence.category is Category.TODO
        and occurrence.line is not None
        and todo_label(occurrence) == selection.label
    ]
    if not candidates:
        raise NavigationNotFound(selection)
    if len(candidates) > 1:
        LOGGER.warning("Label %r matches %d TODOs", selection.label, len(candidates))
        raise NavigationNotFound(selection, "ambiguous TODO label")

    chosen = candidates[0]
    if chosen.text != selection.description:
        raise NavigationNotFound(selection, "TODO text changed")
    return chosen


def navigate(selection: TodoSelection, result_set: ResultSet) -> NavigationTarget:
    """Resolve ``selection`` and check the file can still be opened."""
    occurrence = resolve(selection, result_set)
    path = occurrence.path
    if not path.is_file():
        raise NavigationTargetGone(path)
    if not os.access(path, os.R_OK):
        raise NavigationTargetGone(path, "permission denied")
    assert occurrence.line is not None
    return NavigationTarget(path=path, line=occurrence.line, column=0)
