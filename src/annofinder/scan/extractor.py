"""Apply the pattern registry to a single file's text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List

from annofinder.errors import FileUnreadable
from annofinder.models import Category, Occurrence, SourceFile
from annofinder.patterns.registry import PatternRegistry
from annofinder.utils.files import read_source_text
from annofinder.utils.text import split_lines

LOGGER = logging.getLogger(__name__)


def read_source(path: Path, encoding: str = "utf-8") -> SourceFile:
    """Load a file for extraction, raising ``FileUnreadable`` on failure."""
    try:
        text = read_source_text(path, encoding=encoding)
    except UnicodeDecodeError as exc:
        raise FileUnreadable(path, f"not valid {encoding}") from exc
    except OSError as exc:
        raise FileUnreadable(path, exc.strerror or str(exc)) from exc
    return SourceFile(path=path, text=text)


def _iter_matches(source: SourceFile, registry: PatternRegistry, category: Category) -> Iterator[Occurrence]:
    for rule in registry.rules_for(category):
        for match in rule.finditer(source.text):
            text = match.group(0).strip()
            if text:
                yield Occurrence(path=source.path, category=category, text=text, rule=rule.label)


def _iter_todo_lines(source: SourceFile, registry: PatternRegistry) -> Iterator[Occurrence]:
    rules = registry.rules_for(Category.TODO)
    if not rules:
        return
    for index, line in enumerate(split_lines(source.text)):
        # First matching rule wins: one TODO per physical line
        for rule in rules:
            if rule.pattern.search(line):
                text = line.strip()
                if text:
                    yield Occurrence(
                        path=source.path,
                        category=Category.TODO,
                        text=text,
                        rule=rule.label,
                        line=index,
                    )
                break


def extract(
    source: SourceFile,
    registry: PatternRegistry,
    categories: Iterable[Category] | None = None,
) -> List[Occurrence]:
    """Extract occurrences from one file.

    Output order is category order, then rule order, then match position.
    """
    wanted = set(categories) if categories is not None else set(Category)
    occurrences: List[Occurrence] = []
    for category in Category:
        if category not in wanted:
            continue
        if category is Category.TODO:
            occurrences.extend(_iter_todo_lines(source, registry))
        else:
            occurrences.extend(_iter_matches(source, registry, category))
    LOGGER.debug("Extracted %d occurrences from %s", len(occurrences), source.path)
    return occurrences
