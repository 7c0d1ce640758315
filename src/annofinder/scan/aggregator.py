"""Merge per-file occurrences into ordered result sets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Sequence, Tuple

from annofinder.models import Category, Occurrence


class ResultStatus(str, Enum):
    PENDING = "pending"
    FOUND = "found"
    NO_OCCURRENCES = "no_occurrences"
    CORPUS_EMPTY = "corpus_empty"


@dataclass(slots=True, frozen=True)
class ResultSet:
    """Ordered occurrences of one category from one scan."""

    category: Category
    occurrences: Tuple[Occurrence, ...] = ()
    status: ResultStatus = ResultStatus.PENDING
    files_scanned: int = 0
    skipped: Tuple[Path, ...] = ()

    @classmethod
    def pending(cls, category: Category) -> "ResultSet":
        return cls(category=category)

    @property
    def is_empty(self) -> bool:
        return self.status in (ResultStatus.NO_OCCURRENCES, ResultStatus.CORPUS_EMPTY)

    def __len__(self) -> int:
        return len(self.occurrences)

    def __iter__(self) -> Iterator[Occurrence]:
        return iter(self.occurrences)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "status": self.status.value,
            "files_scanned": self.files_scanned,
            "skipped": [str(path) for path in self.skipped],
            "occurrences": [occurrence.as_dict() for occurrence in self.occurrences],
        }


def aggregate(
    category: Category,
    per_file: Iterable[Sequence[Occurrence]],
    *,
    files_scanned: int,
    skipped: Sequence[Path] = (),
) -> ResultSet:
    """Concatenate per-file lists, already in enumeration order, for one category."""
    occurrences = tuple(
        occurrence
        for file_occurrences in per_file
        for occurrence in file_occurrences
        if occurrence.category is category and occurrence.text.strip()
    )

    if occurrences:
        status = ResultStatus.FOUND
    elif files_scanned == 0 and not skipped:
        status = ResultStatus.CORPUS_EMPTY
    else:
        status = ResultStatus.NO_OCCURRENCES

    return ResultSet(
        category=category,
        occurrences=occurrences,
        status=status,
        files_scanned=files_scanned,
        skipped=tuple(skipped),
    )


def filter_occurrences(result_set: ResultSet, query: str) -> ResultSet:
    """Case-insensitive search over occurrence text and file path."""
    needle = query.strip().lower()
    if not needle or result_set.status is ResultStatus.PENDING:
        return result_set

    kept = tuple(
        occurrence
        for occurrence in result_set.occurrences
        if needle in occurrence.text.lower() or needle in str(occurrence.path).lower()
    )
    status = result_set.status
    if status is ResultStatus.FOUND and not kept:
        status = ResultStatus.NO_OCCURRENCES
    return ResultSet(
        category=result_set.category,
        occurrences=kept,
        status=status,
        files_scanned=result_set.files_scanned,
        skipped=result_set.skipped,
    )
