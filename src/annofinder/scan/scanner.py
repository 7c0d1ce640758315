"""Corpus scanning pipeline."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from annofinder.config import AppConfig
from annofinder.errors import FileUnreadable, ScanCancelled
from annofinder.models import Category, Occurrence
from annofinder.patterns.registry import DEFAULT_REGISTRY, PatternRegistry
from annofinder.scan.aggregator import ResultSet, aggregate
from annofinder.scan.extractor import extract, read_source
from annofinder.utils.files import iter_source_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanStats:
    scanned: int = 0
    skipped: int = 0
    occurrences: int = 0
    skipped_files: list[Path] = field(default_factory=list)

    def record(self, path: Path, occurrences: Sequence[Occurrence] | None) -> None:
        if occurrences is None:
            self.skipped += 1
            self.skipped_files.append(path)
        else:
            self.scanned += 1
            self.occurrences += len(occurrences)


@dataclass(slots=True)
class ScanReport:
    results: Dict[Category, ResultSet]
    stats: ScanStats

    def __getitem__(self, category: Category) -> ResultSet:
        return self.results[category]


class Scanner:
    """Reads and extracts files on a bounded thread pool."""

    def __init__(
        self,
        registry: PatternRegistry,
        *,
        max_workers: int = 4,
        encoding: str = "utf-8",
    ) -> None:
        self.registry = registry
        self.max_workers = max_workers
        self.encoding = encoding

    def scan(
        self,
        paths: Iterable[Path],
        categories: Iterable[Category] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ScanReport:
        """Scan ``paths`` and build one result set per category.

        Results follow the order of ``paths`` regardless of which worker finishes
        first. Raises ``ScanCancelled`` if ``cancel_event`` is set before the scan
        completes; no partial report is returned in that case.
        """
        wanted = list(categories) if categories is not None else list(Category)
        files = list(paths)
        stats = ScanStats()

        if not files:
            LOGGER.warning("No source files found")

        per_file: List[List[Occurrence]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: List[Future[List[Occurrence] | None]] = [
                executor.submit(self._scan_single, path, wanted, cancel_event) for path in files
            ]
            try:
                for path, future in zip(files, futures):
                    occurrences = future.result()
                    self._check_cancelled(cancel_event)
                    stats.record(path, occurrences)
                    if occurrences is not None:
                        per_file.append(occurrences)
            except ScanCancelled:
                for future in futures:
                    future.cancel()
                LOGGER.info("Scan cancelled after %d of %d files", stats.scanned + stats.skipped, len(files))
                raise

        if stats.skipped:
            LOGGER.warning("%d file(s) skipped", stats.skipped)

        results = {
            category: aggregate(
                category,
                per_file,
                files_scanned=stats.scanned,
                skipped=stats.skipped_files,
            )
            for category in wanted
        }
        return ScanReport(results=results, stats=stats)

    def _scan_single(
        self,
        path: Path,
        categories: Sequence[Category],
        cancel_event: threading.Event | None,
    ) -> List[Occurrence] | None:
        """Extract from one file; ``None`` means the file was skipped."""
        self._check_cancelled(cancel_event)
        try:
            source = read_source(path, encoding=self.encoding)
        except FileUnreadable as exc:
            LOGGER.warning("Skipping %s: %s", path, exc.reason)
            return None
        return extract(source, self.registry, categories)

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ScanCancelled("Scan cancelled")


def scan_root(
    config: AppConfig,
    categories: Iterable[Category] | None = None,
    *,
    registry: PatternRegistry = DEFAULT_REGISTRY,
    base_dir: Path | None = None,
    cancel_event: threading.Event | None = None,
) -> ScanReport:
    """Enumerate the configured workspace and scan it."""
    root = config.resolve_root(base_dir)
    paths = list(
        iter_source_paths(root, extensions=config.extensions, exclude_dirs=config.exclude_dirs)
    )
    LOGGER.info("Scanning %d files under %s", len(paths), root)
    scanner = Scanner(registry, max_workers=config.max_workers, encoding=config.encoding)
    return scanner.scan(paths, categories, cancel_event=cancel_event)
