"""Tests for the corpus scanner."""

from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from annofinder.config import AppConfig
from annofinder.errors import ScanCancelled
from annofinder.models import Category
from annofinder.patterns import DEFAULT_REGISTRY
from annofinder.scan.aggregator import ResultStatus
from annofinder.scan.scanner import Scanner, ScanStats, scan_root


class TestScanStats:
    """Test ScanStats tracking."""

    def test_init_defaults(self) -> None:
        stats = ScanStats()

        assert stats.scanned == 0
        assert stats.skipped == 0
        assert stats.occurrences == 0
        assert stats.skipped_files == []

    def test_record_scanned(self) -> None:
        stats = ScanStats()

        stats.record(Path("/a.py"), [])

        assert stats.scanned == 1
        assert stats.skipped == 0

    def test_record_skipped(self) -> None:
        stats = ScanStats()

        stats.record(Path("/bad.py"), None)

        assert stats.skipped == 1
        assert stats.skipped_files == [Path("/bad.py")]


class TestScanner:
    """Test Scanner pipeline."""

    @pytest.fixture
    def scanner(self) -> Scanner:
        return Scanner(DEFAULT_REGISTRY, max_workers=4)

    def test_empty_corpus(self, scanner: Scanner) -> None:
        """An empty corpus is an explicit empty state, not an error."""
        report = scanner.scan([])

        for category in Category:
            assert report[category].status is ResultStatus.CORPUS_EMPTY
        assert report.stats.scanned == 0

    def test_unreadable_file_is_skipped(self, scanner: Scanner, tmp_path: Path) -> None:
        """One bad file out of ten does not abort the scan."""
        paths = []
        for index in range(10):
            path = tmp_path / f"file{index}.py"
            if index == 4:
                path.write_bytes(b"\xff\xfe# broken")
            else:
                path.write_text(f"# comment {index}\n")
            paths.append(path)

        report = scanner.scan(paths, [Category.COMMENT])
        comments = report[Category.COMMENT]

        assert len(comments) == 9
        assert comments.status is ResultStatus.FOUND
        assert comments.skipped == (tmp_path / "file4.py",)
        assert report.stats.skipped == 1
        assert report.stats.scanned == 9

    def test_order_follows_input_not_completion(self, tmp_path: Path) -> None:
        paths = []
        for index in range(40):
            path = tmp_path / f"f{index:02d}.js"
            path.write_text(f"// note {index}\n" * 3)
            paths.append(path)

        report = Scanner(DEFAULT_REGISTRY, max_workers=8).scan(paths, [Category.COMMENT])

        expected = [f"// note {index}" for index in range(40) for _ in range(3)]
        assert [o.text for o in report[Category.COMMENT]] == expected

    def test_scanning_twice_is_identical(self, scanner: Scanner, tmp_path: Path) -> None:
        for name in ["a.py", "b.js", "c.java"]:
            (tmp_path / name).write_text('# TODO x\n// y\nprint("z")\n/* w */\n')
        paths = sorted(tmp_path.iterdir())

        first = scanner.scan(paths)
        second = scanner.scan(paths)

        assert first.results == second.results

    def test_only_requested_categories(self, scanner: Scanner, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("# TODO\n")

        report = scanner.scan([path], [Category.TODO])

        assert list(report.results) == [Category.TODO]

    def test_no_occurrences(self, scanner: Scanner, tmp_path: Path) -> None:
        path = tmp_path / "plain.go"
        path.write_text("package main\n")

        report = scanner.scan([path])

        assert report[Category.TODO].status is ResultStatus.NO_OCCURRENCES

    def test_cancelled_scan_returns_nothing(self, scanner: Scanner, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("# x\n")
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(ScanCancelled):
            scanner.scan([path], cancel_event=cancel)

    def test_cancel_mid_scan(self, scanner: Scanner, tmp_path: Path) -> None:
        """Cancelling while files are being read aborts the whole scan."""
        paths = []
        for index in range(5):
            path = tmp_path / f"f{index}.py"
            path.write_text("# x\n")
            paths.append(path)
        cancel = threading.Event()

        from annofinder.scan import scanner as scanner_module

        real_extract = scanner_module.extract

        def cancelling_extract(*args, **kwargs):
            cancel.set()
            return real_extract(*args, **kwargs)

        with patch.object(scanner_module, "extract", side_effect=cancelling_extract):
            with pytest.raises(ScanCancelled):
                scanner.scan(paths, cancel_event=cancel)


class TestScanRoot:
    """Test scan_root helper."""

    def test_scans_workspace(self, tmp_path: Path) -> None:
        (tmp_path / "b.py").write_text("# TODO second\n")
        (tmp_path / "a.js").write_text("// TODO first\n")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "dep.js").write_text("// TODO vendored\n")
        (tmp_path / "readme.md").write_text("TODO not scanned\n")

        report = scan_root(AppConfig(root=tmp_path, max_workers=2), [Category.TODO])

        assert [o.text for o in report[Category.TODO]] == ["// TODO first", "# TODO second"]

    def test_relative_root(self, tmp_path: Path) -> None:
        project = tmp_path / "project"
        project.mkdir()
        (project / "a.py").write_text("print(1)\n")

        report = scan_root(AppConfig(root=Path("project")), [Category.LOG], base_dir=tmp_path)

        assert [o.text for o in report[Category.LOG]] == ["print(1)"]

    def test_missing_root_is_corpus_empty(self, tmp_path: Path) -> None:
        report = scan_root(AppConfig(root=tmp_path / "missing"))

        assert report[Category.COMMENT].status is ResultStatus.CORPUS_EMPTY
