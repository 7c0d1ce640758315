"""Tests for the editor launcher."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from annofinder.errors import NavigationTargetGone
from annofinder.models import NavigationTarget
from annofinder.utils.editor import build_editor_command, open_target


class TestBuildEditorCommand:
    """Test build_editor_command function."""

    @pytest.fixture
    def target(self, tmp_path: Path) -> NavigationTarget:
        return NavigationTarget(path=tmp_path / "a.py", line=3, column=0)

    @patch("annofinder.utils.editor.shutil.which", return_value="/usr/bin/code")
    def test_vscode_goto(self, mock_which, target: NavigationTarget) -> None:
        """Line and column become 1-based."""
        assert build_editor_command(target, "code") == ["code", "--goto", f"{target.path}:4:1"]

    @patch("annofinder.utils.editor.shutil.which", return_value="/usr/bin/vim")
    def test_plus_line_editor(self, mock_which, target: NavigationTarget) -> None:
        assert build_editor_command(target, "vim") == ["vim", "+4", str(target.path)]

    @patch("annofinder.utils.editor.shutil.which", return_value="/usr/bin/subl")
    def test_unknown_editor_gets_path_only(self, mock_which, target: NavigationTarget) -> None:
        assert build_editor_command(target, "subl -n") == ["subl", "-n", str(target.path)]

    @pytest.mark.skipif(os.name != "posix", reason="platform opener is posix only")
    @patch("annofinder.utils.editor.shutil.which", return_value=None)
    def test_missing_editor_falls_back(self, mock_which, target: NavigationTarget) -> None:
        with patch("annofinder.utils.editor.sys.platform", "linux"):
            assert build_editor_command(target, "code") == ["xdg-open", str(target.path)]

    @pytest.mark.skipif(os.name != "posix", reason="platform opener is posix only")
    def test_no_editor_uses_platform_opener(self, target: NavigationTarget) -> None:
        with patch("annofinder.utils.editor.sys.platform", "darwin"):
            assert build_editor_command(target, None) == ["open", str(target.path)]


class TestOpenTarget:
    """Test open_target function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        target = NavigationTarget(path=tmp_path / "gone.py", line=0)

        with pytest.raises(NavigationTargetGone):
            open_target(target, "code")

    @patch("annofinder.utils.editor.subprocess.Popen")
    @patch("annofinder.utils.editor.shutil.which", return_value="/usr/bin/code")
    def test_launches_editor(self, mock_which, mock_popen, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("# TODO\n")

        open_target(NavigationTarget(path=path, line=0), "code")

        mock_popen.assert_called_once_with(["code", "--goto", f"{path}:1:1"])

    @patch("annofinder.utils.editor.subprocess.Popen", side_effect=OSError("boom"))
    @patch("annofinder.utils.editor.shutil.which", return_value="/usr/bin/code")
    def test_launch_failure(self, mock_which, mock_popen, tmp_path: Path) -> None:
        path = tmp_path / "a.py"
        path.write_text("# TODO\n")

        with pytest.raises(NavigationTargetGone, match="boom"):
            open_target(NavigationTarget(path=path, line=0), "code")
