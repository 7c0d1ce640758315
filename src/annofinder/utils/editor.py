"""Open a navigation target in the user's editor."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List

from annofinder.errors import NavigationTargetGone
from annofinder.models import NavigationTarget

LOGGER = logging.getLogger(__name__)

# Editors that accept ``--goto file:line:column``
_GOTO_EDITORS = {"code", "code-insiders", "codium", "cursor"}
# Editors that accept ``+line file``
_PLUS_LINE_EDITORS = {"vim", "nvim", "vi", "emacs", "nano", "micro", "kak"}


def _platform_opener(path: Path) -> List[str] | None:
    if os.name == "posix":
        opener = "open" if sys.platform == "darwin" else "xdg-open"
        return [opener, str(path)]
    return None


def build_editor_command(target: NavigationTarget, editor: str | None) -> List[str] | None:
    """Build the argv that opens ``target``.

    Returns ``None`` on platforms where only ``os.startfile`` is available.
    """
    line = target.line + 1
    column = target.column + 1
    if editor:
        argv = shlex.split(editor)
        name = Path(argv[0]).stem.lower()
        if shutil.which(argv[0]) is not None:
            if name in _GOTO_EDITORS:
                return [*argv, "--goto", f"{target.path}:{line}:{column}"]
            if name in _PLUS_LINE_EDITORS:
                return [*argv, f"+{line}", str(target.path)]
            return [*argv, str(target.path)]
        LOGGER.debug("Editor %s not found, falling back to platform opener", argv[0])
    return _platform_opener(target.path)


def open_target(target: NavigationTarget, editor: str | None = None) -> None:
    """Hand ``target`` to the editor; raise ``NavigationTargetGone`` on failure."""
    path = target.path
    if not path.is_file():
        raise NavigationTargetGone(path)

    command = build_editor_command(target, editor)
    try:
        if command is not None:
            LOGGER.debug("Running %s", command)
            subprocess.Popen(command)
        else:
            os.startfile(path)  # type: ignore[attr-defined]
    except OSError as exc:
        LOGGER.error("Unable to open %s: %s", path, exc)
        raise NavigationTargetGone(path, str(exc)) from exc
