"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSIONS: frozenset[str] = frozenset(
    {"js", "ts", "jsx", "tsx", "java", "py", "html", "css", "cpp", "c", "cs", "php", "rb", "go"}
)
DEFAULT_EXCLUDE_DIRS: frozenset[str] = frozenset({"node_modules"})
DEFAULT_EDITOR = "code"


def _get_default_workers() -> int:
    # Same bound as ThreadPoolExecutor's own default
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass(slots=True)
class AppConfig:
    root: Path | None = None
    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    exclude_dirs: frozenset[str] = DEFAULT_EXCLUDE_DIRS
    encoding: str = "utf-8"
    max_workers: int = field(default_factory=_get_default_workers)
    editor: str = DEFAULT_EDITOR

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = Path(".")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        if self.root is None:
            self.root = Path(".")
        if Path(self.root).is_absolute() or base_dir is None:
            return Path(self.root)
        return base_dir / self.root
