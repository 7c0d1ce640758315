"""FastAPI application exposing the scanner to editor front-ends."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from annofinder import __version__
from annofinder.config import AppConfig
from annofinder.errors import NavigationNotFound, NavigationTargetGone
from annofinder.models import Category, NavigationTarget, TodoSelection
from annofinder.scan.aggregator import filter_occurrences
from annofinder.scan.navigator import navigate
from annofinder.scan.scanner import scan_root
from annofinder.utils.editor import open_target

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="AnnoFinder API", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class ScanPayload(BaseModel):
    root: Path
    category: str
    query: str | None = None


class ResolvePayload(BaseModel):
    root: Path
    label: str
    description: str


class OpenRequest(BaseModel):
    path: Path
    line: int = 0
    column: int = 0
    editor: str | None = None


def _resolve_root(root: Path) -> Path:
    resolved = AppConfig(root=root.expanduser()).resolve_root(Path.cwd())
    if not resolved.exists():
        raise HTTPException(status_code=404, detail=f"Root not found: {resolved}")
    return resolved


def _parse_category(value: str) -> Category:
    try:
        return Category(value.strip().lower())
    except ValueError:
        choices = ", ".join(category.value for category in Category)
        raise HTTPException(status_code=400, detail=f"Unknown category '{value}'. Expected one of: {choices}")


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/scan")
async def scan(payload: ScanPayload) -> dict[str, Any]:
    category = _parse_category(payload.category)
    root = _resolve_root(payload.root)

    report = await asyncio.to_thread(scan_root, AppConfig(root=root), [category])
    result_set = report[category]
    if payload.query:
        result_set = filter_occurrences(result_set, payload.query)
    return result_set.as_dict()


@app.post("/todos/resolve")
async def resolve_todo(payload: ResolvePayload) -> dict[str, Any]:
    """Map a displayed TODO back to its file and line.

    The corpus is scanned again; scans are deterministic, so the result set is
    the one the label was built from as long as the files did not change.
    """
    root = _resolve_root(payload.root)
    report = await asyncio.to_thread(scan_root, AppConfig(root=root), [Category.TODO])
    selection = TodoSelection(label=payload.label, description=payload.description)
    try:
        target = navigate(selection, report[Category.TODO])
    except NavigationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NavigationTargetGone as exc:
        raise HTTPException(status_code=410, detail=str(exc)) from exc
    return target.as_dict()


@app.post("/open")
async def open_location(payload: OpenRequest) -> dict[str, str]:
    path = payload.path.expanduser()
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"File not found: {path}")

    target = NavigationTarget(path=path, line=max(payload.line, 0), column=max(payload.column, 0))
    try:
        open_target(target, payload.editor or AppConfig().editor)
    except NavigationTargetGone as exc:
        raise HTTPException(status_code=410, detail=str(exc)) from exc
    return {"status": "ok"}
