"""Command line interface for AnnoFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from annofinder.config import AppConfig
from annofinder.errors import NavigationNotFound, NavigationTargetGone
from annofinder.models import Category
from annofinder.scan.aggregator import ResultSet, ResultStatus, filter_occurrences
from annofinder.scan.navigator import navigate, selection_for
from annofinder.scan.scanner import scan_root
from annofinder.utils.editor import open_target
from annofinder.utils.text import one_line
from annofinder.web.app import app as web_app


console = Console()
app = typer.Typer(help="AnnoFinder - gather comments, log statements and TODOs from source files")

_EMPTY_MESSAGES = {
    Category.COMMENT: "No comments found in the project.",
    Category.LOG: "No log statements found in the project.",
    Category.TODO: "No TODO found in the project.",
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(root: Path, workers: Optional[int]) -> AppConfig:
    defaults = AppConfig()
    return AppConfig(
        root=root,
        max_workers=workers if workers is not None else defaults.max_workers,
    )


def _report_empty(result_set: ResultSet) -> bool:
    """Print the empty-state notice; return True if there is nothing to show."""
    if result_set.skipped:
        console.print(f"[yellow]{len(result_set.skipped)} file(s) skipped.[/yellow]")
    if result_set.status is ResultStatus.CORPUS_EMPTY:
        console.print("[yellow]No source files found.[/yellow]")
        return True
    if result_set.status is ResultStatus.NO_OCCURRENCES:
        console.print(f"[yellow]{_EMPTY_MESSAGES[result_set.category]}[/yellow]")
        return True
    return False


def _show_matches(result_set: ResultSet, title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("File")
    table.add_column("Rule")
    table.add_column("Text")
    for occurrence in result_set:
        table.add_row(str(occurrence.path), occurrence.rule, one_line(occurrence.text))
    console.print(table)


def _gather(category: Category, root: Path, query: Optional[str], workers: Optional[int], title: str) -> None:
    config = _build_config(root, workers)
    report = scan_root(config, [category], base_dir=Path.cwd())
    result_set = report[category]
    if query:
        result_set = filter_occurrences(result_set, query)
    if _report_empty(result_set):
        return
    _show_matches(result_set, title)
    console.print(f"Found {len(result_set)} in {result_set.files_scanned} file(s).")


@app.command()
def comments(
    root: Path = typer.Argument(Path("."), help="Workspace root to scan."),
    query: Optional[str] = typer.Option(None, "--filter", help="Only show matches containing this text"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Parallel file readers"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Gather comments from every source file."""
    _setup_logging(verbose)
    _gather(Category.COMMENT, root, query, workers, "Project Comments")


@app.command()
def logs(
    root: Path = typer.Argument(Path("."), help="Workspace root to scan."),
    query: Optional[str] = typer.Option(None, "--filter", help="Only show matches containing this text"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Parallel file readers"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search for logging statements."""
    _setup_logging(verbose)
    _gather(Category.LOG, root, query, workers, "Project Logs")


@app.command()
def todos(
    root: Path = typer.Argument(Path("."), help="Workspace root to scan."),
    pick: Optional[int] = typer.Option(None, "--pick", min=1, help="Row number of the TODO to jump to"),
    open_file: bool = typer.Option(False, "--open/--no-open", help="Open the picked TODO in an editor"),
    editor: str = typer.Option(AppConfig().editor, "--editor", help="Editor command used by --open"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Parallel file readers"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List TODO lines and optionally jump to one of them."""
    _setup_logging(verbose)
    config = _build_config(root, workers)
    report = scan_root(config, [Category.TODO], base_dir=Path.cwd())
    result_set = report[Category.TODO]
    if _report_empty(result_set):
        return

    selections = [selection_for(occurrence) for occurrence in result_set]

    if pick is None:
        table = Table(title="Project TODOs", show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("Location")
        table.add_column("Text")
        for number, selection in enumerate(selections, start=1):
            table.add_row(str(number), selection.label, selection.description)
        console.print(table)
        return

    if pick > len(selections):
        raise typer.BadParameter(f"--pick must be between 1 and {len(selections)}")

    try:
        target = navigate(selections[pick - 1], result_set)
        if open_file:
            open_target(target, editor)
    except (NavigationNotFound, NavigationTargetGone) as exc:
        console.print(f"[red]Cannot navigate: {exc}[/red]")
        raise typer.Exit(code=1)

    typer.echo(f"{target.path}:{target.line + 1}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the JSON API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting AnnoFinder API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
