"""CLI interface for reclaim."""

from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from reclaim import __version__
from reclaim.categories import list_categories, parse_category
from reclaim.cleaner import clean_categories
from reclaim.config import CleanupConfig, load_config, resolve_mode
from reclaim.display import (
    console,
    show_categories,
    show_categorized_analysis,
    show_cleanup_preview,
    show_deletion_outcome,
    show_largest_items,
    show_opportunities,
    show_run_summary,
    show_scan_result,
    show_scanning_progress,
)
from reclaim.errors import PathNotFoundError, ReclaimError
from reclaim.logs import setup_logging
from reclaim.preview import preview_cleanup
from reclaim.scanner import (
    analyze_all_categories,
    find_cleanup_opportunities,
    find_largest_items,
    scan,
)

# Create Typer app
app = typer.Typer(
    name="reclaim",
    help="Find, preview and safely delete reclaimable disk space on macOS and Linux",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"reclaim version {__version__}")
        raise typer.Exit()


def _fail(error: ReclaimError) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1) from error


def _build_config(**overrides) -> CleanupConfig:
    try:
        return load_config(**overrides)
    except ReclaimError as e:
        _fail(e)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """reclaim - categorized disk analysis and safe cleanup."""


@app.command(name="list")
def list_command() -> None:
    """List the cleanup categories for this platform."""
    config = _build_config()
    show_categories(list_categories(config.platform), config)


@app.command()
def analyze(
    path: Optional[str] = typer.Argument(None, help="Path to analyze (default: every category)"),
    depth: int = typer.Option(3, "--depth", "-d", help="Depth limit for file and folder counts"),
    items: int = typer.Option(20, "--items", help="Show top N largest items"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Analyze disk usage by category and show cleanup opportunities."""
    config = _build_config(max_depth=depth, verbose=verbose or None, quiet=quiet or None)
    setup_logging(config, "analyze")

    if path:
        try:
            result = scan(path, "custom", config.max_depth, config=config)
        except ReclaimError as e:
            _fail(e)
        show_scan_result(result)
        return

    console.print("[bold blue]Analyzing disk usage...[/bold blue]\n")

    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning categories...", total=len(list_categories(config.platform)))

        def update_progress(name: str, current: int, total: int) -> None:
            progress.update(task, completed=current, description=f"Scanning {name}...")

        results = analyze_all_categories(config, progress_callback=update_progress)

    show_categorized_analysis(results, config.precision_mode)

    try:
        largest = find_largest_items(Path.home(), items)
    except PathNotFoundError:
        largest = []
    except ReclaimError as e:
        _fail(e)
    show_largest_items(largest, config.precision_mode)

    opportunities = find_cleanup_opportunities(results, config.highlight_threshold_mb)
    show_opportunities(opportunities, config.highlight_threshold_mb)


@app.command()
def preview(
    min_age: str = typer.Option("0", "--min-age", help="Only count files older than N days"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
) -> None:
    """Preview what a cleanup would delete, without deleting anything."""
    config = _build_config(min_age_days=min_age, verbose=verbose or None)
    setup_logging(config, "preview")

    report = preview_cleanup(config.min_age_days, config)
    show_cleanup_preview(report, config.precision_mode)


@app.command()
def clean(
    category: Optional[List[str]] = typer.Option(
        None, "--category", "-c", help="Clean only this category (repeatable)"
    ),
    min_age: str = typer.Option("0", "--min-age", help="Only clean files older than N days"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be cleaned"),
    force: bool = typer.Option(False, "--force", "-f", "--yes", "-y", help="Skip confirmation prompts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Delete eligible files category by category."""
    config = _build_config(
        min_age_days=min_age,
        mode=resolve_mode(dry_run=dry_run, force=force),
        verbose=verbose or None,
        quiet=quiet or None,
    )
    try:
        categories = [parse_category(c) for c in category] if category else None
    except ReclaimError as e:
        _fail(e)

    log_file = setup_logging(config, "clean")

    if config.force:
        console.print("[yellow]FORCE MODE: Confirmations disabled[/yellow]")

    report = preview_cleanup(config.min_age_days, config)
    if categories is not None:
        selected = {c.value for c in categories}
        report = report.model_copy(
            update={"entries": tuple(e for e in report.entries if e.category in selected)}
        )
    show_cleanup_preview(report, config.precision_mode, dry_run=config.dry_run)

    console.print("[bold]Cleaning...[/bold]")
    summary = clean_categories(
        categories,
        config.min_age_days,
        config.mode,
        config=config,
        progress_callback=lambda outcome, current, total: show_deletion_outcome(
            outcome, config.precision_mode
        ),
    )
    show_run_summary(summary, config.precision_mode)

    if log_file:
        console.print(f"[dim]Log file: {log_file}[/dim]")


if __name__ == "__main__":
    app()
