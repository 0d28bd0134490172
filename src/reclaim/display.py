"""Rich terminal display for reclaim."""

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from reclaim.categories import CATEGORIES, resolve_path
from reclaim.config import CleanupConfig
from reclaim.errors import UserCancelledError
from reclaim.formatting import format_bytes, truncate_path
from reclaim.models import (
    CategoryId,
    CleanupReport,
    DeletionOutcome,
    DeletionStatus,
    LargeItem,
    PrecisionMode,
    RiskLevel,
    RunSummary,
    ScanResult,
)
from reclaim.preview import render_preview

console = Console()


def risk_label(risk_level: RiskLevel) -> str:
    """Get styled label for risk level."""
    labels = {
        RiskLevel.SAFE: "[green]Safe[/green]",
        RiskLevel.REVIEW: "[yellow]Review[/yellow]",
    }
    return labels.get(risk_level, "Unknown")


def status_label(status: DeletionStatus) -> str:
    """Get styled label for a deletion status."""
    labels = {
        DeletionStatus.COMPLETED: "[green]completed[/green]",
        DeletionStatus.CANCELLED: "[yellow]cancelled by user[/yellow]",
        DeletionStatus.SKIPPED_DRY_RUN: "[cyan]dry run[/cyan]",
        DeletionStatus.SKIPPED_NO_PATH: "[dim]no path[/dim]",
    }
    return labels.get(status, status.value)


def show_categories(categories: list[CategoryId], config: CleanupConfig) -> None:
    """Display the active categories with their resolved paths."""
    table = Table(
        title=f"Categories ({config.platform.value})", show_header=True, header_style="bold"
    )
    table.add_column("Category")
    table.add_column("Name")
    table.add_column("Path")
    table.add_column("Risk")

    for category_id in categories:
        category = CATEGORIES[category_id]
        path = resolve_path(category_id, config.platform, config.path_overrides)
        table.add_row(
            category_id.value,
            category.name,
            str(path) if path else "[dim]not applicable[/dim]",
            risk_label(category.risk_level),
        )

    console.print(table)


def show_scan_result(result: ScanResult) -> None:
    """Display the analysis of a single path."""
    console.print(
        Panel(
            f"[bold]Path:[/bold] {result.path}\n"
            f"[bold]Size:[/bold] {result.size_formatted} ({result.size_bytes} bytes)\n"
            f"[bold]Files:[/bold] {result.file_count}\n"
            f"[bold]Directories:[/bold] {result.dir_count}",
            title=f"[bold]{result.category}[/bold]",
            border_style="blue",
        )
    )


def show_categorized_analysis(
    results: list[ScanResult],
    mode: PrecisionMode = PrecisionMode.EXACT,
) -> None:
    """Display per-category sizes with a total."""
    table = Table(title="Categorized Disk Usage Analysis", show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")

    total_size = 0
    for result in results:
        table.add_row(result.category, result.path, result.size_formatted, str(result.file_count))
        total_size += result.size_bytes

    table.add_section()
    table.add_row("[bold]TOTAL[/bold]", "", f"[bold]{format_bytes(total_size, mode=mode)}[/bold]", "")

    console.print(table)
    console.print()


def show_largest_items(items: list[LargeItem], mode: PrecisionMode = PrecisionMode.EXACT) -> None:
    """Display the largest files and folders."""
    table = Table(
        title=f"Top {len(items)} Largest Items (Files & Folders)",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Size", justify="right")
    table.add_column("Path")
    table.add_column("Type")

    for item in items:
        table.add_row(format_bytes(item.size_bytes, mode=mode), truncate_path(item.path, 58), item.kind)

    console.print(table)
    console.print()


def show_opportunities(results: list[ScanResult], threshold_mb: int) -> None:
    """Display categories above the highlight threshold."""
    if not results:
        console.print("No significant cleanup opportunities found.")
        console.print()
        return

    table = Table(title="Cleanup Opportunities", show_header=True, header_style="bold yellow")
    table.add_column("Category", style="yellow")
    table.add_column("Path")
    table.add_column("Size", justify="right")

    for result in results:
        table.add_row(result.category, truncate_path(result.path, 48), result.size_formatted)

    console.print(table)
    console.print(f"[dim]Categories of {threshold_mb} MB or more. Run [bold]reclaim clean[/bold] to clean them.[/dim]")
    console.print()


def show_cleanup_preview(
    report: CleanupReport,
    mode: PrecisionMode = PrecisionMode.EXACT,
    dry_run: bool = False,
) -> None:
    """Display cleanup preview."""
    if dry_run:
        console.print("[yellow]DRY-RUN MODE: No files will be deleted[/yellow]\n")

    console.print("[bold]Cleanup Preview[/bold]")
    if report.min_age_days > 0:
        console.print(f"Showing files older than {report.min_age_days} days\n")
    else:
        console.print("Showing all cleanable files\n")

    console.print(render_preview(report, mode), markup=False, highlight=False, soft_wrap=True)
    console.print()


def show_deletion_outcome(outcome: DeletionOutcome, mode: PrecisionMode = PrecisionMode.EXACT) -> None:
    """Display result of a single category cleanup."""
    if outcome.status == DeletionStatus.COMPLETED:
        line = (
            f"  [green]✓[/green] {outcome.category}: {outcome.deleted} files deleted, "
            f"{format_bytes(outcome.bytes_freed, mode=mode)} freed"
        )
        if outcome.failed:
            line += f", [red]{outcome.failed} failed[/red]"
        console.print(line)
    elif outcome.status == DeletionStatus.SKIPPED_DRY_RUN:
        console.print(
            f"  [cyan]-[/cyan] {outcome.category}: would delete {len(outcome.targeted)} files "
            f"({format_bytes(outcome.bytes_targeted, mode=mode)})"
        )
    else:
        console.print(f"  [yellow]![/yellow] {outcome.category}: {status_label(outcome.status)}")


def show_run_summary(summary: RunSummary, mode: PrecisionMode = PrecisionMode.EXACT) -> None:
    """Display cleanup summary."""
    console.print()
    console.print("[bold green]Cleanup Complete![/bold green]")
    console.print()

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Space freed", format_bytes(summary.bytes_freed, mode=mode))
    table.add_row("Files cleaned", str(summary.cleaned))
    table.add_row("[red]Failed[/red]" if summary.failed else "Failed", str(summary.failed))
    table.add_row("Files preserved", str(summary.preserved))
    table.add_row("Categories completed", str(summary.categories_completed))
    table.add_row("Categories skipped", str(summary.categories_skipped))

    console.print(table)


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def confirm_deletion(category: str, file_count: int, total_bytes: int) -> bool:
    """
    Ask before deleting a category's files.

    Raises:
        UserCancelledError: If the prompt is interrupted
    """
    from rich.prompt import Confirm

    console.print(f"[yellow]About to delete {file_count} files from category: {category}[/yellow]")
    console.print(f"Total size: {format_bytes(total_bytes)}")
    try:
        return Confirm.ask("Delete these files?", default=False, console=console)
    except (KeyboardInterrupt, EOFError) as e:
        raise UserCancelledError(f"Cleanup of {category} interrupted") from e
