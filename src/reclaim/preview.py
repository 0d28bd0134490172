"""Read-only cleanup preview for reclaim."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from reclaim.age import AgeFilter
from reclaim.categories import list_categories, resolve_path
from reclaim.config import CleanupConfig, parse_min_age
from reclaim.formatting import format_bytes, truncate_path
from reclaim.models import CategoryId, CleanupReport, PrecisionMode, PreviewEntry
from reclaim.probe import FilesystemProbe, LocalProbe

logger = logging.getLogger(__name__)

CATEGORY_WIDTH = 20
PATH_WIDTH = 40
PATH_DISPLAY_WIDTH = PATH_WIDTH - 2
FILES_WIDTH = 10
SIZE_WIDTH = 15
RULE = "-" * 80


def collect_eligible_files(
    root: Path,
    age_filter: AgeFilter,
    probe: FilesystemProbe,
) -> tuple[list[tuple[Path, int]], int]:
    """
    Enumerate every regular file under root and split it by the age filter.

    Files that vanish or cannot be stat'ed while enumerating are ignored.

    Args:
        root: Category root
        age_filter: Filter deciding eligibility
        probe: Filesystem access

    Returns:
        Tuple of (eligible (path, size) pairs sorted by path, ineligible file count)
    """
    eligible: list[tuple[Path, int]] = []
    ineligible = 0

    for file_path in sorted(probe.list_files(root)):
        try:
            if age_filter.active and not age_filter.accepts(probe.stat_mtime(file_path)):
                ineligible += 1
                continue
            eligible.append((file_path, probe.stat_size(file_path)))
        except OSError:
            continue

    return eligible, ineligible


def scan_cleanup_category(
    category: CategoryId,
    config: CleanupConfig,
    *,
    probe: FilesystemProbe,
    age_filter: AgeFilter,
) -> PreviewEntry | None:
    """
    Count the eligible files of one category.

    Returns:
        PreviewEntry, or None when the category path is unresolved or missing
    """
    path = resolve_path(category, config.platform, config.path_overrides)

    if path is None or not probe.exists(path):
        logger.debug("Category %s: path not found (%s)", category.value, path or "")
        return None

    logger.info("Scanning category: %s (%s)", category.value, path)
    eligible, _ = collect_eligible_files(path, age_filter, probe)

    return PreviewEntry(
        category=category.value,
        path=str(path),
        file_count=len(eligible),
        total_size=sum(size for _, size in eligible),
    )


def preview_cleanup(
    min_age_days: int | str = 0,
    config: CleanupConfig | None = None,
    *,
    probe: FilesystemProbe | None = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> CleanupReport:
    """
    Report what a cleanup would remove, without touching anything.

    Args:
        min_age_days: Only count files at least this many days old
        config: Run configuration (platform, path overrides, workers)
        probe: Filesystem access, defaults to the local disk
        progress_callback: Optional callback(category, current, total)

    Returns:
        CleanupReport with one entry per category whose path exists

    Raises:
        InvalidArgumentError: If min_age_days is not a non-negative integer
    """
    min_age = parse_min_age(min_age_days)
    config = config or CleanupConfig()
    probe = probe or LocalProbe()
    age_filter = AgeFilter(min_age)
    categories = list_categories(config.platform)
    total = len(categories)

    entries: list[PreviewEntry] = []
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        scans = executor.map(
            lambda c: scan_cleanup_category(c, config, probe=probe, age_filter=age_filter),
            categories,
        )
        for i, (category, entry) in enumerate(zip(categories, scans)):
            if progress_callback:
                progress_callback(category.value, i + 1, total)
            if entry is not None:
                entries.append(entry)

    return CleanupReport(min_age_days=min_age, entries=tuple(entries))


def _row(category: str, path: str, files: str, size: str) -> str:
    return (
        f"{category:<{CATEGORY_WIDTH}} {path:<{PATH_WIDTH}} "
        f"{files:>{FILES_WIDTH}} {size:>{SIZE_WIDTH}}"
    )


def render_preview(report: CleanupReport, mode: PrecisionMode = PrecisionMode.EXACT) -> str:
    """
    Render a report as a fixed-width table ending in a TOTAL row.

    Long paths keep their tail and start with "...".
    """
    lines = [_row("Category", "Path", "Files", "Size"), RULE]

    for entry in report.entries:
        lines.append(
            _row(
                entry.category,
                truncate_path(entry.path, PATH_DISPLAY_WIDTH),
                str(entry.file_count),
                format_bytes(entry.total_size, mode=mode),
            )
        )

    lines.append(RULE)
    lines.append(
        _row("TOTAL", "", str(report.total_files), format_bytes(report.total_size, mode=mode))
    )
    return "\n".join(lines)
