"""Disk scanning functionality for reclaim."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from reclaim.categories import expand_path, list_categories, resolve_path
from reclaim.config import CleanupConfig
from reclaim.errors import InvalidArgumentError, PathNotFoundError
from reclaim.formatting import format_bytes, size_in_mb
from reclaim.models import CategoryId, LargeItem, PrecisionMode, ScanResult
from reclaim.probe import FilesystemProbe, LocalProbe

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3


def _sum_file_sizes(probe: FilesystemProbe, path: Path, max_depth: int | None) -> int:
    """Add up individual file sizes, skipping files that vanish or cannot be read."""
    total_size = 0
    for file_path in probe.list_files(path, max_depth):
        try:
            total_size += probe.stat_size(file_path)
        except OSError:
            continue
    return total_size


def scan(
    path: str | Path,
    category_label: str = "unknown",
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    probe: FilesystemProbe | None = None,
    config: CleanupConfig | None = None,
) -> ScanResult:
    """
    Measure one path.

    The size covers the whole subtree when the probe can aggregate it, and
    falls back to summing files up to max_depth otherwise. File and directory
    counts always stop at max_depth, so they can describe less of the tree
    than the size does.

    Args:
        path: File or directory to scan (may contain ~)
        category_label: Label stored on the result
        max_depth: Depth limit for counts and for the fallback size sum
        probe: Filesystem access, defaults to the local disk
        config: Run configuration (precision mode for the size string)

    Returns:
        ScanResult with size and counts

    Raises:
        PathNotFoundError: If the path does not exist
        InvalidArgumentError: If max_depth is negative
    """
    if max_depth < 0:
        raise InvalidArgumentError(f"Invalid depth: {max_depth} (must be a non-negative integer)")

    probe = probe or LocalProbe()
    expanded_path = expand_path(str(path))

    if not probe.exists(expanded_path):
        raise PathNotFoundError(str(expanded_path))

    total_size = probe.aggregate_size(expanded_path)
    if total_size is None:
        logger.warning(
            "No size aggregation available for %s, summing files up to depth %d",
            expanded_path,
            max_depth,
        )
        total_size = _sum_file_sizes(probe, expanded_path, max_depth)

    file_count = sum(1 for _ in probe.list_files(expanded_path, max_depth))
    dir_count = sum(1 for _ in probe.list_dirs(expanded_path, max_depth))

    precision_mode = config.precision_mode if config else PrecisionMode.EXACT
    return ScanResult(
        category=category_label,
        path=str(expanded_path),
        size_bytes=total_size,
        size_formatted=format_bytes(total_size, mode=precision_mode),
        size_mb=size_in_mb(total_size),
        file_count=file_count,
        dir_count=dir_count,
    )


def analyze(
    path: str | Path,
    category_label: str = "unknown",
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    probe: FilesystemProbe | None = None,
    config: CleanupConfig | None = None,
) -> ScanResult:
    """Analyze a path for a category. Same contract as scan()."""
    return scan(path, category_label, max_depth, probe=probe, config=config)


def _scan_category(
    category: CategoryId,
    config: CleanupConfig,
    probe: FilesystemProbe,
) -> ScanResult | None:
    path = resolve_path(category, config.platform, config.path_overrides)

    if path is None or not probe.exists(path):
        logger.debug("Skipping category %s (path not found: %s)", category.value, path or "")
        return None

    logger.info("Analyzing category: %s (%s)", category.value, path)
    try:
        return scan(path, category.value, config.max_depth, probe=probe, config=config)
    except PathNotFoundError:
        # Removed between the existence check and the scan
        logger.warning("Category %s: path disappeared during scan (%s)", category.value, path)
        return None


def analyze_all_categories(
    config: CleanupConfig,
    *,
    probe: FilesystemProbe | None = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> list[ScanResult]:
    """
    Scan every active category for the configured platform.

    Categories are independent, so they are scanned on a thread pool; the
    results keep registry order.

    Args:
        config: Run configuration
        probe: Filesystem access, defaults to the local disk
        progress_callback: Optional callback(category, current, total)

    Returns:
        One ScanResult per category whose path exists
    """
    probe = probe or LocalProbe()
    categories = list_categories(config.platform)
    total = len(categories)

    logger.info("Starting disk usage analysis...")

    results: list[ScanResult] = []
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        scans = executor.map(lambda c: _scan_category(c, config, probe), categories)
        for i, (category, result) in enumerate(zip(categories, scans)):
            if progress_callback:
                progress_callback(category.value, i + 1, total)
            if result is not None:
                results.append(result)

    return results


def find_cleanup_opportunities(results: list[ScanResult], threshold_mb: int) -> list[ScanResult]:
    """
    Pick out results at or above a size threshold.

    Args:
        results: Scan results to filter
        threshold_mb: Minimum size in whole megabytes

    Returns:
        Matching results in their original order
    """
    return [r for r in results if r.size_mb >= threshold_mb]


def find_largest_items(
    root: str | Path,
    count: int = 20,
    *,
    probe: FilesystemProbe | None = None,
) -> list[LargeItem]:
    """
    Find the largest files and immediate subdirectories under a root.

    Args:
        root: Directory to examine (may contain ~)
        count: Number of items to return
        probe: Filesystem access, defaults to the local disk

    Returns:
        Up to `count` items, largest first

    Raises:
        PathNotFoundError: If the root does not exist
    """
    if count < 1:
        raise InvalidArgumentError(f"Invalid items count: {count} (must be a positive integer)")

    probe = probe or LocalProbe()
    root_path = expand_path(str(root))
    if not probe.exists(root_path):
        raise PathNotFoundError(str(root_path))

    items: list[LargeItem] = []

    for dir_path in probe.list_dirs(root_path, 1):
        if dir_path == root_path:
            continue
        size = probe.aggregate_size(dir_path)
        if size is None:
            size = _sum_file_sizes(probe, dir_path, None)
        items.append(LargeItem(path=str(dir_path), size_bytes=size, kind="dir"))

    for file_path in probe.list_files(root_path):
        try:
            size = probe.stat_size(file_path)
        except OSError:
            continue
        items.append(LargeItem(path=str(file_path), size_bytes=size, kind="file"))

    items.sort(key=lambda item: (-item.size_bytes, item.path))
    return items[:count]
