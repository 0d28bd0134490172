"""Cleanup execution with safety checks for reclaim."""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable

from reclaim.age import AgeFilter
from reclaim.categories import expand_path, list_categories, parse_category, resolve_path
from reclaim.config import CleanupConfig, parse_min_age
from reclaim.errors import UserCancelledError
from reclaim.formatting import format_bytes
from reclaim.models import (
    CategoryId,
    CleanupMode,
    DeletionOutcome,
    DeletionState,
    DeletionStatus,
    RunSummary,
)
from reclaim.preview import collect_eligible_files
from reclaim.probe import FilesystemProbe, LocalProbe

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str, int, int], bool]

# Roots that are never cleaned, even when a path override points at them
BLOCKED_ROOTS = [
    "/",
    "~",
    "~/Documents",
    "~/Desktop",
    "/System",
    "/Applications",
    "/usr",
    "/bin",
    "/sbin",
]


def is_path_safe(path: Path) -> bool:
    """
    Check if a category root may be cleaned.

    Args:
        path: Root to check

    Returns:
        True unless the root is one of the blocked locations
    """
    normalized = os.path.normpath(str(path))
    for blocked in BLOCKED_ROOTS:
        if normalized == os.path.normpath(str(expand_path(blocked))):
            return False
    return True


def is_inside_root(path: Path, root: Path) -> bool:
    """
    Check that a file lies strictly below a category root.

    Args:
        path: File about to be deleted
        root: Category root it was found under

    Returns:
        True if path is a descendant of root
    """
    file_path = os.path.normpath(str(path))
    root_path = os.path.normpath(str(root))
    if file_path == root_path:
        return False
    try:
        return os.path.commonpath([file_path, root_path]) == root_path
    except ValueError:
        return False


def _default_confirm(category: str, file_count: int, total_bytes: int) -> bool:
    from reclaim.display import confirm_deletion

    return confirm_deletion(category, file_count, total_bytes)


class SafeDeletionExecutor:
    """Deletes the eligible files of one category at a time.

    Each run moves through resolving, scanning, awaiting confirmation and
    deleting. Dry-run, a missing path, or a declined confirmation end the run
    before anything is removed. Once deleting starts, individual failures are
    counted and the remaining files are still processed.
    """

    def __init__(
        self,
        config: CleanupConfig | None = None,
        probe: FilesystemProbe | None = None,
        confirm: ConfirmCallback | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            config: Run configuration (platform, path overrides, default mode)
            probe: Filesystem access, defaults to the local disk
            confirm: Callback(category, file_count, total_bytes) returning True
                to proceed; may raise UserCancelledError to decline
        """
        self._config = config or CleanupConfig()
        self._probe = probe or LocalProbe()
        self._confirm = confirm or _default_confirm

    def run(
        self,
        category: str | CategoryId,
        min_age_days: int | str = 0,
        mode: CleanupMode | None = None,
    ) -> DeletionOutcome:
        """Clean one category.

        Args:
            category: Category identifier
            min_age_days: Only delete files at least this many days old
            mode: normal, force or dry_run; defaults to the config mode

        Returns:
            DeletionOutcome with the terminal status and file counts
        """
        category_id = parse_category(category)
        min_age = parse_min_age(min_age_days)
        mode = mode or self._config.mode
        name = category_id.value

        self._enter(name, DeletionState.RESOLVING)
        path = resolve_path(category_id, self._config.platform, self._config.path_overrides)

        if path is None or not self._probe.exists(path):
            logger.warning("Category %s: path not found (%s)", name, path or "")
            return DeletionOutcome(
                category=name, path=str(path or ""), status=DeletionStatus.SKIPPED_NO_PATH
            )

        if not is_path_safe(path):
            logger.warning("Category %s: refusing to clean protected path (%s)", name, path)
            return DeletionOutcome(
                category=name, path=str(path), status=DeletionStatus.SKIPPED_NO_PATH
            )

        self._enter(name, DeletionState.SCANNING)
        eligible, ineligible = collect_eligible_files(path, AgeFilter(min_age), self._probe)
        targeted = [str(p) for p, _ in eligible]
        bytes_targeted = sum(size for _, size in eligible)

        if not eligible:
            logger.info("No files found to delete in category: %s", name)
            return DeletionOutcome(
                category=name,
                path=str(path),
                status=DeletionStatus.COMPLETED,
                preserved=ineligible,
            )

        self._enter(name, DeletionState.AWAITING_CONFIRMATION)
        logger.info(
            "About to delete %d files (%s) from category: %s",
            len(eligible),
            format_bytes(bytes_targeted, mode=self._config.precision_mode),
            name,
        )

        untouched = DeletionOutcome(
            category=name,
            path=str(path),
            status=DeletionStatus.SKIPPED_DRY_RUN,
            targeted=targeted,
            bytes_targeted=bytes_targeted,
            preserved=ineligible + len(eligible),
        )

        if mode == CleanupMode.DRY_RUN:
            logger.info("[DRY-RUN] Would delete %d files from category: %s", len(eligible), name)
            return untouched

        if mode == CleanupMode.FORCE:
            logger.info("[FORCE MODE] Deleting %d files without confirmation", len(eligible))
        elif not self._ask(name, len(eligible), bytes_targeted):
            logger.warning("User cancelled cleanup for category: %s", name)
            return untouched.model_copy(update={"status": DeletionStatus.CANCELLED})

        self._enter(name, DeletionState.DELETING)
        return self._delete(name, path, eligible, ineligible, targeted, bytes_targeted)

    def _ask(self, category: str, file_count: int, total_bytes: int) -> bool:
        try:
            return bool(self._confirm(category, file_count, total_bytes))
        except UserCancelledError:
            return False

    def _delete(
        self,
        category: str,
        root: Path,
        eligible: list[tuple[Path, int]],
        ineligible: int,
        targeted: list[str],
        bytes_targeted: int,
    ) -> DeletionOutcome:
        deleted = 0
        bytes_freed = 0
        failures: list[str] = []

        for file_path, size in eligible:
            if not is_inside_root(file_path, root) or self._probe.is_dir(file_path):
                failures.append(f"{file_path}: not a regular file under {root}")
                logger.warning("Category %s: refusing to delete %s", category, file_path)
                continue
            try:
                self._probe.remove_file(file_path)
            except OSError as e:
                failures.append(f"{file_path}: {e.strerror or e}")
                logger.warning("Category %s: failed to delete %s: %s", category, file_path, e)
                continue
            deleted += 1
            bytes_freed += size

        logger.info("Deleted %d files from category: %s", deleted, category)
        if failures:
            logger.warning("%d files could not be deleted from category: %s", len(failures), category)

        return DeletionOutcome(
            category=category,
            path=str(root),
            status=DeletionStatus.COMPLETED,
            targeted=targeted,
            bytes_targeted=bytes_targeted,
            deleted=deleted,
            failed=len(failures),
            bytes_freed=bytes_freed,
            preserved=ineligible,
            failures=failures,
        )

    @staticmethod
    def _enter(category: str, state: DeletionState) -> None:
        logger.debug("Category %s: %s", category, state.value)


def delete_category(
    category: str | CategoryId,
    min_age_days: int | str = 0,
    mode: CleanupMode | None = None,
    *,
    config: CleanupConfig | None = None,
    probe: FilesystemProbe | None = None,
    confirm: ConfirmCallback | None = None,
) -> DeletionOutcome:
    """
    Clean the eligible files of one category.

    Args:
        category: Category identifier
        min_age_days: Only delete files at least this many days old
        mode: normal, force or dry_run; defaults to the config mode
        config: Run configuration
        probe: Filesystem access, defaults to the local disk
        confirm: Confirmation callback for normal mode

    Returns:
        DeletionOutcome
    """
    executor = SafeDeletionExecutor(config=config, probe=probe, confirm=confirm)
    return executor.run(category, min_age_days, mode)


def clean_categories(
    categories: Iterable[str | CategoryId] | None = None,
    min_age_days: int | str = 0,
    mode: CleanupMode | None = None,
    *,
    config: CleanupConfig | None = None,
    probe: FilesystemProbe | None = None,
    confirm: ConfirmCallback | None = None,
    progress_callback: Callable[[DeletionOutcome, int, int], None] | None = None,
) -> RunSummary:
    """
    Clean several categories in sequence.

    A skipped or cancelled category never stops the ones after it.

    Args:
        categories: Categories to clean, defaults to every active category
        min_age_days: Only delete files at least this many days old
        mode: normal, force or dry_run; defaults to the config mode
        config: Run configuration
        probe: Filesystem access, defaults to the local disk
        confirm: Confirmation callback for normal mode
        progress_callback: Optional callback(outcome, current, total)

    Returns:
        RunSummary with one outcome per category
    """
    config = config or CleanupConfig()
    min_age = parse_min_age(min_age_days)
    if categories is None:
        category_ids = list_categories(config.platform)
    else:
        category_ids = [parse_category(c) for c in categories]

    executor = SafeDeletionExecutor(config=config, probe=probe, confirm=confirm)
    summary = RunSummary()
    total = len(category_ids)

    for i, category_id in enumerate(category_ids):
        outcome = executor.run(category_id, min_age, mode)
        summary.outcomes.append(outcome)
        if progress_callback:
            progress_callback(outcome, i + 1, total)

    return summary
