"""Filesystem access used by the scanner and the cleaner.

The scan, filter and report logic only talks to a FilesystemProbe, so it can
run against the local disk or against an in-memory fake in tests.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


class FilesystemProbe(ABC):
    """Capability interface over the filesystem.

    Depth follows `find -maxdepth`: the root is depth 0 and its direct
    children are depth 1. A max_depth of None means unbounded. Symlinks
    below the root are never followed.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Whether the path exists."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Whether the path is a directory. A symlinked root such as /tmp counts."""

    @abstractmethod
    def aggregate_size(self, path: Path) -> int | None:
        """Total size of every regular file under path, or None if unsupported."""

    @abstractmethod
    def list_files(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        """Yield regular files under root. A file root yields itself."""

    @abstractmethod
    def list_dirs(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        """Yield directories under root, root included."""

    @abstractmethod
    def stat_size(self, path: Path) -> int:
        """Size of a single file in bytes."""

    @abstractmethod
    def stat_mtime(self, path: Path) -> float:
        """Modification time of a single file as a POSIX timestamp."""

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """Delete a single regular file."""


class LocalProbe(FilesystemProbe):
    """FilesystemProbe backed by os.scandir.

    Unreadable directories are skipped with a warning, so every traversal
    returns best-effort results instead of failing.
    """

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def aggregate_size(self, path: Path) -> int | None:
        if not self.is_dir(path):
            # Same rule as list_files: only a regular, non-symlink file root counts
            if not path.is_file() or path.is_symlink():
                return 0
            try:
                return self.stat_size(path)
            except OSError:
                return 0

        total_size = 0
        for entry_path, is_dir, _ in self._walk(path, None):
            if is_dir:
                continue
            try:
                total_size += self.stat_size(entry_path)
            except OSError:
                continue
        return total_size

    def list_files(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        if not self.is_dir(root):
            if root.is_file() and not root.is_symlink():
                yield root
            return
        for entry_path, is_dir, _ in self._walk(root, max_depth):
            if not is_dir:
                yield entry_path

    def list_dirs(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        if not self.is_dir(root):
            return
        yield root
        for entry_path, is_dir, _ in self._walk(root, max_depth):
            if is_dir:
                yield entry_path

    def stat_size(self, path: Path) -> int:
        return os.stat(path, follow_symlinks=False).st_size

    def stat_mtime(self, path: Path) -> float:
        return os.stat(path, follow_symlinks=False).st_mtime

    def remove_file(self, path: Path) -> None:
        os.unlink(path)

    def _walk(self, root: Path, max_depth: int | None) -> Iterator[tuple[Path, bool, int]]:
        """
        Depth-first traversal in name order, symlinks not followed.

        Yields:
            Tuples of (path, is_dir, depth)
        """
        stack: list[tuple[Path, int]] = [(root, 0)]

        while stack:
            current, depth = stack.pop()
            if max_depth is not None and depth >= max_depth:
                continue

            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except (PermissionError, OSError) as e:
                logger.warning("Skipping unreadable directory %s: %s", current, e)
                continue

            subdirs: list[Path] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(Path(entry.path))
                        yield Path(entry.path), True, depth + 1
                    elif entry.is_file(follow_symlinks=False):
                        yield Path(entry.path), False, depth + 1
                except OSError:
                    continue

            for subdir in reversed(subdirs):
                stack.append((subdir, depth + 1))
