"""Shared fixtures for reclaim tests."""

import json
import logging
import os
import time
from pathlib import Path
from typing import Iterator

import pytest

from reclaim.age import SECONDS_PER_DAY
from reclaim.config import CleanupConfig
from reclaim.models import Platform
from reclaim.probe import FilesystemProbe


class FakeProbe(FilesystemProbe):
    """In-memory filesystem: files map to (size, mtime), directories are implied."""

    def __init__(self, aggregate: bool = True) -> None:
        self.files: dict[Path, tuple[int, float]] = {}
        self.dirs: set[Path] = set()
        self.unreadable: set[Path] = set()
        self.unremovable: set[Path] = set()
        self.vanishing: set[Path] = set()
        self.removed: list[Path] = []
        self.supports_aggregate = aggregate

    def add_file(self, path: str, size: int, age_days: float = 0) -> Path:
        file_path = Path(path)
        self.files[file_path] = (size, time.time() - age_days * SECONDS_PER_DAY)
        for parent in file_path.parents:
            if parent == Path(parent.anchor):
                break
            self.dirs.add(parent)
        return file_path

    def add_dir(self, path: str) -> Path:
        dir_path = Path(path)
        self.dirs.add(dir_path)
        return dir_path

    def _below(self, path: Path, root: Path) -> bool:
        return path != root and root in path.parents

    def _hidden(self, path: Path, root: Path) -> bool:
        return any(
            blocked == root or self._below(blocked, root) and self._below(path, blocked)
            for blocked in self.unreadable
        )

    def _depth(self, path: Path, root: Path) -> int:
        return len(path.relative_to(root).parts)

    def exists(self, path: Path) -> bool:
        return path in self.files or path in self.dirs

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def aggregate_size(self, path: Path) -> int | None:
        if not self.supports_aggregate:
            return None
        if path in self.files:
            return self.files[path][0]
        return sum(size for p, (size, _) in self.files.items()
                   if self._below(p, path) and not self._hidden(p, path))

    def list_files(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        if root in self.files:
            yield root
            return
        for path in sorted(self.files):
            if not self._below(path, root) or self._hidden(path, root):
                continue
            if max_depth is None or self._depth(path, root) <= max_depth:
                yield path

    def list_dirs(self, root: Path, max_depth: int | None = None) -> Iterator[Path]:
        if root not in self.dirs:
            return
        yield root
        for path in sorted(self.dirs):
            if not self._below(path, root) or self._hidden(path, root):
                continue
            if max_depth is None or self._depth(path, root) <= max_depth:
                yield path

    def stat_size(self, path: Path) -> int:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return self.files[path][0]

    def stat_mtime(self, path: Path) -> float:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        return self.files[path][1]

    def remove_file(self, path: Path) -> None:
        if path in self.unremovable:
            raise PermissionError(13, "Permission denied", str(path))
        if path in self.vanishing or path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        del self.files[path]
        self.removed.append(path)


def write_aged_file(path: Path, size: int, age_days: float = 0) -> Path:
    """Write a file of `size` bytes whose mtime is `age_days` in the past."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    mtime = time.time() - age_days * SECONDS_PER_DAY
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME and the config file at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr("reclaim.config.CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.delenv("RECLAIM_HIGHLIGHT_THRESHOLD", raising=False)
    monkeypatch.delenv("RECLAIM_ANALYSIS_TIMEOUT", raising=False)

    yield home

    reclaim_logger = logging.getLogger("reclaim")
    for handler in list(reclaim_logger.handlers):
        reclaim_logger.removeHandler(handler)
        handler.close()
    reclaim_logger.setLevel(logging.NOTSET)
    reclaim_logger.propagate = True


@pytest.fixture
def make_file():
    """Create files with a given size and age on the real filesystem."""
    return write_aged_file


@pytest.fixture
def write_config(tmp_path):
    """Write ~/.reclaim/config.json content for the current test."""

    def _write(**settings) -> Path:
        settings.setdefault("log_dir", str(tmp_path / "logs"))
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(settings))
        return config_file

    return _write


@pytest.fixture
def make_config(tmp_path):
    """Build a CleanupConfig whose categories all resolve under tmp_path."""

    def _make(**overrides) -> CleanupConfig:
        settings = {
            "platform": Platform.UNKNOWN,
            "max_workers": 1,
            "log_dir": tmp_path / "logs",
            "path_overrides": {
                "caches": str(tmp_path / "cache"),
                "logs": str(tmp_path / "log"),
                "temp": str(tmp_path / "tmp"),
            },
        }
        settings.update(overrides)
        return CleanupConfig(**settings)

    return _make


@pytest.fixture
def fake_probe():
    return FakeProbe()


@pytest.fixture
def fake_probe_without_aggregate():
    """Probe that cannot total a subtree, forcing the per-file fallback."""
    return FakeProbe(aggregate=False)
