"""Tests for category definitions."""

import sys
from pathlib import Path

import pytest

from reclaim.categories import (
    CATEGORIES,
    PLATFORM_CATEGORIES,
    detect_platform,
    expand_path,
    get_category,
    list_categories,
    parse_category,
    resolve_path,
)
from reclaim.errors import InvalidArgumentError
from reclaim.models import CategoryId, Platform, RiskLevel


class TestCategoryDefinitions:
    def test_every_id_has_a_definition(self):
        for category_id in CategoryId:
            assert category_id in CATEGORIES
            assert CATEGORIES[category_id].id == category_id

    def test_downloads_needs_review(self):
        assert CATEGORIES[CategoryId.DOWNLOADS].risk_level == RiskLevel.REVIEW

    def test_caches_are_safe(self):
        assert CATEGORIES[CategoryId.CACHES].risk_level == RiskLevel.SAFE

    def test_platform_lists_have_no_duplicates(self):
        for categories in PLATFORM_CATEGORIES.values():
            assert len(categories) == len(set(categories))


class TestListCategories:
    def test_macos_order(self):
        assert [c.value for c in list_categories(Platform.MACOS)] == [
            "caches",
            "logs",
            "downloads",
            "temp",
            "browser_trash",
            "xcode",
            "node_modules",
            "docker",
            "volumes",
        ]

    def test_linux_order(self):
        assert [c.value for c in list_categories(Platform.LINUX)] == [
            "caches",
            "logs",
            "temp",
            "browser_trash",
            "apt",
            "yum",
            "pacman",
            "node_modules",
            "docker",
            "volumes",
            "snap",
        ]

    def test_unknown_platform_is_minimal(self):
        assert list_categories(Platform.UNKNOWN) == [
            CategoryId.CACHES,
            CategoryId.LOGS,
            CategoryId.TEMP,
        ]

    def test_returns_a_copy(self):
        categories = list_categories(Platform.LINUX)
        categories.clear()
        assert list_categories(Platform.LINUX)


class TestResolvePath:
    def test_macos_caches(self):
        assert resolve_path("caches", Platform.MACOS) == Path.home() / "Library" / "Caches"

    def test_linux_logs(self):
        assert resolve_path(CategoryId.LOGS, Platform.LINUX) == Path("/var/log")

    def test_temp_on_both_platforms(self):
        assert resolve_path("temp", Platform.MACOS) == Path("/tmp")
        assert resolve_path("temp", Platform.LINUX) == Path("/tmp")

    def test_platform_specific_categories(self):
        assert resolve_path("xcode", Platform.LINUX) is None
        assert resolve_path("apt", Platform.MACOS) is None
        assert resolve_path("apt", Platform.LINUX) is not None

    def test_volumes_never_resolve(self):
        assert resolve_path("volumes", Platform.MACOS) is None
        assert resolve_path("volumes", Platform.LINUX) is None

    def test_override_wins(self):
        path = resolve_path("temp", Platform.LINUX, {"temp": "/scratch/tmp"})
        assert path == Path("/scratch/tmp")

    def test_override_for_other_category_ignored(self):
        assert resolve_path("temp", Platform.LINUX, {"caches": "/x"}) == Path("/tmp")

    def test_override_expands_variables(self, monkeypatch):
        monkeypatch.setenv("RECLAIM_TEST_ROOT", "/srv")
        path = resolve_path("temp", Platform.LINUX, {"temp": "$RECLAIM_TEST_ROOT/tmp"})
        assert path == Path("/srv/tmp")

    def test_unknown_category(self):
        with pytest.raises(InvalidArgumentError):
            resolve_path("nope", Platform.LINUX)


class TestParseCategory:
    def test_string(self):
        assert parse_category("caches") == CategoryId.CACHES

    def test_case_and_whitespace(self):
        assert parse_category(" CACHES ") == CategoryId.CACHES

    def test_enum_passthrough(self):
        assert parse_category(CategoryId.DOCKER) is CategoryId.DOCKER

    def test_unknown(self):
        with pytest.raises(InvalidArgumentError, match="Unknown category"):
            parse_category("not-a-category")


class TestGetCategory:
    def test_known(self):
        category = get_category("node_modules")
        assert category is not None
        assert category.name

    def test_unknown(self):
        assert get_category("nope") is None


class TestDetectPlatform:
    def test_darwin(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "darwin")
        assert detect_platform() == Platform.MACOS

    def test_linux(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        assert detect_platform() == Platform.LINUX

    def test_other(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "win32")
        assert detect_platform() == Platform.UNKNOWN


class TestExpandPath:
    def test_tilde(self):
        assert expand_path("~/Downloads") == Path.home() / "Downloads"
