"""Cleanup category definitions for reclaim."""

import logging
import os
import sys
from pathlib import Path

from reclaim.errors import InvalidArgumentError
from reclaim.models import Category, CategoryId, Platform, RiskLevel

logger = logging.getLogger(__name__)

MACOS = Platform.MACOS
LINUX = Platform.LINUX
UNKNOWN = Platform.UNKNOWN

# All cleanup categories with their per-platform path templates.
# A platform missing from `paths` means the category does not apply there.
CATEGORIES: dict[CategoryId, Category] = {
    CategoryId.CACHES: Category(
        id=CategoryId.CACHES,
        name="User Caches",
        description="Application caches, rebuilt on demand",
        paths={MACOS: "~/Library/Caches", LINUX: "~/.cache", UNKNOWN: "~/.cache"},
    ),
    CategoryId.LOGS: Category(
        id=CategoryId.LOGS,
        name="Logs",
        description="Application and system log files",
        paths={MACOS: "~/Library/Logs", LINUX: "/var/log", UNKNOWN: "/var/log"},
    ),
    CategoryId.DOWNLOADS: Category(
        id=CategoryId.DOWNLOADS,
        name="Downloads",
        description="Files saved to the Downloads folder",
        risk_level=RiskLevel.REVIEW,
        paths={MACOS: "~/Downloads", LINUX: "~/Downloads", UNKNOWN: "~/Downloads"},
    ),
    CategoryId.TEMP: Category(
        id=CategoryId.TEMP,
        name="Temporary Files",
        description="Scratch files left in the system temp directory",
        paths={MACOS: "/tmp", LINUX: "/tmp", UNKNOWN: "/tmp"},
    ),
    CategoryId.BROWSER_TRASH: Category(
        id=CategoryId.BROWSER_TRASH,
        name="Trash",
        description="Files already moved to the desktop trash",
        risk_level=RiskLevel.REVIEW,
        paths={MACOS: "~/.Trash", LINUX: "~/.local/share/Trash"},
    ),
    CategoryId.XCODE: Category(
        id=CategoryId.XCODE,
        name="Xcode DerivedData",
        description="Xcode build artifacts and indexes",
        paths={MACOS: "~/Library/Developer/Xcode/DerivedData"},
    ),
    CategoryId.NODE_MODULES: Category(
        id=CategoryId.NODE_MODULES,
        name="Global node_modules",
        description="Globally installed Node.js packages",
        paths={MACOS: "~/.node_modules", LINUX: "~/.node_modules"},
    ),
    CategoryId.DOCKER: Category(
        id=CategoryId.DOCKER,
        name="Docker Data",
        description="Docker images, containers and VM disks",
        risk_level=RiskLevel.REVIEW,
        paths={
            MACOS: "~/Library/Containers/com.docker.docker/Data/vms",
            LINUX: "/var/lib/docker",
        },
    ),
    CategoryId.APT: Category(
        id=CategoryId.APT,
        name="APT Cache",
        description="Downloaded .deb packages",
        paths={LINUX: "/var/cache/apt"},
    ),
    CategoryId.YUM: Category(
        id=CategoryId.YUM,
        name="YUM Cache",
        description="Downloaded RPM packages and metadata",
        paths={LINUX: "/var/cache/yum"},
    ),
    CategoryId.PACMAN: Category(
        id=CategoryId.PACMAN,
        name="Pacman Cache",
        description="Downloaded Arch Linux packages",
        paths={LINUX: "/var/cache/pacman/pkg"},
    ),
    CategoryId.SNAP: Category(
        id=CategoryId.SNAP,
        name="Snap Cache",
        description="Cached snap package revisions",
        paths={LINUX: "/var/lib/snapd/cache"},
    ),
    CategoryId.VOLUMES: Category(
        id=CategoryId.VOLUMES,
        name="Volumes",
        description="Mounted volumes (listed for analysis, never resolved)",
        risk_level=RiskLevel.REVIEW,
    ),
}

# Active category set per platform, in report order
PLATFORM_CATEGORIES: dict[Platform, tuple[CategoryId, ...]] = {
    MACOS: (
        CategoryId.CACHES,
        CategoryId.LOGS,
        CategoryId.DOWNLOADS,
        CategoryId.TEMP,
        CategoryId.BROWSER_TRASH,
        CategoryId.XCODE,
        CategoryId.NODE_MODULES,
        CategoryId.DOCKER,
        CategoryId.VOLUMES,
    ),
    LINUX: (
        CategoryId.CACHES,
        CategoryId.LOGS,
        CategoryId.TEMP,
        CategoryId.BROWSER_TRASH,
        CategoryId.APT,
        CategoryId.YUM,
        CategoryId.PACMAN,
        CategoryId.NODE_MODULES,
        CategoryId.DOCKER,
        CategoryId.VOLUMES,
        CategoryId.SNAP,
    ),
    UNKNOWN: (CategoryId.CACHES, CategoryId.LOGS, CategoryId.TEMP),
}


def detect_platform() -> Platform:
    """Detect the host platform from sys.platform."""
    if sys.platform == "darwin":
        return Platform.MACOS
    if sys.platform.startswith("linux"):
        return Platform.LINUX
    return Platform.UNKNOWN


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def parse_category(value: str | CategoryId) -> CategoryId:
    """
    Convert a user-supplied identifier into a CategoryId.

    Raises:
        InvalidArgumentError: If the identifier is not a known category
    """
    if isinstance(value, CategoryId):
        return value
    try:
        return CategoryId(value.strip().lower())
    except ValueError:
        known = ", ".join(c.value for c in CategoryId)
        raise InvalidArgumentError(f"Unknown category: {value} (expected one of: {known})") from None


def get_category(category: str | CategoryId) -> Category | None:
    """Get a category by ID."""
    try:
        return CATEGORIES[parse_category(category)]
    except InvalidArgumentError:
        return None


def list_categories(platform: Platform) -> list[CategoryId]:
    """
    Get the active categories for a platform.

    Args:
        platform: Host platform

    Returns:
        Category identifiers in report order
    """
    return list(PLATFORM_CATEGORIES.get(platform, PLATFORM_CATEGORIES[UNKNOWN]))


def resolve_path(
    category: str | CategoryId,
    platform: Platform,
    overrides: dict[str, str] | None = None,
) -> Path | None:
    """
    Resolve a category to its root path on a platform.

    Args:
        category: Category identifier
        platform: Host platform
        overrides: Optional category -> path template mapping that takes precedence

    Returns:
        Expanded root path, or None when the category does not apply
    """
    category_id = parse_category(category)

    if overrides and overrides.get(category_id.value):
        return expand_path(overrides[category_id.value])

    template = CATEGORIES[category_id].paths.get(platform)
    if not template:
        logger.debug("Category %s has no path on %s", category_id.value, platform.value)
        return None
    return expand_path(template)
