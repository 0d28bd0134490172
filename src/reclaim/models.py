"""Data models for reclaim."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    """Host platform the cleanup runs on."""

    MACOS = "macos"
    LINUX = "linux"
    UNKNOWN = "unknown"


class CategoryId(str, Enum):
    """Identifiers of the reclaimable storage categories."""

    CACHES = "caches"
    LOGS = "logs"
    DOWNLOADS = "downloads"
    TEMP = "temp"
    BROWSER_TRASH = "browser_trash"
    XCODE = "xcode"
    NODE_MODULES = "node_modules"
    DOCKER = "docker"
    APT = "apt"
    YUM = "yum"
    PACMAN = "pacman"
    SNAP = "snap"
    VOLUMES = "volumes"


class RiskLevel(str, Enum):
    """Risk level for cleanup categories."""

    SAFE = "safe"  # Regenerated automatically by the owning tool
    REVIEW = "review"  # May hold user data, look before deleting


class CleanupMode(str, Enum):
    """How the deletion executor treats the confirmation gate."""

    NORMAL = "normal"
    FORCE = "force"
    DRY_RUN = "dry_run"


class PrecisionMode(str, Enum):
    """Arithmetic available to the byte formatter."""

    EXACT = "exact"
    INTEGER = "integer"


class DeletionStatus(str, Enum):
    """Terminal status of a category cleanup."""

    COMPLETED = "completed"
    CANCELLED = "cancelled-by-user"
    SKIPPED_DRY_RUN = "skipped-dry-run"
    SKIPPED_NO_PATH = "skipped-no-path"


class DeletionState(str, Enum):
    """Intermediate states of the deletion executor."""

    RESOLVING = "resolving"
    SCANNING = "scanning"
    AWAITING_CONFIRMATION = "awaiting-confirmation"
    DELETING = "deleting"


class Category(BaseModel):
    """Definition of a cleanup category."""

    model_config = ConfigDict(frozen=True)

    id: CategoryId = Field(..., description="Unique identifier for the category")
    name: str = Field(..., description="Human-readable name")
    description: str = Field(..., description="What this category contains")
    risk_level: RiskLevel = Field(RiskLevel.SAFE, description="Risk level for this category")
    paths: dict[Platform, str] = Field(
        default_factory=dict,
        description="Path template per platform (supports ~ and $VAR expansion)",
    )

    def applies_to(self, platform: Platform) -> bool:
        """Whether the category has a path on the given platform."""
        return bool(self.paths.get(platform))


class ScanResult(BaseModel):
    """Result of scanning a single path."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Category label")
    path: str = Field(..., description="Path that was scanned")
    size_bytes: int = Field(..., ge=0, description="Total size in bytes")
    size_formatted: str = Field(..., description="Human-readable size")
    size_mb: int = Field(..., ge=0, description="Size in whole megabytes (1024-based)")
    file_count: int = Field(0, ge=0, description="Number of regular files")
    dir_count: int = Field(0, ge=0, description="Number of directories")


class PreviewEntry(BaseModel):
    """One row of a cleanup preview."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Category identifier")
    path: str = Field(..., description="Category root path")
    file_count: int = Field(0, ge=0, description="Number of eligible files")
    total_size: int = Field(0, ge=0, description="Total size of eligible files in bytes")


class CleanupReport(BaseModel):
    """Read-only preview of what a cleanup would affect."""

    model_config = ConfigDict(frozen=True)

    min_age_days: int = Field(0, ge=0, description="Age threshold used for the preview")
    entries: tuple[PreviewEntry, ...] = Field(default_factory=tuple)

    @property
    def total_files(self) -> int:
        """Sum of eligible files across all categories."""
        return sum(e.file_count for e in self.entries)

    @property
    def total_size(self) -> int:
        """Sum of eligible bytes across all categories."""
        return sum(e.total_size for e in self.entries)

    def get(self, category: str) -> PreviewEntry | None:
        """Entry for a category, if it was part of the report."""
        for entry in self.entries:
            if entry.category == category:
                return entry
        return None


class DeletionOutcome(BaseModel):
    """Result of cleaning one category."""

    category: str = Field(..., description="Category that was processed")
    path: str = Field("", description="Resolved category root (empty if unresolved)")
    status: DeletionStatus = Field(..., description="Terminal status")
    targeted: list[str] = Field(default_factory=list, description="Eligible file paths")
    bytes_targeted: int = Field(0, description="Total size of eligible files")
    deleted: int = Field(0, description="Files successfully removed")
    failed: int = Field(0, description="Files that could not be removed")
    bytes_freed: int = Field(0, description="Bytes removed")
    preserved: int = Field(0, description="Files left in place")
    failures: list[str] = Field(default_factory=list, description="Per-file failure reasons")

    @property
    def dry_run(self) -> bool:
        return self.status == DeletionStatus.SKIPPED_DRY_RUN


class RunSummary(BaseModel):
    """Totals over a multi-category cleanup run."""

    outcomes: list[DeletionOutcome] = Field(default_factory=list)

    @property
    def cleaned(self) -> int:
        """Files removed across all categories."""
        return sum(o.deleted for o in self.outcomes)

    @property
    def failed(self) -> int:
        """Files that could not be removed."""
        return sum(o.failed for o in self.outcomes)

    @property
    def preserved(self) -> int:
        """Files left on disk (too young, skipped or cancelled)."""
        return sum(o.preserved for o in self.outcomes)

    @property
    def bytes_freed(self) -> int:
        return sum(o.bytes_freed for o in self.outcomes)

    @property
    def categories_completed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == DeletionStatus.COMPLETED)

    @property
    def categories_skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status != DeletionStatus.COMPLETED)


class LargeItem(BaseModel):
    """A large file or directory found during analysis."""

    model_config = ConfigDict(frozen=True)

    path: str
    size_bytes: int = Field(..., ge=0)
    kind: str = Field(..., description="'file' or 'dir'")
