"""Run configuration for reclaim."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reclaim.categories import detect_platform, expand_path, parse_category
from reclaim.errors import InvalidArgumentError
from reclaim.formatting import detect_precision_mode
from reclaim.models import CleanupMode, Platform, PrecisionMode

logger = logging.getLogger(__name__)

CONFIG_DIR = expand_path("~/.reclaim")
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_LOG_DIR = CONFIG_DIR / "logs"

# Environment variables that override file settings
ENV_OVERRIDES = {
    "RECLAIM_HIGHLIGHT_THRESHOLD": "highlight_threshold_mb",
    "RECLAIM_ANALYSIS_TIMEOUT": "analysis_timeout",
}


class CleanupConfig(BaseModel):
    """Immutable settings threaded through every scan and cleanup call."""

    model_config = ConfigDict(frozen=True)

    platform: Platform = Field(default_factory=detect_platform)
    mode: CleanupMode = Field(CleanupMode.NORMAL, description="normal, force or dry_run")
    min_age_days: int = Field(0, ge=0, description="Only target files at least this many days old")
    max_depth: int = Field(3, ge=0, description="Depth limit for file and directory counts")
    quiet: bool = False
    verbose: bool = False
    highlight_threshold_mb: int = Field(100, ge=0, description="Size that marks an opportunity")
    # Carried for callers; no scan consults it.
    analysis_timeout: int = Field(300, ge=0, description="Analysis time budget in seconds")
    max_workers: int = Field(4, ge=1, description="Parallel category scans")
    precision_mode: PrecisionMode = Field(default_factory=detect_precision_mode)
    log_dir: Path = DEFAULT_LOG_DIR
    path_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Category id -> path template, replaces the built-in table",
    )

    @field_validator("path_overrides")
    @classmethod
    def _check_override_keys(cls, value: dict[str, str]) -> dict[str, str]:
        return {parse_category(key).value: path for key, path in value.items()}

    @property
    def dry_run(self) -> bool:
        return self.mode == CleanupMode.DRY_RUN

    @property
    def force(self) -> bool:
        return self.mode == CleanupMode.FORCE


def parse_min_age(value: int | str | None) -> int:
    """
    Validate a minimum file age given on the command line.

    Args:
        value: Non-negative integer or a string of digits; None means 0

    Returns:
        The age threshold in days

    Raises:
        InvalidArgumentError: If the value is not a non-negative integer
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid min-age: {value} (must be a non-negative integer)")
    if isinstance(value, int):
        if value < 0:
            raise InvalidArgumentError(f"Invalid min-age: {value} (must be a non-negative integer)")
        return value
    text = str(value).strip()
    if not text.isdigit():
        raise InvalidArgumentError(f"Invalid min-age: {value} (must be a non-negative integer)")
    return int(text)


def resolve_mode(dry_run: bool = False, force: bool = False) -> CleanupMode:
    """Collapse the dry-run and force flags into one mode. Dry-run wins."""
    if dry_run:
        return CleanupMode.DRY_RUN
    if force:
        return CleanupMode.FORCE
    return CleanupMode.NORMAL


def _load_config_file(path: Path) -> dict[str, Any]:
    """Load settings from disk. Missing or unreadable files give no settings."""
    if not path.exists():
        return {}

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return {}
    return data


def _load_env() -> dict[str, Any]:
    settings: dict[str, Any] = {}
    for env_name, field in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw != "":
            settings[field] = raw
    return settings


def load_config(config_file: Path | None = None, **overrides: Any) -> CleanupConfig:
    """
    Build the run configuration.

    Precedence, lowest first: defaults, the JSON config file, environment
    variables, then keyword overrides (CLI flags). Overrides set to None are
    ignored.

    Args:
        config_file: Alternate config file (default: ~/.reclaim/config.json)
        **overrides: Field values supplied by the caller

    Returns:
        Validated CleanupConfig

    Raises:
        InvalidArgumentError: If any setting is invalid
    """
    settings: dict[str, Any] = {}
    settings.update(_load_config_file(config_file or CONFIG_FILE))
    settings.update(_load_env())
    settings.update({k: v for k, v in overrides.items() if v is not None})

    if "min_age_days" in settings:
        settings["min_age_days"] = parse_min_age(settings["min_age_days"])

    try:
        return CleanupConfig.model_validate(settings)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid configuration: {e}") from e
