"""Exceptions raised by reclaim."""


class ReclaimError(Exception):
    """Base exception for reclaim errors."""


class PathNotFoundError(ReclaimError):
    """Raised when a path to scan does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class InvalidArgumentError(ReclaimError):
    """Raised when an argument or configuration value is malformed."""


class UserCancelledError(ReclaimError):
    """Raised when the user declines a cleanup at the confirmation prompt."""
