"""Age-based file eligibility for reclaim."""

import time

from reclaim.errors import InvalidArgumentError

SECONDS_PER_DAY = 24 * 60 * 60


def file_age_days(file_mtime: float, now: float | None = None) -> int:
    """Whole days elapsed since file_mtime (floored, never negative)."""
    reference = time.time() if now is None else now
    return max(int((reference - file_mtime) // SECONDS_PER_DAY), 0)


def is_eligible(file_mtime: float, min_age_days: int, now: float | None = None) -> bool:
    """
    Check whether a file is old enough to be cleaned.

    Ages are compared in whole days, so a file is eligible once it has been
    untouched for min_age_days full days.

    Args:
        file_mtime: File modification time (POSIX timestamp)
        min_age_days: Threshold in days; 0 disables filtering
        now: Reference time, defaults to the current time

    Returns:
        True if the file passes the filter
    """
    if min_age_days < 0:
        raise InvalidArgumentError(f"Invalid min-age: {min_age_days} (must be a non-negative integer)")
    if min_age_days == 0:
        return True
    return file_age_days(file_mtime, now) >= min_age_days


class AgeFilter:
    """Age threshold bound to one reference time for a whole run."""

    def __init__(self, min_age_days: int = 0, now: float | None = None) -> None:
        if min_age_days < 0:
            raise InvalidArgumentError(
                f"Invalid min-age: {min_age_days} (must be a non-negative integer)"
            )
        self.min_age_days = min_age_days
        self.now = time.time() if now is None else now

    @property
    def active(self) -> bool:
        return self.min_age_days > 0

    def accepts(self, file_mtime: float) -> bool:
        return is_eligible(file_mtime, self.min_age_days, self.now)

    is_eligible = accepts

    def __repr__(self) -> str:
        return f"AgeFilter(min_age_days={self.min_age_days})"
