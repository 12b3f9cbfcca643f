"""Expiry markers and values that carry one."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any


def _as_timedelta(duration: timedelta | float) -> timedelta:
    if isinstance(duration, timedelta):
        return duration
    return timedelta(seconds=duration)


class Expires:
    """A point in wall-clock time after which something is stale."""

    data: Any = None

    def __init__(self, duration: timedelta | float):
        self.expires_at = datetime.now(timezone.utc) + _as_timedelta(duration)
        self.aborted = False

    @classmethod
    def at(cls, when: datetime) -> "Expires":
        """Expire at the given moment."""
        obj = cls.__new__(cls)
        obj.expires_at = when
        obj.aborted = False
        return obj

    def is_expired(self) -> bool:
        return self.aborted or datetime.now(self.expires_at.tzinfo) > self.expires_at

    def set_expires(self, aborted: bool) -> None:
        """Force expiry on (or lift the forced expiry)."""
        self.aborted = aborted

    def __str__(self) -> str:
        return f"expires at: {self.expires_at}, abort: {str(self.aborted).lower()}"


class DataExpires(Expires):
    """A value together with its expiry."""

    def __init__(self, data: Any, duration: timedelta | float):
        super().__init__(duration)
        self.data = data