"""System wall clock."""

from datetime import UTC, datetime


class SystemClock:
    """UTC wall clock. Read on every call, never cached."""

    def now(self) -> datetime:
        return datetime.now(UTC)
