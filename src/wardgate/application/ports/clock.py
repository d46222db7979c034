"""Clock port - wall-clock source."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Returns timezone-aware current time."""

    def now(self) -> datetime: ...
