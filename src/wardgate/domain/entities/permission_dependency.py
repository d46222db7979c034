"""Permission dependency edge."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionDependency:
    """``permission`` can only be held together with ``depends_on``."""

    permission: str
    depends_on: str
