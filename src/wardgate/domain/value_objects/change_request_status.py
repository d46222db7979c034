"""Permission change request states."""

from enum import StrEnum


class ChangeRequestStatus(StrEnum):
    """Pending is the only non-terminal state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"
