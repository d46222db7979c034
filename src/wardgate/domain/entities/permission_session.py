"""Elevated permission session and its audited actions."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from wardgate.domain.value_objects import SessionTimeoutPolicy


@dataclass
class PermissionSession:
    """Bounded window of elevated activity by an admin user."""

    id: UUID
    user_id: str
    token: str
    started_at: datetime
    last_action_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    ended_at: datetime | None = None

    def timeout_at(
        self, timeout_minutes: int | None, policy: SessionTimeoutPolicy
    ) -> datetime | None:
        """Moment the session implicitly ends, or None when the role sets no timeout."""
        if timeout_minutes is None:
            return None
        anchor = (
            self.last_action_at
            if policy == SessionTimeoutPolicy.INACTIVITY
            else self.started_at
        )
        return anchor + timedelta(minutes=timeout_minutes)

    def is_open(
        self,
        now: datetime,
        timeout_minutes: int | None,
        policy: SessionTimeoutPolicy,
    ) -> bool:
        if self.ended_at is not None:
            return False
        deadline = self.timeout_at(timeout_minutes, policy)
        return deadline is None or now < deadline

    def duration_minutes(self) -> float | None:
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds() / 60


@dataclass
class PermissionSessionAction:
    """One action performed inside an elevated session."""

    id: UUID
    session_id: UUID
    action_type: str
    action_data: dict[str, Any]
    performed_at: datetime
    description: str | None = None
