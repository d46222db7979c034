"""Elevated permission session repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from wardgate.domain.entities import PermissionSession, PermissionSessionAction


class SessionRepository(Protocol):
    """Port for elevated sessions and their append-only action log."""

    async def lock_user(self, user_id: str) -> None:
        """Serialize session starts of one user until the transaction ends."""
        ...

    async def create(self, session: PermissionSession) -> PermissionSession: ...

    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> PermissionSession | None: ...

    async def list_unended_for_user(self, user_id: str) -> list[PermissionSession]: ...

    async def mark_ended(self, session_id: UUID, ended_at: datetime) -> bool:
        """Set ended_at only if still NULL. Returns whether this call ended it."""
        ...

    async def touch(self, session_id: UUID, at: datetime) -> None: ...

    async def add_action(self, action: PermissionSessionAction) -> PermissionSessionAction: ...

    async def list_actions(self, session_id: UUID) -> list[PermissionSessionAction]: ...
