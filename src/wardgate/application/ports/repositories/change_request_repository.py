"""Permission change request repository port."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.value_objects import ChangeRequestStatus


class ChangeRequestRepository(Protocol):
    """Port for change requests."""

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> PermissionChangeRequest | None: ...

    async def list(
        self,
        *,
        status: ChangeRequestStatus | None = None,
        user_id: str | None = None,
    ) -> list[PermissionChangeRequest]: ...

    async def create(self, request: PermissionChangeRequest) -> PermissionChangeRequest: ...

    async def update(self, request: PermissionChangeRequest) -> None: ...

    async def expire_pending(self, now: datetime) -> list[UUID]:
        """Mark pending requests with expires_at <= now as expired; return their ids."""
        ...
