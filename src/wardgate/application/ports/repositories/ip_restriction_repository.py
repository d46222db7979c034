"""IP restriction repository port."""

from typing import Protocol
from uuid import UUID

from wardgate.domain.entities import PermissionIpRestriction


class IpRestrictionRepository(Protocol):
    """Port for allow/deny rules."""

    async def get_by_id(self, rule_id: UUID) -> PermissionIpRestriction | None: ...

    async def list_all(self, active_only: bool = False) -> list[PermissionIpRestriction]: ...

    async def create(self, rule: PermissionIpRestriction) -> PermissionIpRestriction: ...

    async def update(self, rule: PermissionIpRestriction) -> None: ...
