"""Permission repository port."""

from typing import Protocol

from wardgate.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission definitions."""

    async def get_by_slug(self, slug: str) -> Permission | None: ...

    async def list_all(self) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def delete(self, slug: str) -> None: ...
