"""User permission override repository port."""

from typing import Protocol

from wardgate.domain.entities import UserPermissionOverride


class UserOverrideRepository(Protocol):
    """Port for per-user allow/deny overrides."""

    async def list_for_user(self, user_id: str) -> list[UserPermissionOverride]: ...

    async def get(self, user_id: str, permission: str) -> UserPermissionOverride | None: ...

    async def upsert(self, override: UserPermissionOverride) -> None: ...

    async def delete(self, user_id: str, permission: str) -> bool: ...

    async def count_by_permission(self, permission: str) -> int: ...
