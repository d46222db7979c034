"""User role assignment port - read side of the external identity layer."""

from typing import Protocol
from uuid import UUID


class UserRoleRepository(Protocol):
    """Role assignments are owned by the identity layer; read-only here."""

    async def get_role_id(self, user_id: str) -> UUID | None: ...

    async def count_for_role(self, role_id: UUID) -> int: ...
