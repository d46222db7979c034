"""Permission dependency repository port."""

from typing import Protocol

from wardgate.domain.entities import PermissionDependency


class DependencyRepository(Protocol):
    """Port for depends-on edges."""

    async def lock(self) -> None:
        """Serialize graph writers until the transaction ends."""
        ...

    async def list_all(self) -> list[PermissionDependency]: ...

    async def create(self, edge: PermissionDependency) -> None: ...

    async def delete(self, edge: PermissionDependency) -> bool: ...

    async def delete_for_permission(self, slug: str) -> None: ...
