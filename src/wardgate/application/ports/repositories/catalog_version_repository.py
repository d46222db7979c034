"""Catalog version port - invalidation counter for graph caches."""

from typing import Protocol


class CatalogVersionRepository(Protocol):
    """Monotonic counter bumped by every catalog mutation."""

    async def get_version(self) -> int: ...

    async def bump(self) -> int: ...
