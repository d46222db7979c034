"""Dependency resolver memoized per catalog version."""

import asyncio
import logging

from wardgate.application.ports import UnitOfWork
from wardgate.domain.dependency_graph import DependencyGraph

logger = logging.getLogger(__name__)


class CachingDependencyResolver:
    """Builds the dependency graph once per catalog version.

    Every catalog mutation bumps the version in the same transaction, so a
    version mismatch is enough to invalidate the cached graph and its closures.
    """

    def __init__(self) -> None:
        self._version: int | None = None
        self._graph: DependencyGraph | None = None
        self._lock = asyncio.Lock()

    async def graph(self, uow: UnitOfWork) -> DependencyGraph:
        version = await uow.catalog.get_version()
        if self._graph is not None and self._version == version:
            return self._graph
        async with self._lock:
            if self._graph is not None and self._version == version:
                return self._graph
            edges = await uow.dependencies.list_all()
            graph = DependencyGraph(edges)
            logger.debug("Loaded dependency graph v%s with %d edges", version, len(edges))
            self._graph, self._version = graph, version
            return graph

    async def closure(self, uow: UnitOfWork, slug: str) -> frozenset[str]:
        return (await self.graph(uow)).closure(slug)

    def invalidate(self) -> None:
        self._graph = None
        self._version = None
