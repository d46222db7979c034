"""Dependency resolver port."""

from typing import Protocol

from wardgate.application.ports.unit_of_work import UnitOfWork
from wardgate.domain.dependency_graph import DependencyGraph


class DependencyResolver(Protocol):
    """Provides the dependency graph for the catalog version visible in ``uow``."""

    async def graph(self, uow: UnitOfWork) -> DependencyGraph: ...

    async def closure(self, uow: UnitOfWork, slug: str) -> frozenset[str]: ...
