"""Add permission dependency use case."""

import asyncio
import logging

from wardgate.application.ports import DependencyResolver
from wardgate.domain.entities import PermissionDependency
from wardgate.domain.exceptions import CycleDetected, NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class AddDependencyUseCase:
    """Declare that ``permission`` requires ``depends_on``.

    Writers are serialized twice: an in-process lock and the repository lock
    held until the transaction commits, so two concurrent edges can never
    each pass the cycle check and jointly form a cycle.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        dependency_resolver: DependencyResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = dependency_resolver
        self._lock = asyncio.Lock()

    async def execute(self, permission: str, depends_on: str) -> PermissionDependency:
        permission = canonical_slug(permission)
        depends_on = canonical_slug(depends_on)
        edge = PermissionDependency(permission=permission, depends_on=depends_on)
        async with self._lock:
            async with self._uow_factory() as uow:
                await uow.dependencies.lock()
                for slug in (permission, depends_on):
                    if not await uow.permissions.get_by_slug(slug):
                        raise NotFound("Permission", slug)

                graph = await self._resolver.graph(uow)
                if (permission, depends_on) in graph:
                    return edge
                cycle = graph.cycle_if_added(permission, depends_on)
                if cycle is not None:
                    raise CycleDetected(permission, depends_on, cycle)

                await uow.dependencies.create(edge)
                await uow.catalog.bump()
        logger.info("Added dependency %s -> %s", permission, depends_on)
        return edge
