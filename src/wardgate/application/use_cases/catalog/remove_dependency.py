"""Remove permission dependency use case."""

import logging

from wardgate.domain.entities import PermissionDependency
from wardgate.domain.exceptions import NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class RemoveDependencyUseCase:
    """Drop a depends-on edge."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission: str, depends_on: str) -> None:
        permission = canonical_slug(permission)
        depends_on = canonical_slug(depends_on)
        edge = PermissionDependency(permission=permission, depends_on=depends_on)
        async with self._uow_factory() as uow:
            await uow.dependencies.lock()
            if not await uow.dependencies.delete(edge):
                raise NotFound("Dependency", f"{permission} -> {depends_on}")
            await uow.catalog.bump()
        logger.info("Removed dependency %s -> %s", permission, depends_on)
