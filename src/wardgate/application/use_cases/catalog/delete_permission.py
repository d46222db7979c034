"""Delete permission use case."""

import logging

from wardgate.application.ports import DependencyResolver
from wardgate.domain.exceptions import HasDependents, InUse, NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class DeletePermissionUseCase:
    """Remove a permission nobody depends on and no grant references."""

    def __init__(
        self,
        unit_of_work_factory: type,
        dependency_resolver: DependencyResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = dependency_resolver

    async def execute(self, slug: str) -> None:
        slug = canonical_slug(slug)
        async with self._uow_factory() as uow:
            await uow.dependencies.lock()
            if not await uow.permissions.get_by_slug(slug):
                raise NotFound("Permission", slug)

            graph = await self._resolver.graph(uow)
            dependents = sorted(graph.dependents_of(slug))
            if dependents:
                raise HasDependents(slug, dependents)

            references = {
                "role assignments": await uow.role_permissions.count_by_permission(slug),
                "user overrides": await uow.overrides.count_by_permission(slug),
                "temporary grants": await uow.temporary_permissions.count_by_permission(slug),
            }
            used = {k: v for k, v in references.items() if v}
            if used:
                details = ", ".join(f"{n} {k}" for k, n in used.items())
                raise InUse(f"Permission {slug} is referenced by {details}")

            await uow.dependencies.delete_for_permission(slug)
            await uow.permissions.delete(slug)
            await uow.catalog.bump()
        logger.info("Deleted permission %s", slug)
