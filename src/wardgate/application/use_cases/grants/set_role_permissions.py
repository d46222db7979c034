"""Replace the full permission set of a role."""

import logging

from wardgate.application.ports import Clock, DependencyResolver
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.exceptions import NotFound, UnmetDependencyError
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class SetRolePermissionsUseCase:
    """Replace role permissions; the new set must be closed under dependencies."""

    def __init__(
        self,
        unit_of_work_factory: type,
        dependency_resolver: DependencyResolver,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = dependency_resolver
        self._clock = clock

    async def execute(
        self, role_slug: str, permissions: list[str], *, actor_id: str
    ) -> set[str]:
        role_slug = canonical_slug(role_slug)
        wanted = {canonical_slug(p) for p in permissions}
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_slug(role_slug)
            if not role:
                raise NotFound("Role", role_slug)
            for slug in sorted(wanted):
                if not await uow.permissions.get_by_slug(slug):
                    raise NotFound("Permission", slug)

            graph = await self._resolver.graph(uow)
            missing = graph.missing_dependencies(wanted)
            if missing:
                raise UnmetDependencyError(missing)

            previous = await uow.role_permissions.list_for_role(role.id)
            await uow.role_permissions.replace(role.id, wanted)
            if previous != wanted:
                await record_change(
                    uow,
                    self._clock.now(),
                    actor_id,
                    "role_permission.replaced",
                    "role",
                    role_slug,
                    {"permissions": sorted(previous)},
                    {"permissions": sorted(wanted)},
                )
        logger.info(
            "Role %s permissions set by %s: +%s -%s",
            role_slug,
            actor_id,
            sorted(wanted - previous),
            sorted(previous - wanted),
        )
        return wanted
