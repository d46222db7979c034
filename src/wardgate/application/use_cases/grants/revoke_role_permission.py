"""Revoke permission from role use case."""

import logging

from wardgate.application.ports import Clock, DependencyResolver
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.exceptions import HasDependents, NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class RevokeRolePermissionUseCase:
    """Remove a permission from a role unless other held permissions require it."""

    def __init__(
        self,
        unit_of_work_factory: type,
        dependency_resolver: DependencyResolver,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = dependency_resolver
        self._clock = clock

    async def execute(self, role_slug: str, permission: str, *, actor_id: str) -> None:
        role_slug = canonical_slug(role_slug)
        permission = canonical_slug(permission)
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_slug(role_slug)
            if not role:
                raise NotFound("Role", role_slug)

            held = await uow.role_permissions.list_for_role(role.id)
            if permission not in held:
                raise NotFound("Role permission", f"{role_slug}/{permission}")

            graph = await self._resolver.graph(uow)
            dependents = sorted(
                slug for slug in held - {permission} if permission in graph.closure(slug)
            )
            if dependents:
                raise HasDependents(permission, dependents)

            await uow.role_permissions.remove(role.id, permission)
            await record_change(
                uow,
                self._clock.now(),
                actor_id,
                "role_permission.revoked",
                "role",
                role_slug,
                {"permissions": sorted(held)},
                {"permissions": sorted(held - {permission})},
            )
        logger.info("Revoked %s from role %s by %s", permission, role_slug, actor_id)
