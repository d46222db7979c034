"""Assign permission to role use case."""

import logging

from wardgate.application.ports import Clock, DependencyResolver
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import RolePermissionAssignment
from wardgate.domain.exceptions import NotFound, UnmetDependencyError
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class AssignRolePermissionUseCase:
    """Grant a permission to a role. The role must already hold its dependencies."""

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
        self, role_slug: str, permission: str, *, actor_id: str
    ) -> RolePermissionAssignment:
        role_slug = canonical_slug(role_slug)
        permission = canonical_slug(permission)
        now = self._clock.now()
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_slug(role_slug)
            if not role:
                raise NotFound("Role", role_slug)
            if not await uow.permissions.get_by_slug(permission):
                raise NotFound("Permission", permission)

            held = await uow.role_permissions.list_for_role(role.id)
            assignment = RolePermissionAssignment(
                role_id=role.id, permission=permission, created_at=now
            )
            if permission in held:
                return assignment

            missing = sorted(await self._resolver.closure(uow, permission) - held)
            if missing:
                raise UnmetDependencyError({permission: missing})

            await uow.role_permissions.add(assignment)
            await record_change(
                uow,
                now,
                actor_id,
                "role_permission.assigned",
                "role",
                role_slug,
                {"permissions": sorted(held)},
                {"permissions": sorted(held | {permission})},
            )
        logger.info("Assigned %s to role %s by %s", permission, role_slug, actor_id)
        return assignment
