"""Delete role use case."""

import logging

from wardgate.domain.exceptions import InUse, NotFound, SystemRoleProtected
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Remove a non-system role that no user holds."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_slug: str) -> None:
        role_slug = canonical_slug(role_slug)
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_slug(role_slug)
            if not role:
                raise NotFound("Role", role_slug)
            if role.is_system:
                raise SystemRoleProtected(f"System role cannot be deleted: {role_slug}")
            holders = await uow.user_roles.count_for_role(role.id)
            if holders:
                raise InUse(f"Role {role_slug} is assigned to {holders} user(s)")
            await uow.role_permissions.replace(role.id, set())
            await uow.roles.delete(role.id)
            await uow.catalog.bump()
        logger.info("Deleted role %s", role_slug)
