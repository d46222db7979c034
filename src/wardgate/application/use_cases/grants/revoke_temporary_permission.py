"""Revoke temporary permission use case."""

import logging
from uuid import UUID

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import TemporaryPermission
from wardgate.domain.exceptions import InvalidTransition, NotFound

logger = logging.getLogger(__name__)


class RevokeTemporaryPermissionUseCase:
    """Deactivate a temporary grant early. The row is kept for audit."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, grant_id: UUID, *, actor_id: str) -> TemporaryPermission:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            grant = await uow.temporary_permissions.get_by_id(grant_id)
            if not grant:
                raise NotFound("Temporary permission", grant_id)
            if not grant.is_active:
                raise InvalidTransition("Temporary permission already revoked")
            if grant.is_expired(now):
                raise InvalidTransition("Temporary permission already expired")
            grant.is_active = False
            await uow.temporary_permissions.update(grant)
            await record_change(
                uow,
                now,
                actor_id,
                "temporary_permission.revoked",
                "user",
                grant.user_id,
                {"grant_id": str(grant.id), "permission": grant.permission, "is_active": True},
                {"grant_id": str(grant.id), "permission": grant.permission, "is_active": False},
            )
        logger.info(
            "Revoked temporary %s for user %s by %s", grant.permission, grant.user_id, actor_id
        )
        return grant
