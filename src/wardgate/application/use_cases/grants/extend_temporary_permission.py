"""Extend temporary permission use case."""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import TemporaryPermission
from wardgate.domain.exceptions import InvalidTransition, NotFound, ValidationError

logger = logging.getLogger(__name__)


class ExtendTemporaryPermissionUseCase:
    """Push back the expiry of a grant that is still valid and time-bounded."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        max_duration: timedelta = timedelta(hours=720),
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._max_duration = max_duration

    async def execute(
        self, grant_id: UUID, new_expires_at: datetime, *, actor_id: str
    ) -> TemporaryPermission:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            grant = await uow.temporary_permissions.get_by_id(grant_id)
            if not grant:
                raise NotFound("Temporary permission", grant_id)
            if not grant.is_valid(now):
                raise InvalidTransition("Expired or revoked grants cannot be extended")
            if grant.expires_at is None:
                raise InvalidTransition("Grant has no expiry and cannot be extended")
            if new_expires_at <= grant.expires_at:
                raise ValidationError("New expiry must be later than the current one")
            if new_expires_at - now > self._max_duration:
                raise ValidationError(
                    f"Temporary permission may last at most {self._max_duration}"
                )
            previous = grant.expires_at
            grant.expires_at = new_expires_at
            await uow.temporary_permissions.update(grant)
            await record_change(
                uow,
                now,
                actor_id,
                "temporary_permission.extended",
                "user",
                grant.user_id,
                {"grant_id": str(grant.id), "expires_at": previous.isoformat()},
                {"grant_id": str(grant.id), "expires_at": new_expires_at.isoformat()},
            )
        logger.info(
            "Extended temporary %s for user %s to %s (by %s)",
            grant.permission,
            grant.user_id,
            new_expires_at,
            actor_id,
        )
        return grant
