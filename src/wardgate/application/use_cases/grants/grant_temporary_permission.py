"""Grant temporary permission use case."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import TemporaryPermission
from wardgate.domain.exceptions import NotFound, ValidationError
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class GrantTemporaryPermissionUseCase:
    """Create a time-bounded elevation for a user."""

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
        self,
        user_id: str,
        permission: str,
        granted_by: str,
        reason: str,
        expires_at: datetime | None = None,
    ) -> TemporaryPermission:
        """Grant. ``expires_at`` must follow the grant time and respect the maximum."""
        permission = canonical_slug(permission)
        now = self._clock.now()
        if not reason.strip():
            raise ValidationError("A reason is required for temporary permissions")
        if expires_at is not None:
            if expires_at <= now:
                raise ValidationError("expires_at must be after granted_at")
            if expires_at - now > self._max_duration:
                raise ValidationError(
                    f"Temporary permission may last at most {self._max_duration}"
                )

        async with self._uow_factory() as uow:
            if not await uow.permissions.get_by_slug(permission):
                raise NotFound("Permission", permission)
            grant = TemporaryPermission(
                id=uuid4(),
                user_id=user_id,
                permission=permission,
                granted_by=granted_by,
                granted_at=now,
                expires_at=expires_at,
                reason=reason,
                is_active=True,
            )
            await uow.temporary_permissions.create(grant)
            await record_change(
                uow,
                now,
                granted_by,
                "temporary_permission.granted",
                "user",
                user_id,
                new_values={
                    "grant_id": str(grant.id),
                    "permission": permission,
                    "expires_at": _iso(expires_at),
                    "reason": reason,
                },
            )
        logger.info(
            "Temporary %s granted to user %s by %s until %s",
            permission,
            user_id,
            granted_by,
            expires_at,
        )
        return grant


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
