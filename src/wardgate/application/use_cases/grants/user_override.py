"""Per-user override use cases."""

import logging

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import UserPermissionOverride
from wardgate.domain.exceptions import NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)


class SetUserOverrideUseCase:
    """Explicitly allow or deny one permission for one user."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self, user_id: str, permission: str, allowed: bool, *, actor_id: str
    ) -> UserPermissionOverride:
        permission = canonical_slug(permission)
        now = self._clock.now()
        async with self._uow_factory() as uow:
            if not await uow.permissions.get_by_slug(permission):
                raise NotFound("Permission", permission)
            previous = await uow.overrides.get(user_id, permission)
            override = UserPermissionOverride(
                user_id=user_id,
                permission=permission,
                allowed=allowed,
                updated_at=now,
            )
            await uow.overrides.upsert(override)
            await record_change(
                uow,
                now,
                actor_id,
                "user_override.set",
                "user",
                user_id,
                {"permission": permission, "allowed": previous.allowed} if previous else {},
                {"permission": permission, "allowed": allowed},
            )
        logger.info(
            "Override %s for user %s: %s (by %s)",
            permission,
            user_id,
            "allow" if allowed else "deny",
            actor_id,
        )
        return override


class ClearUserOverrideUseCase:
    """Remove an override so role and temporary grants apply again."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, user_id: str, permission: str, *, actor_id: str) -> None:
        permission = canonical_slug(permission)
        async with self._uow_factory() as uow:
            previous = await uow.overrides.get(user_id, permission)
            if not previous or not await uow.overrides.delete(user_id, permission):
                raise NotFound("Override", f"{user_id}/{permission}")
            await record_change(
                uow,
                self._clock.now(),
                actor_id,
                "user_override.cleared",
                "user",
                user_id,
                {"permission": permission, "allowed": previous.allowed},
                {},
            )
        logger.info("Cleared override %s for user %s by %s", permission, user_id, actor_id)
