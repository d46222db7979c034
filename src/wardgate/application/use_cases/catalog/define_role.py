"""Define role use case."""

import logging
from uuid import uuid4

from wardgate.application.ports import Clock
from wardgate.domain.entities import Role
from wardgate.domain.exceptions import DuplicateSlug, ValidationError
from wardgate.domain.value_objects import normalize_slug

logger = logging.getLogger(__name__)


class DefineRoleUseCase:
    """Add a role to the catalog."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        slug: str,
        name: str,
        priority: int = 0,
        description: str | None = None,
        is_system: bool = False,
        is_super_admin: bool = False,
        session_timeout_minutes: int | None = None,
        concurrent_session_limit: int | None = None,
        mfa_required: bool = False,
    ) -> Role:
        """Create role. Slug must be unused."""
        slug = normalize_slug(slug)
        _validate_session_policy(session_timeout_minutes, concurrent_session_limit)
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_slug(slug):
                raise DuplicateSlug("Role", slug)
            role = Role(
                id=uuid4(),
                slug=slug,
                name=name,
                priority=priority,
                description=description,
                is_system=is_system,
                is_super_admin=is_super_admin,
                session_timeout_minutes=session_timeout_minutes,
                concurrent_session_limit=concurrent_session_limit,
                mfa_required=mfa_required,
                created_at=self._clock.now(),
            )
            await uow.roles.create(role)
            await uow.catalog.bump()
        logger.info("Defined role %s (priority %d)", slug, priority)
        return role


def _validate_session_policy(
    session_timeout_minutes: int | None, concurrent_session_limit: int | None
) -> None:
    if session_timeout_minutes is not None and session_timeout_minutes <= 0:
        raise ValidationError("session_timeout_minutes must be positive")
    if concurrent_session_limit is not None and concurrent_session_limit <= 0:
        raise ValidationError("concurrent_session_limit must be positive")
