"""Update role authority and session policy."""

import logging

from wardgate.application.use_cases.catalog.define_role import _validate_session_policy
from wardgate.domain.entities import Role
from wardgate.domain.exceptions import NotFound
from wardgate.domain.value_objects import canonical_slug

logger = logging.getLogger(__name__)

_UNSET = object()


class UpdateRolePolicyUseCase:
    """Change priority, MFA requirement and session limits of a role."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        role_slug: str,
        *,
        priority: int | None = None,
        mfa_required: bool | None = None,
        session_timeout_minutes: int | None | object = _UNSET,
        concurrent_session_limit: int | None | object = _UNSET,
    ) -> Role:
        """Only arguments that are passed are changed. None clears a session limit."""
        role_slug = canonical_slug(role_slug)
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_slug(role_slug)
            if not role:
                raise NotFound("Role", role_slug)
            if priority is not None:
                role.priority = priority
            if mfa_required is not None:
                role.mfa_required = mfa_required
            if session_timeout_minutes is not _UNSET:
                role.session_timeout_minutes = session_timeout_minutes
            if concurrent_session_limit is not _UNSET:
                role.concurrent_session_limit = concurrent_session_limit
            _validate_session_policy(
                role.session_timeout_minutes, role.concurrent_session_limit
            )
            await uow.roles.update(role)
            await uow.catalog.bump()
        logger.info("Updated policy of role %s", role_slug)
        return role
