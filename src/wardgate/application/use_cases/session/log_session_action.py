"""Log action inside elevated session use case."""

import logging
from typing import Any
from uuid import uuid4

from wardgate.application.ports import Clock
from wardgate.application.use_cases.session.session_policy import session_policy_for
from wardgate.domain.entities import PermissionSessionAction
from wardgate.domain.exceptions import NotFound, SessionClosed
from wardgate.domain.value_objects import SessionTimeoutPolicy

logger = logging.getLogger(__name__)


class LogSessionActionUseCase:
    """Append an action to an open session's audit log."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        default_timeout_minutes: int | None = 120,
        timeout_policy: SessionTimeoutPolicy = SessionTimeoutPolicy.INACTIVITY,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._default_timeout = default_timeout_minutes
        self._timeout_policy = timeout_policy

    async def execute(
        self,
        token: str,
        action_type: str,
        action_data: dict[str, Any],
        description: str | None = None,
    ) -> PermissionSessionAction:
        """Fails with SessionClosed once the session ended or timed out."""
        now = self._clock.now()
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_by_token(token, for_update=True)
            if not session:
                raise NotFound("Session", "token")
            if session.ended_at is not None:
                raise SessionClosed(f"Session {session.id} ended at {session.ended_at}")
            policy = await session_policy_for(
                uow, session.user_id, self._default_timeout, self._timeout_policy
            )
            if not session.is_open(now, policy.timeout_minutes, policy.timeout_policy):
                raise SessionClosed(
                    f"Session {session.id} timed out at "
                    f"{session.timeout_at(policy.timeout_minutes, policy.timeout_policy)}"
                )

            action = PermissionSessionAction(
                id=uuid4(),
                session_id=session.id,
                action_type=action_type,
                action_data=dict(action_data),
                description=description,
                performed_at=now,
            )
            await uow.sessions.add_action(action)
            await uow.sessions.touch(session.id, now)
        logger.info("Session %s action %s", session.id, action_type)
        return action
