"""End elevated permission session use cases."""

import logging

from wardgate.application.ports import Clock
from wardgate.domain.entities import PermissionSession
from wardgate.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class EndSessionUseCase:
    """Close a session. Ending an ended session is a no-op."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, token: str) -> PermissionSession:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_by_token(token)
            if not session:
                raise NotFound("Session", "token")
            if await uow.sessions.mark_ended(session.id, now):
                session.ended_at = now
                logger.info("Elevated session %s ended", session.id)
            else:
                session = await uow.sessions.get_by_token(token)
        return session


class EndUserSessionsUseCase:
    """Force-end every unended session of a user."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, user_id: str) -> int:
        now = self._clock.now()
        ended = 0
        async with self._uow_factory() as uow:
            for session in await uow.sessions.list_unended_for_user(user_id):
                if await uow.sessions.mark_ended(session.id, now):
                    ended += 1
        if ended:
            logger.info("Force-ended %d session(s) of user %s", ended, user_id)
        return ended
