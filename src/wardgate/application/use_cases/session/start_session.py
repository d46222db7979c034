"""Start elevated permission session use case."""

import logging
import secrets
from typing import Any
from uuid import uuid4

from wardgate.application.ports import Clock, IpGuard
from wardgate.application.use_cases.session.session_policy import session_policy_for
from wardgate.domain.entities import PermissionSession
from wardgate.domain.exceptions import IpRestricted, SessionLimitReached
from wardgate.domain.value_objects import SessionTimeoutPolicy

logger = logging.getLogger(__name__)


class StartSessionUseCase:
    """Open an audited elevation window for an admin user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        ip_guard: IpGuard,
        clock: Clock,
        default_timeout_minutes: int | None = 120,
        timeout_policy: SessionTimeoutPolicy = SessionTimeoutPolicy.INACTIVITY,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._ip_guard = ip_guard
        self._clock = clock
        self._default_timeout = default_timeout_minutes
        self._timeout_policy = timeout_policy

    async def execute(
        self,
        user_id: str,
        ip_address: str | None,
        metadata: dict[str, Any] | None = None,
        user_agent: str | None = None,
    ) -> PermissionSession:
        """Create session with a fresh token. Blocked IPs and full quotas fail."""
        now = self._clock.now()
        async with self._uow_factory() as uow:
            if not await self._ip_guard.is_permitted(uow, ip_address):
                raise IpRestricted(ip_address)

            policy = await session_policy_for(
                uow, user_id, self._default_timeout, self._timeout_policy
            )
            if policy.concurrent_limit is not None:
                await uow.sessions.lock_user(user_id)
                live = [
                    s
                    for s in await uow.sessions.list_unended_for_user(user_id)
                    if s.is_open(now, policy.timeout_minutes, policy.timeout_policy)
                ]
                if len(live) >= policy.concurrent_limit:
                    raise SessionLimitReached(
                        f"User {user_id} already has {len(live)} open session(s)"
                    )

            session = PermissionSession(
                id=uuid4(),
                user_id=user_id,
                token=secrets.token_urlsafe(48),
                started_at=now,
                last_action_at=now,
                ip_address=ip_address,
                user_agent=user_agent,
                metadata=dict(metadata or {}),
            )
            await uow.sessions.create(session)
        logger.info("Elevated session %s started by %s from %s", session.id, user_id, ip_address)
        return session
