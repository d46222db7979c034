"""Per-user session policy lookup."""

from dataclasses import dataclass

from wardgate.application.ports import UnitOfWork
from wardgate.domain.value_objects import SessionTimeoutPolicy


@dataclass(frozen=True)
class SessionPolicy:
    """Timeout and concurrency limits that apply to one user's sessions."""

    timeout_minutes: int | None
    concurrent_limit: int | None
    timeout_policy: SessionTimeoutPolicy


async def session_policy_for(
    uow: UnitOfWork,
    user_id: str,
    default_timeout_minutes: int | None,
    timeout_policy: SessionTimeoutPolicy,
) -> SessionPolicy:
    role_id = await uow.user_roles.get_role_id(user_id)
    role = await uow.roles.get_by_id(role_id) if role_id else None
    if role is None:
        return SessionPolicy(default_timeout_minutes, None, timeout_policy)
    timeout = role.session_timeout_minutes
    return SessionPolicy(
        timeout_minutes=timeout if timeout is not None else default_timeout_minutes,
        concurrent_limit=role.concurrent_session_limit,
        timeout_policy=timeout_policy,
    )
