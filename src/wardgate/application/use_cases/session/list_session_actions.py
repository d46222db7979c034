"""List the audit log of an elevated session."""

from wardgate.domain.entities import PermissionSessionAction
from wardgate.domain.exceptions import NotFound


class ListSessionActionsUseCase:
    """Actions in the order they were performed."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, token: str) -> list[PermissionSessionAction]:
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_by_token(token)
            if not session:
                raise NotFound("Session", "token")
            actions = await uow.sessions.list_actions(session.id)
        return sorted(actions, key=lambda a: a.performed_at)
