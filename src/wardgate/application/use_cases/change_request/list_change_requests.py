"""List permission change requests."""

from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.value_objects import ChangeRequestStatus


class ListChangeRequestsUseCase:
    """Newest first, optionally filtered by status and target user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        status: ChangeRequestStatus | None = None,
        user_id: str | None = None,
    ) -> list[PermissionChangeRequest]:
        async with self._uow_factory() as uow:
            items = await uow.change_requests.list(status=status, user_id=user_id)
        return sorted(items, key=lambda r: r.created_at, reverse=True)
