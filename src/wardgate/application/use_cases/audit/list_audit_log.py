"""List audit log entries."""

from wardgate.domain.entities import AuditLogEntry


class ListAuditLogUseCase:
    """Oldest first, filtered by target and/or actor."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        target_type: str | None = None,
        target_id: object | None = None,
        actor_id: str | None = None,
    ) -> list[AuditLogEntry]:
        async with self._uow_factory() as uow:
            return await uow.audit_log.list(
                target_type=target_type,
                target_id=str(target_id) if target_id is not None else None,
                actor_id=actor_id,
            )
