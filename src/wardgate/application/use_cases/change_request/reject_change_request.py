"""Reject permission change request use case."""

import logging
from uuid import UUID

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.application.use_cases.change_request.approval_guard import (
    load_decidable_request,
)
from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.value_objects import ChangeRequestStatus

logger = logging.getLogger(__name__)


class RejectChangeRequestUseCase:
    """Reject a pending request. Grants are untouched."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        min_approver_priority: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._min_priority = min_approver_priority

    async def execute(
        self,
        request_id: UUID,
        approver_id: str,
        reason: str | None = None,
    ) -> PermissionChangeRequest:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            request = await load_decidable_request(
                uow, request_id, approver_id, self._min_priority, now
            )
            request.status = ChangeRequestStatus.REJECTED
            request.approved_by = approver_id
            request.approved_at = now
            request.decision_reason = reason
            await uow.change_requests.update(request)
            await record_change(
                uow,
                now,
                approver_id,
                "change_request.rejected",
                "change_request",
                request.id,
                {"status": str(ChangeRequestStatus.PENDING)},
                {"status": str(ChangeRequestStatus.REJECTED), "reason": reason},
            )
        logger.info("Change request %s rejected by %s", request_id, approver_id)
        return request
