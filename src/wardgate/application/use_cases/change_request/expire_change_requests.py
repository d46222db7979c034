"""Background sweep: expire pending change requests past their deadline."""

import logging

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.value_objects import ChangeRequestStatus

logger = logging.getLogger(__name__)


class ExpireChangeRequestsUseCase:
    """Idempotent; safe to run redundantly or concurrently."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self) -> int:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            expired = await uow.change_requests.expire_pending(now)
            for request_id in expired:
                await record_change(
                    uow,
                    now,
                    None,
                    "change_request.expired",
                    "change_request",
                    request_id,
                    {"status": str(ChangeRequestStatus.PENDING)},
                    {"status": str(ChangeRequestStatus.EXPIRED)},
                )
        if expired:
            logger.info("Expired %d pending change request(s)", len(expired))
        return len(expired)
