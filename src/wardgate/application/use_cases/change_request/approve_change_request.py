"""Approve permission change request use case."""

import logging
from uuid import UUID

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.application.use_cases.change_request.approval_guard import (
    load_decidable_request,
)
from wardgate.domain.entities import PermissionChangeRequest, UserPermissionOverride
from wardgate.domain.exceptions import NotFound
from wardgate.domain.value_objects import ChangeRequestStatus

logger = logging.getLogger(__name__)


class ApproveChangeRequestUseCase:
    """Approve a pending request and apply its overrides in one transaction."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        min_approver_priority: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._min_priority = min_approver_priority

    async def execute(self, request_id: UUID, approver_id: str) -> PermissionChangeRequest:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            request = await load_decidable_request(
                uow, request_id, approver_id, self._min_priority, now
            )
            changes = [(slug, True) for slug in request.permissions_to_add] + [
                (slug, False) for slug in request.permissions_to_remove
            ]
            for slug, _ in changes:
                if not await uow.permissions.get_by_slug(slug):
                    raise NotFound("Permission", slug)
            for slug, allowed in changes:
                previous = await uow.overrides.get(request.user_id, slug)
                await uow.overrides.upsert(
                    UserPermissionOverride(
                        user_id=request.user_id,
                        permission=slug,
                        allowed=allowed,
                        updated_at=now,
                    )
                )
                await record_change(
                    uow,
                    now,
                    approver_id,
                    "user_override.set",
                    "user",
                    request.user_id,
                    {"permission": slug, "allowed": previous.allowed} if previous else {},
                    {"permission": slug, "allowed": allowed, "change_request": str(request.id)},
                )
            request.status = ChangeRequestStatus.APPROVED
            request.approved_by = approver_id
            request.approved_at = now
            await uow.change_requests.update(request)
            await record_change(
                uow,
                now,
                approver_id,
                "change_request.approved",
                "change_request",
                request.id,
                {"status": str(ChangeRequestStatus.PENDING)},
                {"status": str(ChangeRequestStatus.APPROVED), "user_id": request.user_id},
            )
        logger.info(
            "Change request %s approved by %s for user %s",
            request_id,
            approver_id,
            request.user_id,
        )
        return request
