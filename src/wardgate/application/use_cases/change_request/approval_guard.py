"""Authorization and state checks shared by approve and reject."""

import logging
from datetime import datetime
from uuid import UUID

from wardgate.application.ports import UnitOfWork
from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.exceptions import ApprovalForbidden, InvalidTransition, NotFound
from wardgate.domain.value_objects import ChangeRequestStatus

logger = logging.getLogger(__name__)


async def load_decidable_request(
    uow: UnitOfWork,
    request_id: UUID,
    approver_id: str,
    min_priority: int,
    now: datetime,
) -> PermissionChangeRequest:
    """Lock the request and verify the approver may move it out of pending."""
    request = await uow.change_requests.get_by_id(request_id, for_update=True)
    if not request:
        raise NotFound("Change request", request_id)

    if approver_id == request.requested_by:
        logger.warning("Self-approval attempt on %s by %s", request_id, approver_id)
        raise ApprovalForbidden("Requesters cannot decide their own change requests")

    role_id = await uow.user_roles.get_role_id(approver_id)
    role = await uow.roles.get_by_id(role_id) if role_id else None
    if role is None or role.priority < min_priority:
        logger.warning("Approver %s below priority %d for %s", approver_id, min_priority, request_id)
        raise ApprovalForbidden(
            f"Approver role priority must be at least {min_priority}"
        )

    if request.status != ChangeRequestStatus.PENDING:
        raise InvalidTransition(f"Change request is already {request.status}")
    if request.is_expired(now):
        raise InvalidTransition("Change request has expired")
    return request
