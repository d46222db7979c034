"""Submit permission change request use case."""

import logging
from datetime import datetime
from uuid import uuid4

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.exceptions import EmptyChangeSet, NotFound, ValidationError
from wardgate.domain.value_objects import ChangeRequestStatus, canonical_slug

logger = logging.getLogger(__name__)


class SubmitChangeRequestUseCase:
    """Open a pending request to add and/or remove permissions for a user."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        requested_by: str,
        permissions_to_add: list[str],
        permissions_to_remove: list[str],
        reason: str,
        expires_at: datetime | None = None,
    ) -> PermissionChangeRequest:
        to_add = list(dict.fromkeys(canonical_slug(p) for p in permissions_to_add))
        to_remove = list(dict.fromkeys(canonical_slug(p) for p in permissions_to_remove))
        if not to_add and not to_remove:
            raise EmptyChangeSet("Change request must add or remove at least one permission")
        both = sorted(set(to_add) & set(to_remove))
        if both:
            raise ValidationError(f"Permissions both added and removed: {', '.join(both)}")

        now = self._clock.now()
        async with self._uow_factory() as uow:
            for slug in (*to_add, *to_remove):
                if not await uow.permissions.get_by_slug(slug):
                    raise NotFound("Permission", slug)
            request = PermissionChangeRequest(
                id=uuid4(),
                user_id=user_id,
                requested_by=requested_by,
                permissions_to_add=to_add,
                permissions_to_remove=to_remove,
                reason=reason,
                status=ChangeRequestStatus.PENDING,
                expires_at=expires_at,
                created_at=now,
            )
            await uow.change_requests.create(request)
            await record_change(
                uow,
                now,
                requested_by,
                "change_request.submitted",
                "change_request",
                request.id,
                new_values={
                    "user_id": user_id,
                    "status": str(ChangeRequestStatus.PENDING),
                    "permissions_to_add": to_add,
                    "permissions_to_remove": to_remove,
                    "reason": reason,
                },
            )
        logger.info(
            "Change request %s submitted by %s for user %s (+%d/-%d)",
            request.id,
            requested_by,
            user_id,
            len(to_add),
            len(to_remove),
        )
        return request
