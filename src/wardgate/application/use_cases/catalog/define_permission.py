"""Define permission use case."""

import logging
from uuid import uuid4

from wardgate.application.ports import Clock
from wardgate.domain.entities import Permission
from wardgate.domain.exceptions import DuplicateSlug
from wardgate.domain.value_objects import normalize_slug

logger = logging.getLogger(__name__)


class DefinePermissionUseCase:
    """Add a permission to the catalog."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        slug: str,
        name: str,
        description: str | None = None,
        resource: str | None = None,
        action: str | None = None,
        requires_mfa: bool = False,
    ) -> Permission:
        """Create permission. Slug must be unused."""
        slug = normalize_slug(slug)
        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_slug(slug):
                raise DuplicateSlug("Permission", slug)
            permission = Permission(
                id=uuid4(),
                slug=slug,
                name=name,
                description=description,
                resource=resource,
                action=action,
                requires_mfa=requires_mfa,
                created_at=self._clock.now(),
            )
            await uow.permissions.create(permission)
            await uow.catalog.bump()
        logger.info("Defined permission %s", slug)
        return permission
