"""IP restriction guard backed by the restriction table."""

import logging

from wardgate.application.ports import UnitOfWork
from wardgate.domain.ip_policy import IpPolicy

logger = logging.getLogger(__name__)


class IpRestrictionGuard:
    """Loads active rules on each check so rule changes apply immediately."""

    async def is_permitted(self, uow: UnitOfWork, ip_address: str | None) -> bool:
        rules = await uow.ip_restrictions.list_all(active_only=True)
        permitted = IpPolicy(rules).permits(ip_address)
        if not permitted:
            logger.warning("Blocked request from IP %s", ip_address)
        return permitted
