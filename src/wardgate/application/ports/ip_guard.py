"""IP restriction guard port."""

from typing import Protocol

from wardgate.application.ports.unit_of_work import UnitOfWork


class IpGuard(Protocol):
    """Checks a source address against the active restriction rules."""

    async def is_permitted(self, uow: UnitOfWork, ip_address: str | None) -> bool: ...
