"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from wardgate.application.ports.repositories import (
    AuditLogRepository,
    CatalogVersionRepository,
    ChangeRequestRepository,
    DependencyRepository,
    IpRestrictionRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    SessionRepository,
    TemporaryPermissionRepository,
    UserOverrideRepository,
    UserRoleRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def dependencies(self) -> DependencyRepository: ...

    @property
    def catalog(self) -> CatalogVersionRepository: ...

    @property
    def role_permissions(self) -> RolePermissionRepository: ...

    @property
    def overrides(self) -> UserOverrideRepository: ...

    @property
    def temporary_permissions(self) -> TemporaryPermissionRepository: ...

    @property
    def change_requests(self) -> ChangeRequestRepository: ...

    @property
    def sessions(self) -> SessionRepository: ...

    @property
    def ip_restrictions(self) -> IpRestrictionRepository: ...

    @property
    def user_roles(self) -> UserRoleRepository: ...

    @property
    def audit_log(self) -> AuditLogRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
