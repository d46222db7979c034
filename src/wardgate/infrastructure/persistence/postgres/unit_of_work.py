"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from wardgate.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLogRepository,
)
from wardgate.infrastructure.persistence.postgres.change_request_repository import (
    PostgresChangeRequestRepository,
)
from wardgate.infrastructure.persistence.postgres.dependency_repository import (
    PostgresCatalogVersionRepository,
    PostgresDependencyRepository,
)
from wardgate.infrastructure.persistence.postgres.grant_repositories import (
    PostgresRolePermissionRepository,
    PostgresTemporaryPermissionRepository,
    PostgresUserOverrideRepository,
)
from wardgate.infrastructure.persistence.postgres.ip_restriction_repository import (
    PostgresIpRestrictionRepository,
)
from wardgate.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from wardgate.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from wardgate.infrastructure.persistence.postgres.session_repository import (
    PostgresSessionRepository,
)
from wardgate.infrastructure.persistence.postgres.user_role_repository import (
    PostgresUserRoleRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._permissions = PostgresPermissionRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._dependencies = PostgresDependencyRepository(self._conn)
        self._catalog = PostgresCatalogVersionRepository(self._conn)
        self._role_permissions = PostgresRolePermissionRepository(self._conn)
        self._overrides = PostgresUserOverrideRepository(self._conn)
        self._temporary_permissions = PostgresTemporaryPermissionRepository(self._conn)
        self._change_requests = PostgresChangeRequestRepository(self._conn)
        self._sessions = PostgresSessionRepository(self._conn)
        self._ip_restrictions = PostgresIpRestrictionRepository(self._conn)
        self._user_roles = PostgresUserRoleRepository(self._conn)
        self._audit_log = PostgresAuditLogRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def dependencies(self) -> PostgresDependencyRepository:
        return self._dependencies

    @property
    def catalog(self) -> PostgresCatalogVersionRepository:
        return self._catalog

    @property
    def role_permissions(self) -> PostgresRolePermissionRepository:
        return self._role_permissions

    @property
    def overrides(self) -> PostgresUserOverrideRepository:
        return self._overrides

    @property
    def temporary_permissions(self) -> PostgresTemporaryPermissionRepository:
        return self._temporary_permissions

    @property
    def change_requests(self) -> PostgresChangeRequestRepository:
        return self._change_requests

    @property
    def sessions(self) -> PostgresSessionRepository:
        return self._sessions

    @property
    def ip_restrictions(self) -> PostgresIpRestrictionRepository:
        return self._ip_restrictions

    @property
    def user_roles(self) -> PostgresUserRoleRepository:
        return self._user_roles

    @property
    def audit_log(self) -> PostgresAuditLogRepository:
        return self._audit_log

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits normally, rolls back on any exception.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
