"""Pytest fixtures for Wardgate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from copy import copy
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from wardgate.domain.entities import (
    AuditLogEntry,
    Permission,
    PermissionChangeRequest,
    PermissionDependency,
    PermissionIpRestriction,
    PermissionSession,
    PermissionSessionAction,
    Role,
    RolePermissionAssignment,
    TemporaryPermission,
    UserPermissionOverride,
)
from wardgate.domain.value_objects import ChangeRequestStatus, IpRuleType
from wardgate.main import AccessControl

NOW = datetime(2026, 1, 15, 8, 0, tzinfo=UTC)


class FixedClock:
    """Clock frozen at a given instant until advanced."""

    def __init__(self, now: datetime = NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now


# --- Fake repositories ---
# Getters hand out copies so use cases that mutate and then fail leave state intact.


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self) -> None:
        self._by_slug: dict[str, Permission] = {}

    async def get_by_slug(self, slug: str) -> Permission | None:
        p = self._by_slug.get(slug)
        return copy(p) if p else None

    async def list_all(self) -> list[Permission]:
        return [copy(p) for p in self._by_slug.values()]

    async def create(self, permission: Permission) -> Permission:
        self._by_slug[permission.slug] = copy(permission)
        return permission

    async def delete(self, slug: str) -> None:
        self._by_slug.pop(slug, None)


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}

    async def get_by_id(self, role_id: UUID) -> Role | None:
        r = self._by_id.get(role_id)
        return copy(r) if r else None

    async def get_by_slug(self, slug: str) -> Role | None:
        for r in self._by_id.values():
            if r.slug == slug:
                return copy(r)
        return None

    async def list_all(self) -> list[Role]:
        return [copy(r) for r in self._by_id.values()]

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = copy(role)
        return role

    async def update(self, role: Role) -> None:
        self._by_id[role.id] = copy(role)

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)


class FakeDependencyRepository:
    """In-memory edge set."""

    def __init__(self) -> None:
        self.edges: set[PermissionDependency] = set()
        self.lock_calls = 0

    async def lock(self) -> None:
        self.lock_calls += 1

    async def list_all(self) -> list[PermissionDependency]:
        return list(self.edges)

    async def create(self, edge: PermissionDependency) -> None:
        self.edges.add(edge)

    async def delete(self, edge: PermissionDependency) -> bool:
        if edge in self.edges:
            self.edges.discard(edge)
            return True
        return False

    async def delete_for_permission(self, slug: str) -> None:
        self.edges = {e for e in self.edges if e.permission != slug}


class FakeCatalogVersionRepository:
    def __init__(self) -> None:
        self.version = 0

    async def get_version(self) -> int:
        return self.version

    async def bump(self) -> int:
        self.version += 1
        return self.version


class FakeRolePermissionRepository:
    """In-memory role to permission mapping."""

    def __init__(self) -> None:
        self._by_role: dict[UUID, set[str]] = {}

    async def list_for_role(self, role_id: UUID) -> set[str]:
        return set(self._by_role.get(role_id, set()))

    async def add(self, assignment: RolePermissionAssignment) -> None:
        self._by_role.setdefault(assignment.role_id, set()).add(assignment.permission)

    async def remove(self, role_id: UUID, permission: str) -> bool:
        held = self._by_role.get(role_id, set())
        if permission in held:
            held.discard(permission)
            return True
        return False

    async def replace(self, role_id: UUID, permissions: set[str]) -> None:
        self._by_role[role_id] = set(permissions)

    async def count_by_permission(self, permission: str) -> int:
        return sum(1 for held in self._by_role.values() if permission in held)


class FakeUserOverrideRepository:
    """In-memory overrides keyed by (user_id, permission)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[str, str], UserPermissionOverride] = {}

    async def list_for_user(self, user_id: str) -> list[UserPermissionOverride]:
        return [copy(o) for (u, _), o in self._by_key.items() if u == user_id]

    async def get(self, user_id: str, permission: str) -> UserPermissionOverride | None:
        o = self._by_key.get((user_id, permission))
        return copy(o) if o else None

    async def upsert(self, override: UserPermissionOverride) -> None:
        self._by_key[(override.user_id, override.permission)] = copy(override)

    async def delete(self, user_id: str, permission: str) -> bool:
        return self._by_key.pop((user_id, permission), None) is not None

    async def count_by_permission(self, permission: str) -> int:
        return sum(1 for (_, p) in self._by_key if p == permission)


class FakeTemporaryPermissionRepository:
    """In-memory temporary grants."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, TemporaryPermission] = {}

    async def get_by_id(self, grant_id: UUID) -> TemporaryPermission | None:
        g = self._by_id.get(grant_id)
        return copy(g) if g else None

    async def list_for_user(self, user_id: str) -> list[TemporaryPermission]:
        return [copy(g) for g in self._by_id.values() if g.user_id == user_id]

    async def create(self, grant: TemporaryPermission) -> TemporaryPermission:
        self._by_id[grant.id] = copy(grant)
        return grant

    async def update(self, grant: TemporaryPermission) -> None:
        self._by_id[grant.id] = copy(grant)

    async def count_by_permission(self, permission: str) -> int:
        return sum(1 for g in self._by_id.values() if g.permission == permission)


class FakeChangeRequestRepository:
    """In-memory change requests."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionChangeRequest] = {}

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> PermissionChangeRequest | None:
        r = self._by_id.get(request_id)
        return copy(r) if r else None

    async def list(
        self,
        *,
        status: ChangeRequestStatus | None = None,
        user_id: str | None = None,
    ):
        return [
            copy(r)
            for r in self._by_id.values()
            if (status is None or r.status == status)
            and (user_id is None or r.user_id == user_id)
        ]

    async def create(self, request: PermissionChangeRequest) -> PermissionChangeRequest:
        self._by_id[request.id] = copy(request)
        return request

    async def update(self, request: PermissionChangeRequest) -> None:
        self._by_id[request.id] = copy(request)

    async def expire_pending(self, now: datetime) -> list[UUID]:
        expired = []
        for r in self._by_id.values():
            if r.status == ChangeRequestStatus.PENDING and r.is_expired(now):
                r.status = ChangeRequestStatus.EXPIRED
                expired.append(r.id)
        return expired


class FakeSessionRepository:
    """In-memory sessions and action log."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionSession] = {}
        self.actions: list[PermissionSessionAction] = []
        self.locked_users: list[str] = []

    async def lock_user(self, user_id: str) -> None:
        self.locked_users.append(user_id)

    async def create(self, session: PermissionSession) -> PermissionSession:
        self._by_id[session.id] = copy(session)
        return session

    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> PermissionSession | None:
        for s in self._by_id.values():
            if s.token == token:
                return copy(s)
        return None

    async def list_unended_for_user(self, user_id: str) -> list[PermissionSession]:
        return [
            copy(s)
            for s in self._by_id.values()
            if s.user_id == user_id and s.ended_at is None
        ]

    async def mark_ended(self, session_id: UUID, ended_at: datetime) -> bool:
        s = self._by_id.get(session_id)
        if s is None or s.ended_at is not None:
            return False
        s.ended_at = ended_at
        return True

    async def touch(self, session_id: UUID, at: datetime) -> None:
        self._by_id[session_id].last_action_at = at

    async def add_action(self, action: PermissionSessionAction) -> PermissionSessionAction:
        self.actions.append(action)
        return action

    async def list_actions(self, session_id: UUID) -> list[PermissionSessionAction]:
        return [a for a in self.actions if a.session_id == session_id]


class FakeIpRestrictionRepository:
    """In-memory IP rules."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, PermissionIpRestriction] = {}

    async def get_by_id(self, rule_id: UUID) -> PermissionIpRestriction | None:
        r = self._by_id.get(rule_id)
        return copy(r) if r else None

    async def list_all(self, active_only: bool = False) -> list[PermissionIpRestriction]:
        return [copy(r) for r in self._by_id.values() if r.is_active or not active_only]

    async def create(self, rule: PermissionIpRestriction) -> PermissionIpRestriction:
        self._by_id[rule.id] = copy(rule)
        return rule

    async def update(self, rule: PermissionIpRestriction) -> None:
        self._by_id[rule.id] = copy(rule)


class FakeUserRoleRepository:
    """User to role mapping normally owned by the identity layer."""

    def __init__(self) -> None:
        self.by_user: dict[str, UUID] = {}

    async def get_role_id(self, user_id: str) -> UUID | None:
        return self.by_user.get(user_id)

    async def count_for_role(self, role_id: UUID) -> int:
        return sum(1 for r in self.by_user.values() if r == role_id)


class FakeAuditLogRepository:
    """In-memory append-only audit log."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def add(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.entries.append(entry)
        return entry

    async def list(
        self,
        *,
        target_type: str | None = None,
        target_id: str | None = None,
        actor_id: str | None = None,
    ):
        return [
            e
            for e in self.entries
            if (target_type is None or e.target_type == target_type)
            and (target_id is None or e.target_id == target_id)
            and (actor_id is None or e.actor_id == actor_id)
        ]

    def actions(self) -> list[str]:
        return [e.action for e in self.entries]


# --- Shared store and Fake UnitOfWork ---


class FakeStore:
    """State shared by every FakeUnitOfWork created from one factory."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.roles = FakeRoleRepository()
        self.dependencies = FakeDependencyRepository()
        self.catalog = FakeCatalogVersionRepository()
        self.role_permissions = FakeRolePermissionRepository()
        self.overrides = FakeUserOverrideRepository()
        self.temporary_permissions = FakeTemporaryPermissionRepository()
        self.change_requests = FakeChangeRequestRepository()
        self.sessions = FakeSessionRepository()
        self.ip_restrictions = FakeIpRestrictionRepository()
        self.user_roles = FakeUserRoleRepository()
        self.audit_log = FakeAuditLogRepository()
        self.commits = 0
        self.rollbacks = 0

    # Seeding helpers write straight into the store, bypassing validation.

    def add_permission(self, slug: str, requires_mfa: bool = False) -> Permission:
        permission = Permission(
            id=uuid4(),
            slug=slug,
            name=slug.replace("-", " ").title(),
            requires_mfa=requires_mfa,
            created_at=NOW,
        )
        self.permissions._by_slug[slug] = permission
        self.catalog.version += 1
        return permission

    def add_role(self, slug: str, priority: int = 0, **policy) -> Role:
        role = Role(id=uuid4(), slug=slug, name=slug.title(), priority=priority, created_at=NOW, **policy)
        self.roles._by_id[role.id] = role
        self.catalog.version += 1
        return role

    def add_dependency(self, permission: str, depends_on: str) -> None:
        self.dependencies.edges.add(PermissionDependency(permission, depends_on))
        self.catalog.version += 1

    def grant_role(self, role: Role, *slugs: str) -> None:
        self.role_permissions._by_role.setdefault(role.id, set()).update(slugs)

    def assign_user(self, user_id: str, role: Role) -> None:
        self.user_roles.by_user[user_id] = role.id

    def add_ip_rule(self, rule: str, rule_type: IpRuleType, is_active: bool = True) -> None:
        r = PermissionIpRestriction(
            id=uuid4(), ip_address=rule, type=rule_type, created_at=NOW, is_active=is_active
        )
        self.ip_restrictions._by_id[r.id] = r


class FakeUnitOfWork:
    """In-memory Unit of Work over a FakeStore."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self.permissions = store.permissions
        self.roles = store.roles
        self.dependencies = store.dependencies
        self.catalog = store.catalog
        self.role_permissions = store.role_permissions
        self.overrides = store.overrides
        self.temporary_permissions = store.temporary_permissions
        self.change_requests = store.change_requests
        self.sessions = store.sessions
        self.ip_restrictions = store.ip_restrictions
        self.user_roles = store.user_roles
        self.audit_log = store.audit_log

    async def commit(self) -> None:
        self._store.commits += 1

    async def rollback(self) -> None:
        self._store.rollbacks += 1


def make_uow_factory(store: FakeStore):
    """Factory mirroring the Postgres one: commit on success, rollback on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


# --- Fixtures ---


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory state for each test."""
    return FakeStore()


@pytest.fixture
def uow_factory(store: FakeStore):
    return make_uow_factory(store)


@pytest.fixture
def access(uow_factory, clock: FixedClock) -> AccessControl:
    """Facade wired to the fake store with default policy."""
    return AccessControl(uow_factory, clock)
