"""Effective permission evaluator - combines grants, dependency closure and IP policy."""

import logging
from dataclasses import dataclass, field

from wardgate.application.ports import Clock, DependencyResolver, IpGuard, UnitOfWork
from wardgate.domain.entities import Permission, Role
from wardgate.domain.value_objects import AccessContext, Decision, DenyReason, canonical_slug

logger = logging.getLogger(__name__)


@dataclass
class GrantSnapshot:
    """Everything granted to one user, read in a single transaction."""

    role: Role | None
    overrides: dict[str, bool] = field(default_factory=dict)
    temporary: set[str] = field(default_factory=set)
    role_permissions: set[str] = field(default_factory=set)

    @property
    def is_super_admin(self) -> bool:
        return bool(self.role and self.role.is_super_admin)

    def direct(self, slug: str) -> tuple[bool, str]:
        """Precedence chain for one permission, without dependencies."""
        if slug in self.overrides:
            allowed = self.overrides[slug]
            return allowed, "override" if allowed else "revoked by user override"
        if slug in self.temporary:
            return True, "temporary grant"
        if slug in self.role_permissions:
            return True, "role"
        return False, "not granted"


class WardgatePermissionEvaluator:
    """Evaluates (user, permission, context) against current grants.

    Order: IP policy, super admin, then override / temporary / role for the
    permission and for every member of its dependency closure, then MFA.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        dependency_resolver: DependencyResolver,
        ip_guard: IpGuard,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = dependency_resolver
        self._ip_guard = ip_guard
        self._clock = clock

    async def evaluate(
        self, user_id: str, permission: str, context: AccessContext
    ) -> Decision:
        """Return Allow or Deny(reason) for user on permission."""
        permission = canonical_slug(permission)
        async with self._uow_factory() as uow:
            decision = await self._evaluate(uow, user_id, permission, context)
        if not decision.allowed:
            logger.info(
                "Denied %s for user %s: %s", permission, user_id, decision.reason
            )
        return decision

    async def check(self, user_id: str, permission: str, context: AccessContext) -> bool:
        return (await self.evaluate(user_id, permission, context)).allowed

    async def effective_permissions(
        self, user_id: str, context: AccessContext
    ) -> list[str]:
        """All catalog slugs that currently evaluate to Allow for the user."""
        async with self._uow_factory() as uow:
            if not await self._ip_guard.is_permitted(uow, context.ip_address):
                return []
            catalog = {p.slug: p for p in await uow.permissions.list_all()}
            snapshot = await self.load_snapshot(uow, user_id)
            allowed = []
            for slug in sorted(catalog):
                decision = await self._decide(uow, snapshot, catalog, slug, context)
                if decision.allowed:
                    allowed.append(slug)
            return allowed

    async def load_snapshot(self, uow: UnitOfWork, user_id: str) -> GrantSnapshot:
        now = self._clock.now()
        role_id = await uow.user_roles.get_role_id(user_id)
        role = await uow.roles.get_by_id(role_id) if role_id else None
        overrides = {o.permission: o.allowed for o in await uow.overrides.list_for_user(user_id)}
        temporary = {
            g.permission
            for g in await uow.temporary_permissions.list_for_user(user_id)
            if g.is_valid(now)
        }
        role_permissions = await uow.role_permissions.list_for_role(role.id) if role else set()
        return GrantSnapshot(
            role=role,
            overrides=overrides,
            temporary=temporary,
            role_permissions=set(role_permissions),
        )

    async def _evaluate(
        self,
        uow: UnitOfWork,
        user_id: str,
        slug: str,
        context: AccessContext,
    ) -> Decision:
        if not await self._ip_guard.is_permitted(uow, context.ip_address):
            return Decision.deny(DenyReason.IP_RESTRICTED, detail=context.ip_address)

        target = await uow.permissions.get_by_slug(slug)
        if target is None:
            return Decision.deny(DenyReason.NOT_GRANTED, detail="unknown permission")

        snapshot = await self.load_snapshot(uow, user_id)
        graph = await self._resolver.graph(uow)
        catalog: dict[str, Permission] = {slug: target}
        for dep in graph.closure(slug):
            perm = await uow.permissions.get_by_slug(dep)
            if perm is not None:
                catalog[dep] = perm
        return await self._decide(uow, snapshot, catalog, slug, context)

    async def _decide(
        self,
        uow: UnitOfWork,
        snapshot: GrantSnapshot,
        catalog: dict[str, Permission],
        slug: str,
        context: AccessContext,
    ) -> Decision:
        closure = await self._resolver.closure(uow, slug)

        if snapshot.is_super_admin:
            source = "super admin"
        else:
            allowed, source = snapshot.direct(slug)
            if not allowed:
                return Decision.deny(DenyReason.NOT_GRANTED, detail=source)
            missing = tuple(sorted(dep for dep in closure if not snapshot.direct(dep)[0]))
            if missing:
                return Decision.deny(DenyReason.UNMET_DEPENDENCY, missing=missing)

        if not context.mfa_satisfied:
            protected = tuple(
                sorted(
                    s
                    for s in (slug, *closure)
                    if s in catalog and catalog[s].requires_mfa
                )
            )
            if protected:
                return Decision.deny(DenyReason.MFA_REQUIRED, missing=protected)
            if snapshot.role and snapshot.role.mfa_required:
                return Decision.deny(DenyReason.MFA_REQUIRED, detail="role requires MFA")

        return Decision.allow(detail=source)
