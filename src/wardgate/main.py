"""Application entry point and composition root."""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta

from wardgate import __version__
from wardgate.application.ports import Clock, PermissionEvaluator, UnitOfWorkFactory
from wardgate.application.use_cases.audit.list_audit_log import ListAuditLogUseCase
from wardgate.application.use_cases.catalog.add_dependency import AddDependencyUseCase
from wardgate.application.use_cases.catalog.define_permission import DefinePermissionUseCase
from wardgate.application.use_cases.catalog.define_role import DefineRoleUseCase
from wardgate.application.use_cases.catalog.delete_permission import DeletePermissionUseCase
from wardgate.application.use_cases.catalog.delete_role import DeleteRoleUseCase
from wardgate.application.use_cases.catalog.list_catalog import (
    ListDependenciesUseCase,
    ListPermissionsUseCase,
    ListRolesUseCase,
)
from wardgate.application.use_cases.catalog.remove_dependency import RemoveDependencyUseCase
from wardgate.application.use_cases.catalog.update_role_policy import UpdateRolePolicyUseCase
from wardgate.application.use_cases.change_request.approve_change_request import (
    ApproveChangeRequestUseCase,
)
from wardgate.application.use_cases.change_request.expire_change_requests import (
    ExpireChangeRequestsUseCase,
)
from wardgate.application.use_cases.change_request.list_change_requests import (
    ListChangeRequestsUseCase,
)
from wardgate.application.use_cases.change_request.reject_change_request import (
    RejectChangeRequestUseCase,
)
from wardgate.application.use_cases.change_request.submit_change_request import (
    SubmitChangeRequestUseCase,
)
from wardgate.application.use_cases.grants.assign_role_permission import (
    AssignRolePermissionUseCase,
)
from wardgate.application.use_cases.grants.extend_temporary_permission import (
    ExtendTemporaryPermissionUseCase,
)
from wardgate.application.use_cases.grants.grant_temporary_permission import (
    GrantTemporaryPermissionUseCase,
)
from wardgate.application.use_cases.grants.revoke_role_permission import (
    RevokeRolePermissionUseCase,
)
from wardgate.application.use_cases.grants.revoke_temporary_permission import (
    RevokeTemporaryPermissionUseCase,
)
from wardgate.application.use_cases.grants.set_role_permissions import (
    SetRolePermissionsUseCase,
)
from wardgate.application.use_cases.grants.user_override import (
    ClearUserOverrideUseCase,
    SetUserOverrideUseCase,
)
from wardgate.application.use_cases.ip_restriction.manage_ip_restrictions import (
    AddIpRestrictionUseCase,
    DeactivateIpRestrictionUseCase,
    ListIpRestrictionsUseCase,
)
from wardgate.application.use_cases.session.end_session import (
    EndSessionUseCase,
    EndUserSessionsUseCase,
)
from wardgate.application.use_cases.session.list_session_actions import (
    ListSessionActionsUseCase,
)
from wardgate.application.use_cases.session.log_session_action import LogSessionActionUseCase
from wardgate.application.use_cases.session.start_session import StartSessionUseCase
from wardgate.config import Settings, get_settings
from wardgate.domain.value_objects import AccessContext, Decision, SessionTimeoutPolicy
from wardgate.infrastructure.clock import SystemClock
from wardgate.infrastructure.permission.dependency_resolver import CachingDependencyResolver
from wardgate.infrastructure.permission.ip_guard import IpRestrictionGuard
from wardgate.infrastructure.permission.permission_evaluator import (
    WardgatePermissionEvaluator,
)
from wardgate.infrastructure.persistence.postgres.connection import create_pool
from wardgate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    )


class AccessControl:
    """In-process facade over every access-control operation.

    Use cases are exposed as attributes; the operations callers use on the
    hot path also get shortcut methods.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        clock: Clock | None = None,
        *,
        approval_min_priority: int = 90,
        max_temporary_grant: timedelta = timedelta(hours=720),
        default_session_timeout_minutes: int | None = 120,
        session_timeout_policy: SessionTimeoutPolicy = SessionTimeoutPolicy.INACTIVITY,
    ) -> None:
        clock = clock or SystemClock()
        uow = unit_of_work_factory
        self.resolver = CachingDependencyResolver()
        self.ip_guard = IpRestrictionGuard()
        self.evaluator: PermissionEvaluator = WardgatePermissionEvaluator(
            unit_of_work_factory=uow,
            dependency_resolver=self.resolver,
            ip_guard=self.ip_guard,
            clock=clock,
        )

        # Catalog
        self.define_permission = DefinePermissionUseCase(uow, clock)
        self.delete_permission = DeletePermissionUseCase(uow, self.resolver)
        self.define_role = DefineRoleUseCase(uow, clock)
        self.update_role_policy = UpdateRolePolicyUseCase(uow)
        self.delete_role = DeleteRoleUseCase(uow)
        self.add_dependency = AddDependencyUseCase(uow, self.resolver)
        self.remove_dependency = RemoveDependencyUseCase(uow)
        self.list_permissions = ListPermissionsUseCase(uow)
        self.list_roles = ListRolesUseCase(uow)
        self.list_dependencies = ListDependenciesUseCase(uow)

        # Grants
        self.assign_role_permission = AssignRolePermissionUseCase(uow, self.resolver, clock)
        self.set_role_permissions = SetRolePermissionsUseCase(uow, self.resolver, clock)
        self.revoke_role_permission = RevokeRolePermissionUseCase(uow, self.resolver, clock)
        self.set_user_override = SetUserOverrideUseCase(uow, clock)
        self.clear_user_override = ClearUserOverrideUseCase(uow, clock)
        self.grant_temporary_permission = GrantTemporaryPermissionUseCase(
            uow, clock, max_duration=max_temporary_grant
        )
        self.revoke_temporary_permission = RevokeTemporaryPermissionUseCase(uow, clock)
        self.extend_temporary_permission = ExtendTemporaryPermissionUseCase(
            uow, clock, max_duration=max_temporary_grant
        )

        # Change requests
        self.submit = SubmitChangeRequestUseCase(uow, clock)
        self.approve = ApproveChangeRequestUseCase(uow, clock, approval_min_priority)
        self.reject = RejectChangeRequestUseCase(uow, clock, approval_min_priority)
        self.expire_stale_requests = ExpireChangeRequestsUseCase(uow, clock)
        self.list_change_requests = ListChangeRequestsUseCase(uow)

        # Elevated sessions
        self.start_session = StartSessionUseCase(
            uow,
            self.ip_guard,
            clock,
            default_timeout_minutes=default_session_timeout_minutes,
            timeout_policy=session_timeout_policy,
        )
        self.log_action = LogSessionActionUseCase(
            uow,
            clock,
            default_timeout_minutes=default_session_timeout_minutes,
            timeout_policy=session_timeout_policy,
        )
        self.end = EndSessionUseCase(uow, clock)
        self.end_user_sessions = EndUserSessionsUseCase(uow, clock)
        self.list_session_actions = ListSessionActionsUseCase(uow)

        # IP restrictions
        self.add_ip_restriction = AddIpRestrictionUseCase(uow, clock)
        self.deactivate_ip_restriction = DeactivateIpRestrictionUseCase(uow, clock)
        self.list_ip_restrictions = ListIpRestrictionsUseCase(uow)

        # Audit
        self.list_audit_log = ListAuditLogUseCase(uow)

    async def evaluate(
        self, user_id: str, permission: str, context: AccessContext | None = None
    ) -> Decision:
        return await self.evaluator.evaluate(user_id, permission, context or AccessContext())

    async def check(
        self, user_id: str, permission: str, context: AccessContext | None = None
    ) -> bool:
        return await self.evaluator.check(user_id, permission, context or AccessContext())

    async def list_effective_permissions(
        self, user_id: str, context: AccessContext | None = None
    ) -> list[str]:
        return await self.evaluator.effective_permissions(user_id, context or AccessContext())

    async def submit_change_request(self, *args, **kwargs):
        return await self.submit.execute(*args, **kwargs)

    async def approve_change_request(self, request_id, approver_id):
        return await self.approve.execute(request_id, approver_id)

    async def reject_change_request(self, request_id, approver_id, reason=None):
        return await self.reject.execute(request_id, approver_id, reason)

    async def start_elevated_session(self, user_id, ip_address, metadata=None, user_agent=None):
        return await self.start_session.execute(user_id, ip_address, metadata, user_agent)

    async def log_session_action(self, token, action_type, action_data, description=None):
        return await self.log_action.execute(token, action_type, action_data, description)

    async def end_session(self, token):
        return await self.end.execute(token)


def create_access_control(settings: Settings | None = None):
    """Composition root - build pool, unit of work factory and facade.

    Returns ``(access_control, pool)``; the pool is not opened here.
    """
    settings = settings or get_settings()
    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)
    access = AccessControl(
        uow_factory,
        approval_min_priority=settings.approval_min_priority,
        max_temporary_grant=timedelta(hours=settings.max_temporary_grant_hours),
        default_session_timeout_minutes=settings.default_session_timeout_minutes,
        session_timeout_policy=settings.session_timeout_policy,
    )
    return access, pool


async def _sweep(settings: Settings) -> int:
    access, pool = create_access_control(settings)
    await pool.open()
    try:
        expired = await access.expire_stale_requests.execute()
        logger.info("Sweep finished, %d change request(s) expired", expired)
        return expired
    finally:
        await pool.close()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wardgate", description="Hospital access control")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("version", help="Print version")
    sub.add_parser("sweep", help="Expire pending change requests past their deadline")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    if args.command == "version":
        print(f"Wardgate v{__version__}")
        return 0

    settings = get_settings()
    configure_logging(settings.log_level)
    expired = asyncio.run(_sweep(settings))
    print(f"Expired {expired} change request(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
