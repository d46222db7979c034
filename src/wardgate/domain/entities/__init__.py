"""Domain entities."""

from wardgate.domain.entities.audit_log import AuditLogEntry
from wardgate.domain.entities.change_request import PermissionChangeRequest
from wardgate.domain.entities.ip_restriction import PermissionIpRestriction
from wardgate.domain.entities.permission import Permission
from wardgate.domain.entities.permission_dependency import PermissionDependency
from wardgate.domain.entities.permission_session import (
    PermissionSession,
    PermissionSessionAction,
)
from wardgate.domain.entities.role import Role
from wardgate.domain.entities.role_permission import RolePermissionAssignment
from wardgate.domain.entities.temporary_permission import TemporaryPermission
from wardgate.domain.entities.user_override import UserPermissionOverride

__all__ = [
    "AuditLogEntry",
    "Permission",
    "PermissionChangeRequest",
    "PermissionDependency",
    "PermissionIpRestriction",
    "PermissionSession",
    "PermissionSessionAction",
    "Role",
    "RolePermissionAssignment",
    "TemporaryPermission",
    "UserPermissionOverride",
]
