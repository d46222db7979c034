"""Repository ports."""

from wardgate.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from wardgate.application.ports.repositories.catalog_version_repository import (
    CatalogVersionRepository,
)
from wardgate.application.ports.repositories.change_request_repository import (
    ChangeRequestRepository,
)
from wardgate.application.ports.repositories.dependency_repository import (
    DependencyRepository,
)
from wardgate.application.ports.repositories.ip_restriction_repository import (
    IpRestrictionRepository,
)
from wardgate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from wardgate.application.ports.repositories.role_permission_repository import (
    RolePermissionRepository,
)
from wardgate.application.ports.repositories.role_repository import RoleRepository
from wardgate.application.ports.repositories.session_repository import SessionRepository
from wardgate.application.ports.repositories.temporary_permission_repository import (
    TemporaryPermissionRepository,
)
from wardgate.application.ports.repositories.user_override_repository import (
    UserOverrideRepository,
)
from wardgate.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "AuditLogRepository",
    "CatalogVersionRepository",
    "ChangeRequestRepository",
    "DependencyRepository",
    "IpRestrictionRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "SessionRepository",
    "TemporaryPermissionRepository",
    "UserOverrideRepository",
    "UserRoleRepository",
]
