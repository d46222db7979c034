"""Domain exceptions."""


class WardgateError(Exception):
    """Base exception for Wardgate."""

    pass


class NotFound(WardgateError):
    """Requested entity was not found."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ValidationError(WardgateError):
    """Validation failed for input data."""

    pass


class PermissionDenied(WardgateError):
    """Actor is not allowed to perform the requested administrative action."""

    pass


class ApprovalForbidden(PermissionDenied):
    """Approver may not decide this change request (self-approval or low priority)."""

    pass


class DuplicateSlug(WardgateError):
    """A permission or role with the same slug already exists."""

    def __init__(self, kind: str, slug: str) -> None:
        super().__init__(f"{kind} slug already exists: {slug}")
        self.kind = kind
        self.slug = slug


class CycleDetected(WardgateError):
    """Adding the dependency edge would make the graph cyclic."""

    def __init__(self, permission: str, depends_on: str, path: list[str]) -> None:
        super().__init__(
            f"{permission} -> {depends_on} would create a cycle: {' -> '.join(path)}"
        )
        self.permission = permission
        self.depends_on = depends_on
        self.path = path


class HasDependents(WardgateError):
    """Other permissions still depend on the permission."""

    def __init__(self, slug: str, dependents: list[str]) -> None:
        super().__init__(f"{slug} is required by: {', '.join(dependents)}")
        self.slug = slug
        self.dependents = dependents


class InUse(WardgateError):
    """Entity is still referenced and cannot be removed."""

    pass


class SystemRoleProtected(WardgateError):
    """System roles cannot be deleted."""

    pass


class UnmetDependencyError(WardgateError):
    """Grant would leave declared dependencies unsatisfied."""

    def __init__(self, missing: dict[str, list[str]]) -> None:
        details = "; ".join(
            f"{slug} requires {', '.join(deps)}" for slug, deps in sorted(missing.items())
        )
        super().__init__(f"Unmet permission dependencies: {details}")
        self.missing = missing


class IpRestricted(WardgateError):
    """Source address is blocked by the IP restriction policy."""

    def __init__(self, ip_address: str | None) -> None:
        super().__init__(f"IP address not permitted: {ip_address}")
        self.ip_address = ip_address


class EmptyChangeSet(WardgateError):
    """Change request adds and removes nothing."""

    pass


class InvalidTransition(WardgateError):
    """State machine transition is not allowed from the current state."""

    pass


class SessionClosed(WardgateError):
    """Elevated session has ended or timed out."""

    pass


class SessionLimitReached(WardgateError):
    """User already holds the maximum number of concurrent elevated sessions."""

    pass
