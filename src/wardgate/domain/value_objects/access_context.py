"""Request context for an authorization decision."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessContext:
    """Caller's source address and whether MFA was satisfied in this authentication."""

    ip_address: str | None = None
    mfa_satisfied: bool = False
