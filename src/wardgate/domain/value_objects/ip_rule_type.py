"""IP restriction rule type."""

from enum import StrEnum


class IpRuleType(StrEnum):
    """Allow-list or deny-list rule."""

    ALLOW = "allow"
    DENY = "deny"
