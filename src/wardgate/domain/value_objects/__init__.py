"""Domain value objects."""

from wardgate.domain.value_objects.access_context import AccessContext
from wardgate.domain.value_objects.change_request_status import ChangeRequestStatus
from wardgate.domain.value_objects.decision import Decision, DenyReason
from wardgate.domain.value_objects.ip_rule_type import IpRuleType
from wardgate.domain.value_objects.session_timeout_policy import SessionTimeoutPolicy
from wardgate.domain.value_objects.slug import canonical_slug, normalize_slug

__all__ = [
    "AccessContext",
    "ChangeRequestStatus",
    "Decision",
    "DenyReason",
    "IpRuleType",
    "SessionTimeoutPolicy",
    "canonical_slug",
    "normalize_slug",
]
