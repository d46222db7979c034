"""Authorization decision returned by the evaluator."""

from dataclasses import dataclass
from enum import StrEnum


class DenyReason(StrEnum):
    """Why an evaluation was denied."""

    NOT_GRANTED = "not_granted"
    UNMET_DEPENDENCY = "unmet_dependency"
    MFA_REQUIRED = "mfa_required"
    IP_RESTRICTED = "ip_restricted"


@dataclass(frozen=True)
class Decision:
    """Allow, or Deny with a typed reason.

    ``missing`` lists unmet dependency slugs for ``UNMET_DEPENDENCY`` and the
    MFA-protected slugs for ``MFA_REQUIRED``.
    """

    allowed: bool
    reason: DenyReason | None = None
    missing: tuple[str, ...] = ()
    detail: str | None = None

    @classmethod
    def allow(cls, detail: str | None = None) -> "Decision":
        return cls(allowed=True, detail=detail)

    @classmethod
    def deny(
        cls,
        reason: DenyReason,
        missing: tuple[str, ...] = (),
        detail: str | None = None,
    ) -> "Decision":
        return cls(allowed=False, reason=reason, missing=missing, detail=detail)

    def __bool__(self) -> bool:
        return self.allowed

    @property
    def message(self) -> str:
        """Human-facing text for a denied action."""
        if self.allowed:
            return "action permitted"
        text = f"action not permitted: {self.reason}"
        if self.missing:
            text += f" ({', '.join(self.missing)})"
        return text
