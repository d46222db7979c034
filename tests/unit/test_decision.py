"""Unit tests for Decision and related value objects."""

import pytest

from wardgate.domain.exceptions import ValidationError
from wardgate.domain.value_objects import Decision, DenyReason, normalize_slug


def test_allow_is_truthy() -> None:
    decision = Decision.allow(detail="role")
    assert decision
    assert decision.reason is None
    assert decision.message == "action permitted"


def test_deny_message_includes_missing() -> None:
    decision = Decision.deny(DenyReason.MFA_REQUIRED, missing=("export-records",))
    assert not decision
    assert decision.message == "action not permitted: mfa_required (export-records)"


def test_decision_is_frozen() -> None:
    decision = Decision.deny(DenyReason.NOT_GRANTED)
    with pytest.raises(AttributeError):
        decision.allowed = True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("View-Patient-Records", "view-patient-records"), (" lab.results_read ", "lab.results_read")],
)
def test_normalize_slug(raw: str, expected: str) -> None:
    assert normalize_slug(raw) == expected


@pytest.mark.parametrize("raw", ["", "-leading-dash", "has space", "x" * 101])
def test_normalize_slug_rejects(raw: str) -> None:
    with pytest.raises(ValidationError):
        normalize_slug(raw)
