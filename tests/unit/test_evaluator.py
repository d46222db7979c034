"""Unit tests for effective permission evaluation."""

from datetime import timedelta
from uuid import uuid4

import pytest

from wardgate.domain.entities import TemporaryPermission, UserPermissionOverride
from wardgate.domain.value_objects import AccessContext, DenyReason, IpRuleType

from tests.conftest import NOW

VIEW = "view-patient-records"
PRESCRIBE = "prescribe-medication"


@pytest.fixture
def hospital(store):
    """Doctor role holding view + prescribe, where prescribe requires view."""
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    store.add_dependency(PRESCRIBE, VIEW)
    doctor = store.add_role("doctor", priority=50)
    store.grant_role(doctor, VIEW, PRESCRIBE)
    store.assign_user("dr-grey", doctor)
    return doctor


def _temp(user_id: str, permission: str, expires_in: timedelta | None, active: bool = True):
    return TemporaryPermission(
        id=uuid4(),
        user_id=user_id,
        permission=permission,
        granted_by="admin-1",
        granted_at=NOW,
        reason="covering night shift",
        expires_at=NOW + expires_in if expires_in else None,
        is_active=active,
    )


@pytest.mark.asyncio
async def test_role_grant_allows(access, hospital) -> None:
    decision = await access.evaluate("dr-grey", VIEW)
    assert decision.allowed
    assert decision.detail == "role"


@pytest.mark.asyncio
async def test_unknown_permission_is_not_granted(access, hospital) -> None:
    decision = await access.evaluate("dr-grey", "launch-rockets")
    assert not decision.allowed
    assert decision.reason == DenyReason.NOT_GRANTED


@pytest.mark.asyncio
async def test_user_without_role_is_not_granted(access, hospital) -> None:
    decision = await access.evaluate("visitor", VIEW)
    assert decision.reason == DenyReason.NOT_GRANTED
    assert decision.message == "action not permitted: not_granted"


@pytest.mark.asyncio
async def test_override_deny_beats_role(access, store, hospital) -> None:
    await store.overrides.upsert(UserPermissionOverride("dr-grey", VIEW, False, NOW))

    decision = await access.evaluate("dr-grey", VIEW)

    assert decision.reason == DenyReason.NOT_GRANTED
    assert decision.detail == "revoked by user override"


@pytest.mark.asyncio
async def test_override_allow_without_role(access, store, hospital) -> None:
    await store.overrides.upsert(UserPermissionOverride("nurse-1", VIEW, True, NOW))
    assert await access.check("nurse-1", VIEW)


@pytest.mark.asyncio
async def test_temporary_grant_expires_by_clock(access, store, clock, hospital) -> None:
    await store.temporary_permissions.create(_temp("nurse-1", VIEW, timedelta(hours=1)))
    assert await access.check("nurse-1", VIEW)

    clock.advance(hours=1)

    decision = await access.evaluate("nurse-1", VIEW)
    assert decision.reason == DenyReason.NOT_GRANTED


@pytest.mark.asyncio
async def test_revoked_temporary_grant_ignored(access, store, hospital) -> None:
    await store.temporary_permissions.create(_temp("nurse-1", VIEW, None, active=False))
    assert not await access.check("nurse-1", VIEW)


@pytest.mark.asyncio
async def test_prescribe_requires_view(access, store, hospital) -> None:
    assert await access.check("dr-grey", PRESCRIBE)

    await store.overrides.upsert(UserPermissionOverride("dr-grey", VIEW, False, NOW))

    decision = await access.evaluate("dr-grey", PRESCRIBE)
    assert decision.reason == DenyReason.UNMET_DEPENDENCY
    assert decision.missing == (VIEW,)
    assert decision.message == f"action not permitted: unmet_dependency ({VIEW})"


@pytest.mark.asyncio
async def test_dependency_satisfied_by_temporary_grant(access, store, hospital) -> None:
    resident = store.add_role("resident", priority=20)
    store.grant_role(resident, PRESCRIBE)
    store.assign_user("dr-karev", resident)
    assert (await access.evaluate("dr-karev", PRESCRIBE)).reason == DenyReason.UNMET_DEPENDENCY

    await store.temporary_permissions.create(_temp("dr-karev", VIEW, timedelta(hours=8)))

    assert await access.check("dr-karev", PRESCRIBE)


@pytest.mark.asyncio
async def test_new_dependency_applies_immediately(access, store, hospital) -> None:
    assert await access.check("dr-grey", PRESCRIBE)
    store.add_permission("verify-allergies")

    await access.add_dependency.execute(PRESCRIBE, "verify-allergies")

    decision = await access.evaluate("dr-grey", PRESCRIBE)
    assert decision.reason == DenyReason.UNMET_DEPENDENCY
    assert decision.missing == ("verify-allergies",)


@pytest.mark.asyncio
async def test_mfa_protected_permission(access, store, hospital) -> None:
    store.add_permission("export-records", requires_mfa=True)
    store.grant_role(hospital, "export-records")

    denied = await access.evaluate("dr-grey", "export-records")
    allowed = await access.evaluate(
        "dr-grey", "export-records", AccessContext(mfa_satisfied=True)
    )

    assert denied.reason == DenyReason.MFA_REQUIRED
    assert denied.missing == ("export-records",)
    assert allowed.allowed


@pytest.mark.asyncio
async def test_mfa_required_through_dependency(access, store, hospital) -> None:
    store.add_permission("unlock-controlled-drugs", requires_mfa=True)
    store.add_dependency(PRESCRIBE, "unlock-controlled-drugs")
    store.grant_role(hospital, "unlock-controlled-drugs")

    decision = await access.evaluate("dr-grey", PRESCRIBE)

    assert decision.reason == DenyReason.MFA_REQUIRED
    assert decision.missing == ("unlock-controlled-drugs",)


@pytest.mark.asyncio
async def test_role_mfa_required(access, store, hospital) -> None:
    hospital.mfa_required = True
    await store.roles.update(hospital)

    assert (await access.evaluate("dr-grey", VIEW)).reason == DenyReason.MFA_REQUIRED
    assert await access.check("dr-grey", VIEW, AccessContext(mfa_satisfied=True))


@pytest.mark.asyncio
async def test_super_admin_bypasses_grants_and_dependencies(access, store, hospital) -> None:
    admin = store.add_role("super-admin", priority=100, is_super_admin=True)
    store.assign_user("root", admin)

    decision = await access.evaluate("root", PRESCRIBE)

    assert decision.allowed
    assert decision.detail == "super admin"
    assert not await access.check("root", "launch-rockets")


@pytest.mark.asyncio
async def test_super_admin_still_needs_mfa(access, store, hospital) -> None:
    store.add_permission("export-records", requires_mfa=True)
    admin = store.add_role("super-admin", priority=100, is_super_admin=True)
    store.assign_user("root", admin)

    decision = await access.evaluate("root", "export-records")

    assert decision.reason == DenyReason.MFA_REQUIRED


@pytest.mark.asyncio
async def test_ip_restriction_checked_first(access, store, hospital) -> None:
    store.add_ip_rule("10.0.0.0/8", IpRuleType.ALLOW)
    admin = store.add_role("super-admin", priority=100, is_super_admin=True)
    store.assign_user("root", admin)

    outside = await access.evaluate("root", VIEW, AccessContext(ip_address="192.168.1.1"))
    inside = await access.evaluate("root", VIEW, AccessContext(ip_address="10.1.2.3"))

    assert outside.reason == DenyReason.IP_RESTRICTED
    assert inside.allowed


@pytest.mark.asyncio
async def test_effective_permissions(access, store, hospital) -> None:
    store.add_permission("discharge-patient")
    await store.overrides.upsert(UserPermissionOverride("dr-grey", VIEW, False, NOW))

    assert await access.list_effective_permissions("dr-grey") == []

    await store.overrides.delete("dr-grey", VIEW)
    assert await access.list_effective_permissions("dr-grey") == [PRESCRIBE, VIEW]


@pytest.mark.asyncio
async def test_effective_permissions_empty_when_ip_blocked(access, store, hospital) -> None:
    store.add_ip_rule("192.168.1.1", IpRuleType.DENY)
    ctx = AccessContext(ip_address="192.168.1.1")
    assert await access.list_effective_permissions("dr-grey", ctx) == []
