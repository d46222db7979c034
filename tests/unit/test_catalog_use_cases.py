"""Unit tests for permission catalog use cases."""

import pytest

from wardgate.domain.entities import PermissionDependency
from wardgate.domain.exceptions import (
    CycleDetected,
    DuplicateSlug,
    HasDependents,
    InUse,
    NotFound,
    SystemRoleProtected,
    ValidationError,
)

VIEW = "view-patient-records"
PRESCRIBE = "prescribe-medication"


@pytest.mark.asyncio
async def test_define_permission(access, store) -> None:
    permission = await access.define_permission.execute(
        "View-Patient-Records", "View patient records", resource="patient", action="view"
    )

    assert permission.slug == VIEW
    assert (await store.permissions.get_by_slug(VIEW)).resource == "patient"
    assert store.catalog.version == 1


@pytest.mark.asyncio
async def test_define_permission_duplicate_slug(access, store) -> None:
    store.add_permission(VIEW)
    with pytest.raises(DuplicateSlug, match=VIEW):
        await access.define_permission.execute(VIEW, "Again")


@pytest.mark.asyncio
async def test_define_permission_rejects_bad_slug(access) -> None:
    with pytest.raises(ValidationError):
        await access.define_permission.execute("view records!", "Bad")


@pytest.mark.asyncio
async def test_define_role_and_list_by_priority(access) -> None:
    await access.define_role.execute("nurse", "Nurse", priority=30)
    await access.define_role.execute("chief", "Chief of Medicine", priority=95)
    await access.define_role.execute("doctor", "Doctor", priority=50)

    roles = await access.list_roles.execute()

    assert [r.slug for r in roles] == ["chief", "doctor", "nurse"]


@pytest.mark.asyncio
async def test_define_role_duplicate_slug(access, store) -> None:
    store.add_role("doctor")
    with pytest.raises(DuplicateSlug):
        await access.define_role.execute("doctor", "Doctor")


@pytest.mark.asyncio
async def test_define_role_rejects_non_positive_timeout(access) -> None:
    with pytest.raises(ValidationError):
        await access.define_role.execute("temp", "Temp", session_timeout_minutes=0)


@pytest.mark.asyncio
async def test_update_role_policy(access, store) -> None:
    store.add_role("doctor", priority=50, session_timeout_minutes=30)

    role = await access.update_role_policy.execute(
        "doctor", priority=60, session_timeout_minutes=None, mfa_required=True
    )

    assert role.priority == 60
    assert role.session_timeout_minutes is None
    assert role.mfa_required
    assert (await store.roles.get_by_slug("doctor")).priority == 60


@pytest.mark.asyncio
async def test_update_role_policy_invalid_leaves_role(access, store) -> None:
    store.add_role("doctor", priority=50)
    with pytest.raises(ValidationError):
        await access.update_role_policy.execute("doctor", priority=70, concurrent_session_limit=0)
    assert (await store.roles.get_by_slug("doctor")).priority == 50


@pytest.mark.asyncio
async def test_delete_system_role_protected(access, store) -> None:
    store.add_role("super-admin", priority=100, is_system=True)
    with pytest.raises(SystemRoleProtected):
        await access.delete_role.execute("super-admin")


@pytest.mark.asyncio
async def test_delete_role_in_use(access, store) -> None:
    role = store.add_role("doctor")
    store.assign_user("dr-grey", role)
    with pytest.raises(InUse):
        await access.delete_role.execute("doctor")


@pytest.mark.asyncio
async def test_delete_role(access, store) -> None:
    store.add_role("intern")
    await access.delete_role.execute("intern")
    assert await store.roles.get_by_slug("intern") is None


@pytest.mark.asyncio
async def test_add_dependency(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    version = store.catalog.version

    edge = await access.add_dependency.execute(PRESCRIBE, VIEW)

    assert edge == PermissionDependency(PRESCRIBE, VIEW)
    assert store.dependencies.edges == {edge}
    assert store.dependencies.lock_calls == 1
    assert store.catalog.version == version + 1


@pytest.mark.asyncio
async def test_add_dependency_duplicate_is_noop(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    store.add_dependency(PRESCRIBE, VIEW)
    version = store.catalog.version

    await access.add_dependency.execute(PRESCRIBE, VIEW)

    assert len(store.dependencies.edges) == 1
    assert store.catalog.version == version


@pytest.mark.asyncio
async def test_slugs_are_matched_case_insensitively(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)

    edge = await access.add_dependency.execute("Prescribe-Medication", " VIEW-Patient-Records")

    assert edge == PermissionDependency(PRESCRIBE, VIEW)
    await access.remove_dependency.execute("PRESCRIBE-MEDICATION", VIEW.upper())
    assert store.dependencies.edges == set()


@pytest.mark.asyncio
async def test_add_dependency_unknown_slug(access, store) -> None:
    store.add_permission(VIEW)
    with pytest.raises(NotFound, match="missing-perm"):
        await access.add_dependency.execute(VIEW, "missing-perm")


@pytest.mark.asyncio
async def test_add_dependency_cycle_leaves_graph_unchanged(access, store) -> None:
    for slug in ("a", "b", "c"):
        store.add_permission(slug)
    store.add_dependency("a", "b")
    store.add_dependency("b", "c")
    before = set(store.dependencies.edges)

    with pytest.raises(CycleDetected) as exc_info:
        await access.add_dependency.execute("c", "a")

    assert exc_info.value.path == ["c", "a", "b", "c"]
    assert store.dependencies.edges == before
    assert store.rollbacks == 1


@pytest.mark.asyncio
async def test_add_self_dependency_is_cycle(access, store) -> None:
    store.add_permission(VIEW)
    with pytest.raises(CycleDetected):
        await access.add_dependency.execute(VIEW, VIEW)


@pytest.mark.asyncio
async def test_remove_dependency(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    store.add_dependency(PRESCRIBE, VIEW)

    await access.remove_dependency.execute(PRESCRIBE, VIEW)

    assert store.dependencies.edges == set()
    with pytest.raises(NotFound):
        await access.remove_dependency.execute(PRESCRIBE, VIEW)


@pytest.mark.asyncio
async def test_delete_permission_with_dependents(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    store.add_dependency(PRESCRIBE, VIEW)

    with pytest.raises(HasDependents) as exc_info:
        await access.delete_permission.execute(VIEW)

    assert exc_info.value.dependents == [PRESCRIBE]


@pytest.mark.asyncio
async def test_delete_permission_in_use(access, store) -> None:
    store.add_permission(VIEW)
    store.grant_role(store.add_role("doctor"), VIEW)

    with pytest.raises(InUse, match="role assignments"):
        await access.delete_permission.execute(VIEW)


@pytest.mark.asyncio
async def test_delete_permission_removes_own_edges(access, store) -> None:
    store.add_permission(VIEW)
    store.add_permission(PRESCRIBE)
    store.add_dependency(PRESCRIBE, VIEW)

    await access.delete_permission.execute(PRESCRIBE)

    assert await store.permissions.get_by_slug(PRESCRIBE) is None
    assert store.dependencies.edges == set()
    assert [p.slug for p in await access.list_permissions.execute()] == [VIEW]
