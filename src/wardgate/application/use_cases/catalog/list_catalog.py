"""Catalog listing use cases."""

from wardgate.domain.entities import Permission, PermissionDependency, Role


class ListPermissionsUseCase:
    """List all permission definitions ordered by slug."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[Permission]:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
        return sorted(permissions, key=lambda p: p.slug)


class ListRolesUseCase:
    """List all roles, highest priority first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[Role]:
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        return sorted(roles, key=lambda r: (-r.priority, r.slug))


class ListDependenciesUseCase:
    """List every depends-on edge."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[PermissionDependency]:
        async with self._uow_factory() as uow:
            edges = await uow.dependencies.list_all()
        return sorted(edges, key=lambda e: (e.permission, e.depends_on))
