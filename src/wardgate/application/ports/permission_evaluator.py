"""Permission evaluator port - the single authorization check point."""

from typing import Protocol

from wardgate.domain.value_objects import AccessContext, Decision


class PermissionEvaluator(Protocol):
    """Decides whether a user may exercise a permission."""

    async def evaluate(
        self, user_id: str, permission: str, context: AccessContext
    ) -> Decision: ...

    async def check(self, user_id: str, permission: str, context: AccessContext) -> bool: ...

    async def effective_permissions(self, user_id: str, context: AccessContext) -> list[str]:
        """Catalog slugs that currently evaluate to Allow."""
        ...
