"""IP restriction administration use cases."""

import logging
from uuid import UUID, uuid4

from wardgate.application.ports import Clock
from wardgate.application.use_cases.audit.record import record_change
from wardgate.domain.entities import PermissionIpRestriction
from wardgate.domain.exceptions import NotFound, ValidationError
from wardgate.domain.ip_policy import validate_rule
from wardgate.domain.value_objects import IpRuleType

logger = logging.getLogger(__name__)


class AddIpRestrictionUseCase:
    """Add an allow or deny rule (exact address, CIDR block or wildcard)."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        ip_address: str,
        rule_type: IpRuleType | str,
        description: str | None = None,
        created_by: str | None = None,
    ) -> PermissionIpRestriction:
        try:
            rule_text = validate_rule(ip_address)
            kind = IpRuleType(rule_type)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        now = self._clock.now()
        rule = PermissionIpRestriction(
            id=uuid4(),
            ip_address=rule_text,
            type=kind,
            description=description,
            created_by=created_by,
            is_active=True,
            created_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.ip_restrictions.create(rule)
            await record_change(
                uow,
                now,
                created_by,
                "ip_restriction.added",
                "ip_restriction",
                rule.id,
                new_values={"ip_address": rule_text, "type": str(kind), "is_active": True},
            )
        logger.info("Added %s rule %s", kind, rule_text)
        return rule


class DeactivateIpRestrictionUseCase:
    """Turn a rule off. Rules are kept for audit."""

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, rule_id: UUID, *, actor_id: str) -> PermissionIpRestriction:
        async with self._uow_factory() as uow:
            rule = await uow.ip_restrictions.get_by_id(rule_id)
            if not rule:
                raise NotFound("IP restriction", rule_id)
            if rule.is_active:
                rule.is_active = False
                await uow.ip_restrictions.update(rule)
                await record_change(
                    uow,
                    self._clock.now(),
                    actor_id,
                    "ip_restriction.deactivated",
                    "ip_restriction",
                    rule.id,
                    {"ip_address": rule.ip_address, "is_active": True},
                    {"ip_address": rule.ip_address, "is_active": False},
                )
                logger.info("Deactivated %s rule %s by %s", rule.type, rule.ip_address, actor_id)
        return rule


class ListIpRestrictionsUseCase:
    """List rules, optionally only active ones."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, active_only: bool = False) -> list[PermissionIpRestriction]:
        async with self._uow_factory() as uow:
            rules = await uow.ip_restrictions.list_all(active_only=active_only)
        return sorted(rules, key=lambda r: r.created_at)
