"""IP restriction policy - deny rules first, then allow-list presence."""

import ipaddress
import re
from collections.abc import Iterable

from wardgate.domain.entities import PermissionIpRestriction
from wardgate.domain.value_objects import IpRuleType


def rule_matches(ip_address: str, rule: str) -> bool:
    """Exact match, CIDR containment, or ``*`` wildcard."""
    if ip_address == rule:
        return True
    if "/" in rule:
        try:
            network = ipaddress.ip_network(rule, strict=False)
            address = ipaddress.ip_address(ip_address)
        except ValueError:
            return False
        return address.version == network.version and address in network
    if "*" in rule:
        pattern = re.escape(rule).replace(r"\*", r"[0-9A-Fa-f:.]*")
        return re.fullmatch(pattern, ip_address) is not None
    try:
        return ipaddress.ip_address(ip_address) == ipaddress.ip_address(rule)
    except ValueError:
        return False


def validate_rule(rule: str) -> str:
    """Normalize rule text; raise ValueError for rules that can never match."""
    rule = rule.strip()
    if not rule:
        raise ValueError("IP rule is empty")
    if "/" in rule:
        ipaddress.ip_network(rule, strict=False)
        return rule
    if "*" in rule:
        if not re.fullmatch(r"[0-9A-Fa-f:.*]+", rule):
            raise ValueError(f"Invalid wildcard rule: {rule}")
        return rule
    ipaddress.ip_address(rule)
    return rule


class IpPolicy:
    """Evaluates an address against active allow/deny rules."""

    def __init__(self, rules: Iterable[PermissionIpRestriction]) -> None:
        active = [r for r in rules if r.is_active]
        self._deny = [r.ip_address for r in active if r.type == IpRuleType.DENY]
        self._allow = [r.ip_address for r in active if r.type == IpRuleType.ALLOW]

    def permits(self, ip_address: str | None) -> bool:
        """Deny match blocks; a non-empty allow-list must match; otherwise permit."""
        if ip_address is not None:
            for rule in self._deny:
                if rule_matches(ip_address, rule):
                    return False
        if self._allow:
            if ip_address is None:
                return False
            return any(rule_matches(ip_address, rule) for rule in self._allow)
        return True
