"""Unit tests for IP rule matching and IpPolicy."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from wardgate.domain.entities import PermissionIpRestriction
from wardgate.domain.ip_policy import IpPolicy, rule_matches, validate_rule
from wardgate.domain.value_objects import IpRuleType


def _rule(text: str, kind: IpRuleType, active: bool = True) -> PermissionIpRestriction:
    return PermissionIpRestriction(
        id=uuid4(),
        ip_address=text,
        type=kind,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        is_active=active,
    )


class TestRuleMatches:
    @pytest.mark.parametrize(
        ("ip", "rule", "expected"),
        [
            ("10.1.2.3", "10.1.2.3", True),
            ("10.1.2.3", "10.1.2.4", False),
            ("10.1.2.3", "10.0.0.0/8", True),
            ("192.168.1.1", "10.0.0.0/8", False),
            ("2001:db8::1", "2001:db8::/32", True),
            ("10.1.2.3", "2001:db8::/32", False),
            ("192.168.1.77", "192.168.1.*", True),
            ("192.168.2.77", "192.168.1.*", False),
            ("not-an-ip", "10.0.0.0/8", False),
            ("2001:0db8::1", "2001:db8::1", True),
        ],
    )
    def test_matching(self, ip: str, rule: str, expected: bool) -> None:
        assert rule_matches(ip, rule) is expected


class TestValidateRule:
    def test_accepts_and_strips(self) -> None:
        assert validate_rule(" 10.0.0.0/8 ") == "10.0.0.0/8"
        assert validate_rule("192.168.*.*") == "192.168.*.*"
        assert validate_rule("::1") == "::1"

    @pytest.mark.parametrize("rule", ["", "10.0.0.0/33", "10.x.*", "300.1.1.1"])
    def test_rejects(self, rule: str) -> None:
        with pytest.raises(ValueError):
            validate_rule(rule)


class TestIpPolicy:
    def test_no_rules_permits_everything(self) -> None:
        policy = IpPolicy([])
        assert policy.permits("203.0.113.9")
        assert policy.permits(None)

    def test_private_network_allow_list(self) -> None:
        policy = IpPolicy([_rule("10.0.0.0/8", IpRuleType.ALLOW)])
        assert policy.permits("10.1.2.3")
        assert not policy.permits("192.168.1.1")
        assert not policy.permits(None)

    def test_deny_beats_allow(self) -> None:
        policy = IpPolicy(
            [_rule("10.0.0.0/8", IpRuleType.ALLOW), _rule("10.6.6.6", IpRuleType.DENY)]
        )
        assert not policy.permits("10.6.6.6")
        assert policy.permits("10.6.6.7")

    def test_deny_only_blocks_matches(self) -> None:
        policy = IpPolicy([_rule("198.51.100.0/24", IpRuleType.DENY)])
        assert not policy.permits("198.51.100.4")
        assert policy.permits("203.0.113.1")

    def test_inactive_rules_ignored(self) -> None:
        policy = IpPolicy([_rule("10.0.0.0/8", IpRuleType.ALLOW, active=False)])
        assert policy.permits("192.168.1.1")
