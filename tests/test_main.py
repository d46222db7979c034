"""Tests for the console entry point and settings."""

import pytest

from wardgate import __version__
from wardgate.config import Settings
from wardgate.domain.value_objects import SessionTimeoutPolicy
from wardgate.main import create_access_control, main


def test_version_command(capsys) -> None:
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == f"Wardgate v{__version__}"


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("APPROVAL_MIN_PRIORITY", "80")
    monkeypatch.setenv("SESSION_TIMEOUT_POLICY", "absolute")

    settings = Settings()

    assert settings.approval_min_priority == 80
    assert settings.session_timeout_policy == SessionTimeoutPolicy.ABSOLUTE
    assert settings.max_temporary_grant_hours == 720


@pytest.mark.asyncio
async def test_create_access_control_leaves_pool_closed() -> None:
    """Composition root wires settings through without connecting."""
    access, pool = create_access_control(Settings(approval_min_priority=95))

    assert access.approve._min_priority == 95
    assert pool.closed
