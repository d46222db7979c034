"""Elevated session timeout policy."""

from enum import StrEnum


class SessionTimeoutPolicy(StrEnum):
    """Which timestamp the role's session timeout is measured from."""

    INACTIVITY = "inactivity"  # last_action_at
    ABSOLUTE = "absolute"  # started_at
