from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for submission rules and admin-only actions."""

    ADMIN = "ADMIN"
    DISTRICT_LEADER = "DISTRICT_LEADER"
    PART_LEADER = "PART_LEADER"
    MEMBER = "MEMBER"

    @property
    def is_leader(self) -> bool:
        return self in {Role.ADMIN, Role.DISTRICT_LEADER, Role.PART_LEADER}


class ScoringRule(str, Enum):
    """How lateness is turned into a session percentage."""

    LINEAR = "linear"
    STEPPED = "stepped"
