from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from .attendance.model import Event, Session, User
from .container import Container
from .core.enums import Role

logger = logging.getLogger(__name__)


def seed_demo_data(container: Container, *, minimum_minutes_per_week: float = 240, now: datetime | None = None) -> None:
    """Load an admin, a part leader, a member and a weekly-constrained event with three sessions."""
    now = now or datetime.now(timezone.utc)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    container.users_repo.add(User(user_id="admin", full_name="Demo Admin", role=Role.ADMIN, district_id="d1"))
    container.users_repo.add(
        User(user_id="leader", full_name="Demo Part Leader", role=Role.PART_LEADER, district_id="d1", voice_part="alto")
    )
    container.users_repo.add(User(user_id="member", full_name="Demo Member", role=Role.MEMBER, district_id="d1", voice_part="alto"))

    container.events_repo.add(
        Event(
            event_id="rehearsals",
            title="Weekly rehearsals",
            start_date=today - timedelta(days=7),
            end_date=today + timedelta(days=30),
            weekly_constraint=True,
            minimum_minutes_per_week=minimum_minutes_per_week,
        )
    )
    for offset in range(3):
        start = today - timedelta(days=offset) + timedelta(hours=9)
        container.sessions_repo.add(
            Session(
                session_id=f"rehearsal-{offset + 1}",
                event_id="rehearsals",
                district_id="d1",
                start_time=start,
                end_time=start + timedelta(hours=2),
            )
        )
    logger.info("demo data seeded")
