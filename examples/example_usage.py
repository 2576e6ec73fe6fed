"""Example: score a week of sessions with the engine and the service layer (no Flask)."""

from datetime import datetime, timedelta, timezone

from attendance_scoring.container import build_container
from attendance_scoring.scoring import (
    ArrivalEvent,
    EventAggregationConfig,
    LinearLatenessScorer,
    SessionWindow,
    WeightedSessionResult,
    aggregate,
)
from attendance_scoring.seed import seed_demo_data


def engine_only() -> None:
    start = datetime(2026, 2, 2, 9, 0, tzinfo=timezone.utc)
    window = SessionWindow.from_bounds(start, start + timedelta(hours=2))
    score = LinearLatenessScorer().score(window, ArrivalEvent(arrival_time=start + timedelta(minutes=15)))

    results = [WeightedSessionResult(window.duration_minutes, score.percentage), WeightedSessionResult(60, 100)]
    weekly = EventAggregationConfig(weekly_constraint=True, minimum_minutes_per_week=240)
    print(f"session: {score.percentage:.2f}%")
    print(f"cumulative (average): {aggregate(results, EventAggregationConfig()).percentage:.2f}%")
    print(f"cumulative (weekly quota): {aggregate(results, weekly).percentage:.2f}%")


def with_service() -> None:
    now = datetime.now(timezone.utc)
    container = build_container()
    seed_demo_data(container, now=now)

    svc = container.attendance_service
    for session in container.sessions_repo.list_for_event("rehearsals"):
        arrival = session.start_time + timedelta(minutes=10)
        if arrival > now:
            continue
        # admins may report on behalf of members
        result = svc.submit_attendance("admin", session.session_id, arrival, on_behalf_of="member", now=now)
        print(f"{session.session_id}: {result.record.percentage_score:.2f}% -> {result.summary.cumulative:.2f}%")


if __name__ == "__main__":
    engine_only()
    with_service()
