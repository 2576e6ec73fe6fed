import pytest

from attendance_scoring.scoring.aggregation import aggregate, earned_minutes, weighted_sum
from attendance_scoring.scoring.model import EventAggregationConfig, WeightedSessionResult as R

UNCONSTRAINED = EventAggregationConfig(weekly_constraint=False)
WEEKLY_120 = EventAggregationConfig(weekly_constraint=True, minimum_minutes_per_week=120)


@pytest.mark.parametrize("config", [UNCONSTRAINED, WEEKLY_120])
def test_no_sessions_means_zero(config):
    assert aggregate([], config).percentage == 0


def test_earned_minutes():
    assert earned_minutes(60, 50) == 30
    assert weighted_sum([R(60, 50), R(30, 100)]) == 60


def test_unconstrained_is_duration_weighted_average():
    assert aggregate([R(60, 80), R(60, 100)], UNCONSTRAINED).percentage == pytest.approx(90)
    assert aggregate([R(120, 50), R(60, 100)], UNCONSTRAINED).percentage == pytest.approx(200 / 3)


def test_constrained_divides_by_weekly_quota():
    assert aggregate([R(60, 100)], WEEKLY_120).percentage == pytest.approx(50)


def test_constrained_is_capped_at_full_credit():
    assert aggregate([R(200, 100)], WEEKLY_120).percentage == 100


@pytest.mark.parametrize("minimum", [None, 0, -30])
def test_constraint_without_positive_quota_falls_back_to_average(minimum):
    config = EventAggregationConfig(weekly_constraint=True, minimum_minutes_per_week=minimum)
    assert not config.is_constrained
    assert aggregate([R(60, 50), R(60, 100)], config).percentage == pytest.approx(75)


def test_quota_ignored_when_constraint_disabled():
    config = EventAggregationConfig(weekly_constraint=False, minimum_minutes_per_week=600)
    assert aggregate([R(60, 100)], config).percentage == 100


def test_zero_total_duration_scores_zero():
    assert aggregate([R(0, 100), R(0, 50)], UNCONSTRAINED).percentage == 0


def test_order_does_not_matter():
    results = [R(45, 10), R(120, 95.5), R(30, 60), R(90, 0)]
    for config in (UNCONSTRAINED, WEEKLY_120):
        forward = aggregate(results, config).percentage
        backward = aggregate(list(reversed(results)), config).percentage
        assert forward == pytest.approx(backward)


def test_aggregate_is_repeatable():
    results = [R(60, 80), R(60, 100)]
    assert aggregate(results, UNCONSTRAINED) == aggregate(results, UNCONSTRAINED)
