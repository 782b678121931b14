from datetime import datetime, timedelta
from types import SimpleNamespace

from fitclub.domain import stats

# a Wednesday
NOW = datetime(2026, 10, 14, 12, 0, 0)


def visit(checked_in_at, minutes=30, closed=True):
    return SimpleNamespace(
        checked_in_at=checked_in_at,
        checked_out_at=checked_in_at + timedelta(minutes=minutes) if closed else None,
        duration_minutes=minutes if closed else None,
    )


def workout(completed_at, minutes=45, status="completed", sets=3, reps=30, volume=1000.0):
    return SimpleNamespace(
        completed_at=completed_at,
        status=status,
        duration_minutes=minutes,
        total_sets=sets,
        total_reps=reps,
        total_volume=volume,
    )


def test_average_is_zero_without_rows():
    assert stats.average(0, 0) == 0
    assert stats.checkin_stats([], now=NOW)["averageDurationMinutes"] == 0
    assert stats.workout_stats([], now=NOW)["averageDurationMinutes"] == 0


def test_average_rounds_half_up():
    assert stats.average(5, 2) == 3
    assert stats.average(7, 3) == 2


def test_checkin_windows_are_rolling_and_inclusive():
    rows = [
        visit(NOW - timedelta(days=7)),
        visit(NOW - timedelta(days=7, seconds=1)),
        visit(NOW - timedelta(days=30)),
        visit(NOW - timedelta(days=31)),
        visit(NOW - timedelta(hours=1), closed=False),
    ]

    result = stats.checkin_stats(rows, now=NOW)

    assert result["totalVisits"] == 4
    assert result["totalMinutes"] == 120
    assert result["averageDurationMinutes"] == 30
    assert result["visitsThisWeek"] == 1
    assert result["visitsThisMonth"] == 3


def test_workout_week_starts_monday_and_month_on_the_first():
    rows = [
        workout(datetime(2026, 10, 12, 0, 0)),
        workout(datetime(2026, 10, 11, 23, 59)),
        workout(datetime(2026, 10, 1, 0, 0)),
        workout(datetime(2026, 9, 30, 23, 59)),
        workout(datetime(2026, 10, 13, 8, 0), status="cancelled"),
    ]

    result = stats.workout_stats(rows, now=NOW)

    assert result["totalWorkouts"] == 4
    assert result["thisWeekWorkouts"] == 1
    assert result["thisWeekMinutes"] == 45
    assert result["thisMonthWorkouts"] == 3
    assert result["totalSets"] == 12
    assert result["totalWeightLifted"] == 4000.0


def test_metric_trend_is_ordered_and_skips_missing_values():
    rows = [
        SimpleNamespace(recorded_at=NOW - timedelta(days=1), weight=80.5),
        SimpleNamespace(recorded_at=NOW - timedelta(days=10), weight=82.0),
        SimpleNamespace(recorded_at=NOW - timedelta(days=5), weight=None),
        SimpleNamespace(recorded_at=NOW - timedelta(days=45), weight=85.0),
    ]

    trend = stats.metric_trend(rows, "weight", days=30, now=NOW)

    assert [point["value"] for point in trend] == [82.0, 80.5]
    assert trend[0]["date"] == (NOW - timedelta(days=10)).isoformat()
