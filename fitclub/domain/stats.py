"""Read-side rollups over closed check-ins and completed workout sessions.

Window policies:

* check-in stats use rolling windows: the last 7 days and the last 30 days,
  both ending at ``now``, over ``checked_in_at``;
* workout stats use calendar windows: the week starting Monday 00:00 UTC
  and the month starting on the 1st 00:00 UTC, over ``completed_at``.

Windows include both ends.
"""

from datetime import timedelta

from fitclub.utils.timeutils import round_half_up, start_of_day, utcnow


def average(total, count):
    if not count:
        return 0
    return round_half_up(total / count)


def week_start(now):
    return start_of_day((now - timedelta(days=now.weekday())).date())


def month_start(now):
    return start_of_day(now.date().replace(day=1))


def _within(value, start, end):
    return value is not None and start <= value <= end


def checkin_stats(check_ins, now=None):
    now = now or utcnow()
    closed = [c for c in check_ins if c.checked_out_at is not None]
    total_minutes = sum(c.duration_minutes or 0 for c in closed)

    week_from = now - timedelta(days=7)
    month_from = now - timedelta(days=30)
    return {
        "totalVisits": len(closed),
        "totalMinutes": total_minutes,
        "averageDurationMinutes": average(total_minutes, len(closed)),
        "visitsThisWeek": sum(1 for c in closed if _within(c.checked_in_at, week_from, now)),
        "visitsThisMonth": sum(1 for c in closed if _within(c.checked_in_at, month_from, now)),
    }


def workout_stats(sessions, now=None):
    now = now or utcnow()
    completed = [s for s in sessions if s.status == "completed"]
    total_minutes = sum(s.duration_minutes or 0 for s in completed)

    this_week = [s for s in completed if _within(s.completed_at, week_start(now), now)]
    this_month = [s for s in completed if _within(s.completed_at, month_start(now), now)]
    return {
        "totalWorkouts": len(completed),
        "totalMinutes": total_minutes,
        "totalSets": sum(s.total_sets or 0 for s in completed),
        "totalReps": sum(s.total_reps or 0 for s in completed),
        "totalWeightLifted": float(sum(s.total_volume or 0 for s in completed)),
        "thisWeekWorkouts": len(this_week),
        "thisWeekMinutes": sum(s.duration_minutes or 0 for s in this_week),
        "thisMonthWorkouts": len(this_month),
        "averageDurationMinutes": average(total_minutes, len(completed)),
    }


def metric_trend(rows, attr, days=30, now=None, timestamp_attr="recorded_at"):
    """``[{"date", "value"}]`` oldest first, for rows inside the lookback window
    that actually carry ``attr``."""
    now = now or utcnow()
    since = now - timedelta(days=days)
    points = []
    for row in rows:
        stamp = getattr(row, timestamp_attr)
        value = getattr(row, attr)
        if value is None or not _within(stamp, since, now):
            continue
        points.append((stamp, value))
    points.sort(key=lambda point: point[0])
    return [{"date": stamp.isoformat(), "value": value} for stamp, value in points]
