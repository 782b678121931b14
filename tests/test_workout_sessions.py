from datetime import timedelta
from types import SimpleNamespace

import pytest

from fitclub.domain.workouts import sessions, templates
from fitclub.errors import ConflictError, NotFoundError
from fitclub.models import WorkoutSession
from fitclub.utils.timeutils import utcnow


@pytest.fixture
def user(make_user):
    return make_user("lifter")


def test_totals_treat_missing_reps_as_one_for_volume():
    logs = [
        SimpleNamespace(reps=10, weight=50.0),
        SimpleNamespace(reps=8, weight=None),
        SimpleNamespace(reps=None, weight=20.0),
    ]

    assert sessions.session_totals(logs) == (3, 18, 520.0)


def test_totals_count_zero_reps_as_one_for_volume():
    assert sessions.session_totals([SimpleNamespace(reps=0, weight=50.0)]) == (1, 0, 50.0)


def test_complete_session_computes_totals_once(session, user, make_exercise):
    bench = make_exercise()
    start = utcnow() - timedelta(hours=1)
    workout_session = sessions.start_session(session, user.id, now=start)
    assert workout_session.name == "Quick Workout"

    sessions.log_set(session, user.id, workout_session.id, bench.id, 1, reps=10, weight=50)
    sessions.log_set(session, user.id, workout_session.id, bench.id, 2, reps=8, weight=55)
    sessions.log_set(session, user.id, workout_session.id, bench.id, 3, weight=20, duration_seconds=45)

    done = sessions.complete_session(session, user.id, workout_session.id, now=start + timedelta(minutes=42))

    assert done.status == "completed"
    assert done.duration_minutes == 42
    assert done.total_sets == 3
    assert done.total_reps == 18
    assert done.total_volume == 10 * 50 + 8 * 55 + 20


def test_second_session_conflicts(session, user):
    sessions.start_session(session, user.id)

    with pytest.raises(ConflictError) as exc:
        sessions.start_session(session, user.id)

    assert exc.value.message == "You already have an active workout session"


def test_concurrent_start_is_stopped_by_unique_index(session, user, monkeypatch):
    sessions.start_session(session, user.id)
    monkeypatch.setattr(sessions.session_guard, "find_open", lambda *args: None)

    with pytest.raises(ConflictError):
        sessions.start_session(session, user.id)

    assert session.query(WorkoutSession).filter_by(status="in_progress").count() == 1


def test_start_from_template_uses_its_name(session, user, make_user):
    workout = templates.create_workout(session, user.id, {
        "name": "Leg Day", "estimated_duration_minutes": 45, "difficulty": "intermediate",
    })

    assert sessions.start_session(session, user.id, workout.id).name == "Leg Day"

    stranger = make_user("stranger")
    with pytest.raises(NotFoundError, match="Workout not found"):
        sessions.start_session(session, stranger.id, workout.id)


def test_logging_into_closed_session_is_not_found(session, user, make_exercise):
    bench = make_exercise()
    workout_session = sessions.start_session(session, user.id)
    sessions.cancel_session(session, user.id, workout_session.id)

    with pytest.raises(NotFoundError, match="Active session not found"):
        sessions.log_set(session, user.id, workout_session.id, bench.id, 1, reps=5)


def test_cancel_stamps_completion_without_totals(session, user):
    workout_session = sessions.start_session(session, user.id)

    cancelled = sessions.cancel_session(session, user.id, workout_session.id)

    assert cancelled.status == "cancelled"
    assert cancelled.completed_at is not None
    assert cancelled.total_sets is None
    assert sessions.active_session(session, user.id) is None


def test_completed_session_cannot_be_completed_again(session, user):
    workout_session = sessions.start_session(session, user.id)
    sessions.complete_session(session, user.id, workout_session.id)

    with pytest.raises(NotFoundError):
        sessions.complete_session(session, user.id, workout_session.id)


def test_history_only_lists_completed_sessions(session, user):
    base = utcnow() - timedelta(days=2)
    for offset in range(2):
        started = sessions.start_session(session, user.id, now=base + timedelta(days=offset))
        sessions.complete_session(session, user.id, started.id, now=base + timedelta(days=offset, minutes=30))
    dropped = sessions.start_session(session, user.id)
    sessions.cancel_session(session, user.id, dropped.id)

    rows, total = sessions.workout_history(session, user.id)

    assert total == 2
    assert rows[0].completed_at > rows[1].completed_at
