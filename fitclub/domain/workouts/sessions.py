"""Workout sessions: start, log sets, complete or cancel.

A session's totals and duration are written once, when it is completed.
Logged sets are never edited afterwards.
"""

import logging

from fitclub.errors import ConflictError, NotFoundError
from fitclub.models import Exercise, WorkoutLog, WorkoutSession
from fitclub.models.workout_session import CANCELLED, COMPLETED, IN_PROGRESS
from fitclub.utils.timeutils import end_of_day, minutes_between, start_of_day, utcnow

from ..guard import ActiveInstanceGuard
from .templates import get_visible_workout

logger = logging.getLogger(__name__)

QUICK_WORKOUT_NAME = "Quick Workout"

session_guard = ActiveInstanceGuard(
    WorkoutSession,
    open_clause=lambda: WorkoutSession.status == IN_PROGRESS,
    label="Active session",
    conflict_message="You already have an active workout session",
)


def session_totals(logs):
    """Return ``(total_sets, total_reps, total_volume)`` for logged sets.

    Missing or zero reps count as 0 towards reps but as 1 towards volume, so a
    weighted set logged by duration still contributes its weight.
    """
    total_sets = len(logs)
    total_reps = sum(log.reps or 0 for log in logs)
    total_volume = sum((log.weight or 0) * (log.reps or 1) for log in logs)
    return total_sets, total_reps, float(total_volume)


def start_session(session, user_id, workout_id=None, notes=None, now=None):
    now = now or utcnow()

    # an open session wins over a bad template id
    if session_guard.find_open(session, user_id) is not None:
        raise ConflictError(session_guard.conflict_message)

    name = QUICK_WORKOUT_NAME
    if workout_id:
        name = get_visible_workout(session, user_id, workout_id).name

    workout_session = session_guard.open(
        session,
        user_id,
        workout_id=workout_id,
        name=name,
        notes=notes,
        status=IN_PROGRESS,
        started_at=now,
    )
    session.commit()
    logger.info(f"Workout session {workout_session.id} started for user {user_id}")
    return workout_session


def active_session(session, user_id):
    return session_guard.find_open(session, user_id)


def log_set(session, user_id, session_id, exercise_id, set_number, reps=None, weight=None,
            duration_seconds=None, notes=None, now=None):
    now = now or utcnow()
    workout_session = session_guard.load_open(session, user_id, session_id)
    if session.get(Exercise, exercise_id) is None:
        raise NotFoundError("Exercise")

    log = WorkoutLog(
        session_id=workout_session.id,
        exercise_id=exercise_id,
        set_number=set_number,
        reps=reps,
        weight=weight,
        duration_seconds=duration_seconds,
        notes=notes,
        completed_at=now,
    )
    session.add(log)
    session.commit()
    return log


def complete_session(session, user_id, session_id, notes=None, now=None):
    now = now or utcnow()
    workout_session = session_guard.load_open(session, user_id, session_id)

    logs = session.query(WorkoutLog).filter(WorkoutLog.session_id == workout_session.id).all()
    total_sets, total_reps, total_volume = session_totals(logs)
    values = {
        "status": COMPLETED,
        "completed_at": now,
        "duration_minutes": minutes_between(workout_session.started_at, now),
        "total_sets": total_sets,
        "total_reps": total_reps,
        "total_volume": total_volume,
    }
    if notes is not None:
        values["notes"] = notes

    workout_session = session_guard.close(session, workout_session, values)
    session.commit()
    logger.info(
        f"Workout session {workout_session.id} completed for user {user_id}: "
        f"{total_sets} sets, {total_reps} reps, volume {total_volume}"
    )
    return workout_session


def cancel_session(session, user_id, session_id, now=None):
    now = now or utcnow()
    workout_session = session_guard.load_open(session, user_id, session_id)
    workout_session = session_guard.close(
        session,
        workout_session,
        {"status": CANCELLED, "completed_at": now},
    )
    session.commit()
    logger.info(f"Workout session {workout_session.id} cancelled by user {user_id}")
    return workout_session


def completed_sessions(session, user_id):
    return (
        session.query(WorkoutSession)
        .filter(WorkoutSession.user_id == user_id, WorkoutSession.status == COMPLETED)
        .all()
    )


def workout_history(session, user_id, limit=20, offset=0, start_date=None, end_date=None):
    """Completed sessions, newest first, with the total before paging."""
    query = session.query(WorkoutSession).filter(
        WorkoutSession.user_id == user_id,
        WorkoutSession.status == COMPLETED,
    )
    if start_date:
        query = query.filter(WorkoutSession.completed_at >= start_of_day(start_date))
    if end_date:
        query = query.filter(WorkoutSession.completed_at <= end_of_day(end_date))

    total = query.count()
    rows = query.order_by(WorkoutSession.completed_at.desc()).offset(offset).limit(limit).all()
    return rows, total
