"""Workout templates and the exercise catalogue."""

from sqlalchemy import or_

from fitclub.errors import NotFoundError
from fitclub.models import Exercise, Workout


def get_visible_workout(session, user_id, workout_id):
    """A workout the caller owns, or a public one."""
    workout = (
        session.query(Workout)
        .filter(Workout.id == workout_id, or_(Workout.user_id == user_id, Workout.is_public.is_(True)))
        .first()
    )
    if workout is None:
        raise NotFoundError("Workout")
    return workout


def list_workouts(session, user_id, workout_type=None, templates_only=False):
    query = session.query(Workout).filter(Workout.user_id == user_id)
    if workout_type:
        query = query.filter(Workout.workout_type == workout_type)
    if templates_only:
        query = query.filter(Workout.is_template.is_(True))
    return query.order_by(Workout.created_at.desc()).all()


def list_public_workouts(session, limit=20, offset=0):
    return (
        session.query(Workout)
        .filter(Workout.is_public.is_(True))
        .order_by(Workout.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def create_workout(session, user_id, data):
    workout = Workout(user_id=user_id, **data)
    session.add(workout)
    session.commit()
    return workout


def list_exercises(session, exercise_type=None, muscle_group=None, search=None):
    query = session.query(Exercise)
    if exercise_type:
        query = query.filter(Exercise.exercise_type == exercise_type)
    if search:
        query = query.filter(Exercise.name.ilike(f"%{search}%"))
    exercises = query.order_by(Exercise.name.asc()).all()
    # JSON containment differs between backends, so filter muscle groups here
    if muscle_group:
        exercises = [e for e in exercises if muscle_group in (e.muscle_groups or [])]
    return exercises
