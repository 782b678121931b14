from flask import Blueprint, current_app

from fitclub.domain import profiles, stats
from fitclub.domain.workouts import sessions, templates
from fitclub.extensions import db
from fitclub.schemas.workouts import (
    exercise_filter_schema,
    history_filter_schema,
    log_set_schema,
    session_complete_schema,
    session_start_schema,
    workout_create_schema,
    workout_filter_schema,
)
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.validation import pagination_args, parse_body, parse_query

workouts_bp = Blueprint("workouts", __name__)


# templates

@workouts_bp.route("", methods=["GET"])
@auth_required
def list_workouts(current_user):
    args = parse_query(workout_filter_schema)
    rows = templates.list_workouts(db.session, current_user.id, **args)
    return success_response([workout.to_dict() for workout in rows])


@workouts_bp.route("", methods=["POST"])
@auth_required
def create_workout(current_user):
    data = parse_body(workout_create_schema)
    profiles.ensure_profile(db.session, current_user)
    workout = templates.create_workout(db.session, current_user.id, data)
    return success_response(workout.to_dict(), 201)


@workouts_bp.route("/public", methods=["GET"])
@auth_required
def public_workouts(current_user):
    limit, offset = pagination_args(current_app.config)
    rows = templates.list_public_workouts(db.session, limit, offset)
    return success_response([workout.to_dict() for workout in rows])


@workouts_bp.route("/exercises", methods=["GET"])
@auth_required
def list_exercises(current_user):
    args = parse_query(exercise_filter_schema)
    rows = templates.list_exercises(db.session, **args)
    return success_response([exercise.to_dict() for exercise in rows])


# sessions

@workouts_bp.route("/sessions", methods=["POST"])
@auth_required
def start_session(current_user):
    data = parse_body(session_start_schema, allow_empty=True)
    profiles.ensure_profile(db.session, current_user)
    workout_session = sessions.start_session(db.session, current_user.id, data["workout_id"], data["notes"])
    return success_response(workout_session.to_dict(include_workout=True), 201)


@workouts_bp.route("/sessions/active", methods=["GET"])
@auth_required
def active_session(current_user):
    workout_session = sessions.active_session(db.session, current_user.id)
    if workout_session is None:
        return success_response(None)
    return success_response(workout_session.to_dict(include_workout=True, include_logs=True))


@workouts_bp.route("/sessions/<session_id>/log", methods=["POST"])
@auth_required
def log_set(current_user, session_id):
    data = parse_body(log_set_schema)
    log = sessions.log_set(db.session, current_user.id, session_id, **data)
    return success_response(log.to_dict(), 201)


@workouts_bp.route("/sessions/<session_id>/complete", methods=["POST"])
@auth_required
def complete_session(current_user, session_id):
    data = parse_body(session_complete_schema, allow_empty=True)
    workout_session = sessions.complete_session(db.session, current_user.id, session_id, data["notes"])
    return success_response(workout_session.to_dict(include_logs=True))


@workouts_bp.route("/sessions/<session_id>/cancel", methods=["POST"])
@auth_required
def cancel_session(current_user, session_id):
    workout_session = sessions.cancel_session(db.session, current_user.id, session_id)
    return success_response(workout_session.to_dict())


@workouts_bp.route("/history", methods=["GET"])
@auth_required
def history(current_user):
    args = parse_query(history_filter_schema)
    limit, offset = pagination_args(current_app.config)
    rows, total = sessions.workout_history(db.session, current_user.id, limit, offset, **args)
    return success_response(
        [row.to_dict(include_workout=True) for row in rows],
        meta={"total": total, "limit": limit, "offset": offset},
    )


@workouts_bp.route("/stats", methods=["GET"])
@auth_required
def workout_stats(current_user):
    rows = sessions.completed_sessions(db.session, current_user.id)
    return success_response(stats.workout_stats(rows))


@workouts_bp.route("/<workout_id>", methods=["GET"])
@auth_required
def get_workout(current_user, workout_id):
    return success_response(templates.get_visible_workout(db.session, current_user.id, workout_id).to_dict())
