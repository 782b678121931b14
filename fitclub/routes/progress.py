from flask import Blueprint, current_app

from fitclub.domain import profiles, progress
from fitclub.extensions import db
from fitclub.schemas.progress import (
    body_metric_schema,
    body_metric_update_schema,
    goal_filter_schema,
    goal_progress_schema,
    goal_schema,
    goal_update_schema,
    trend_schema,
)
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.validation import pagination_args, parse_body, parse_query

goals_bp = Blueprint("goals", __name__)
metrics_bp = Blueprint("metrics", __name__)


@goals_bp.route("", methods=["GET"])
@auth_required
def list_goals(current_user):
    args = parse_query(goal_filter_schema)
    return success_response([goal.to_dict() for goal in progress.list_goals(db.session, current_user.id, **args)])


@goals_bp.route("", methods=["POST"])
@auth_required
def create_goal(current_user):
    data = parse_body(goal_schema)
    profiles.ensure_profile(db.session, current_user)
    return success_response(progress.create_goal(db.session, current_user.id, data).to_dict(), 201)


@goals_bp.route("/<goal_id>", methods=["GET"])
@auth_required
def get_goal(current_user, goal_id):
    return success_response(progress.get_goal(db.session, current_user.id, goal_id).to_dict())


@goals_bp.route("/<goal_id>", methods=["PATCH"])
@auth_required
def update_goal(current_user, goal_id):
    data = parse_body(goal_update_schema)
    return success_response(progress.update_goal(db.session, current_user.id, goal_id, data).to_dict())


@goals_bp.route("/<goal_id>/progress", methods=["PATCH"])
@auth_required
def update_goal_progress(current_user, goal_id):
    data = parse_body(goal_progress_schema)
    goal = progress.update_goal_progress(db.session, current_user.id, goal_id, data["current_value"])
    return success_response(goal.to_dict())


@goals_bp.route("/<goal_id>", methods=["DELETE"])
@auth_required
def delete_goal(current_user, goal_id):
    progress.delete_goal(db.session, current_user.id, goal_id)
    return success_response({"id": goal_id, "deleted": True})


@metrics_bp.route("", methods=["GET"])
@auth_required
def list_metrics(current_user):
    limit, offset = pagination_args(current_app.config)
    rows, total = progress.list_metrics(db.session, current_user.id, limit, offset)
    return success_response(
        [metric.to_dict() for metric in rows],
        meta={"total": total, "limit": limit, "offset": offset},
    )


@metrics_bp.route("", methods=["POST"])
@auth_required
def create_metric(current_user):
    data = parse_body(body_metric_schema)
    profiles.ensure_profile(db.session, current_user)
    return success_response(progress.create_metric(db.session, current_user.id, data).to_dict(), 201)


@metrics_bp.route("/trends", methods=["GET"])
@auth_required
def trends(current_user):
    args = parse_query(trend_schema)
    return success_response(progress.metric_trends(db.session, current_user.id, args["days"]))


@metrics_bp.route("/<metric_id>", methods=["GET"])
@auth_required
def get_metric(current_user, metric_id):
    return success_response(progress.get_metric(db.session, current_user.id, metric_id).to_dict())


@metrics_bp.route("/<metric_id>", methods=["PATCH"])
@auth_required
def update_metric(current_user, metric_id):
    data = parse_body(body_metric_update_schema)
    return success_response(progress.update_metric(db.session, current_user.id, metric_id, data).to_dict())


@metrics_bp.route("/<metric_id>", methods=["DELETE"])
@auth_required
def delete_metric(current_user, metric_id):
    progress.delete_metric(db.session, current_user.id, metric_id)
    return success_response({"id": metric_id, "deleted": True})
