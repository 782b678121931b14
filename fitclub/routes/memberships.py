from flask import Blueprint, current_app

from fitclub.domain import checkins, memberships, profiles, stats
from fitclub.extensions import db
from fitclub.schemas.memberships import check_in_schema, check_out_schema, upgrade_schema
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.timeutils import isoformat
from fitclub.utils.validation import pagination_args, parse_body

memberships_bp = Blueprint("memberships", __name__)


@memberships_bp.route("", methods=["GET"])
@auth_required
def list_memberships(current_user):
    rows = memberships.list_memberships(db.session, current_user.id)
    return success_response([m.to_dict(include_gym=True) for m in rows])


@memberships_bp.route("/active", methods=["GET"])
@auth_required
def active_membership(current_user):
    membership = memberships.get_active_membership(db.session, current_user.id)
    return success_response(membership.to_dict(include_gym=True) if membership else None)


@memberships_bp.route("/check-in", methods=["POST"])
@auth_required
def check_in(current_user):
    data = parse_body(check_in_schema)
    profiles.ensure_profile(db.session, current_user)
    visit = checkins.check_in(db.session, current_user.id, data["gym_id"])
    return success_response(visit.to_dict(include_gym=True), 201)


@memberships_bp.route("/check-out", methods=["POST"])
@auth_required
def check_out(current_user):
    data = parse_body(check_out_schema, allow_empty=True)
    visit = checkins.check_out(db.session, current_user.id, data["check_in_id"])
    return success_response(visit.to_dict(include_gym=True))


@memberships_bp.route("/current-check-in", methods=["GET"])
@auth_required
def current_check_in(current_user):
    visit = checkins.current_check_in(db.session, current_user.id)
    return success_response(visit.to_dict(include_gym=True) if visit else None)


@memberships_bp.route("/check-in-history", methods=["GET"])
@auth_required
def check_in_history(current_user):
    limit, offset = pagination_args(current_app.config)
    rows, total = checkins.check_in_history(db.session, current_user.id, limit, offset)
    return success_response(
        [visit.to_dict(include_gym=True) for visit in rows],
        meta={"total": total, "limit": limit, "offset": offset},
    )


@memberships_bp.route("/check-in-stats", methods=["GET"])
@auth_required
def check_in_stats(current_user):
    rows = checkins.closed_check_ins(db.session, current_user.id)
    return success_response(stats.checkin_stats(rows))


@memberships_bp.route("/upgrade", methods=["POST"])
@auth_required
def upgrade(current_user):
    data = parse_body(upgrade_schema)
    membership, proration = memberships.upgrade_membership(
        db.session,
        current_user.id,
        data["new_plan_type"],
        current_app.config["MEMBERSHIP_PLAN_PRICES"],
        current_app.config["BILLING_CYCLE_DAYS"],
    )
    return success_response({
        "membership": membership.to_dict(include_gym=True),
        "proration": dict(proration.to_dict(), nextBillingDate=isoformat(membership.end_date)),
    })
