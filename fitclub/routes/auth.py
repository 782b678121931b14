from flask import Blueprint

from fitclub.domain import profiles
from fitclub.extensions import db
from fitclub.schemas.profile import onboarding_schema, profile_update_schema
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.validation import parse_body

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me(current_user):
    user, _ = profiles.ensure_profile(db.session, current_user)
    return success_response({
        "user": {"id": current_user.id, "email": current_user.email},
        "profile": user.to_dict(),
    })


@auth_bp.route("/profile", methods=["GET"])
@auth_required
def get_profile(current_user):
    user, created = profiles.ensure_profile(db.session, current_user)
    return success_response(user.to_dict(), 201 if created else 200)


@auth_bp.route("/profile", methods=["PATCH"])
@auth_required
def update_profile(current_user):
    data = parse_body(profile_update_schema)
    profiles.ensure_profile(db.session, current_user)
    user = profiles.update_profile(db.session, current_user.id, data)
    return success_response(user.to_dict())


@auth_bp.route("/onboarding", methods=["POST"])
@auth_required
def onboarding(current_user):
    data = parse_body(onboarding_schema)
    profiles.ensure_profile(db.session, current_user)
    user = profiles.complete_onboarding(db.session, current_user.id, data)
    return success_response(user.to_dict())
