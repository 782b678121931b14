from flask import Blueprint, current_app

from fitclub.domain import gyms
from fitclub.extensions import db
from fitclub.schemas.gyms import gym_search_schema, nearby_schema
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.validation import parse_query

gyms_bp = Blueprint("gyms", __name__)


@gyms_bp.route("", methods=["GET"])
@auth_required
def list_gyms(current_user):
    return success_response([gym.to_dict() for gym in gyms.list_gyms(db.session)])


@gyms_bp.route("/search", methods=["GET"])
@auth_required
def search(current_user):
    args = parse_query(gym_search_schema)
    results = gyms.search_gyms(db.session, args["q"], args["city"])
    return success_response([gym.to_dict() for gym in results])


@gyms_bp.route("/nearby", methods=["GET"])
@auth_required
def nearby(current_user):
    args = parse_query(nearby_schema)
    radius = args["radius"] or current_app.config["NEARBY_DEFAULT_RADIUS_KM"]
    results = gyms.nearby_gyms(db.session, args["lat"], args["lng"], radius)
    return success_response([dict(gym.to_dict(), distance=distance) for gym, distance in results])


@gyms_bp.route("/<gym_id>", methods=["GET"])
@auth_required
def get_gym(current_user, gym_id):
    return success_response(gyms.get_gym(db.session, gym_id).to_dict())
