from flask import Blueprint

from fitclub.domain import profiles
from fitclub.domain.bookings import catalog, services
from fitclub.extensions import db
from fitclub.schemas.classes import (
    booking_create_schema,
    booking_filter_schema,
    class_filter_schema,
    schedule_filter_schema,
)
from fitclub.utils.decorators import auth_required
from fitclub.utils.responses import success_response
from fitclub.utils.validation import parse_body, parse_query

classes_bp = Blueprint("classes", __name__)


@classes_bp.route("", methods=["GET"])
@auth_required
def list_classes(current_user):
    args = parse_query(class_filter_schema)
    rows = catalog.list_classes(db.session, args["gym_id"], args["category"])
    return success_response([gym_class.to_dict() for gym_class in rows])


@classes_bp.route("/schedules", methods=["GET"])
@auth_required
def list_schedules(current_user):
    args = parse_query(schedule_filter_schema)
    rows = catalog.list_schedules(db.session, **args)
    return success_response([schedule.to_dict(include_class=True) for schedule in rows])


@classes_bp.route("/bookings", methods=["GET"])
@auth_required
def list_bookings(current_user):
    args = parse_query(booking_filter_schema)
    rows = services.list_bookings(db.session, current_user.id, args["status"], args["upcoming"])
    return success_response([booking.to_dict(include_schedule=True) for booking in rows])


@classes_bp.route("/bookings", methods=["POST"])
@auth_required
def create_booking(current_user):
    data = parse_body(booking_create_schema)
    profiles.ensure_profile(db.session, current_user)
    booking = services.create_booking(db.session, current_user.id, data["class_schedule_id"])
    return success_response(booking.to_dict(include_schedule=True), 201)


@classes_bp.route("/bookings/<booking_id>/cancel", methods=["POST"])
@auth_required
def cancel_booking(current_user, booking_id):
    booking, promoted = services.cancel_booking(db.session, current_user.id, booking_id)
    data = booking.to_dict(include_schedule=True)
    data["promoted_booking_id"] = promoted.id if promoted else None
    return success_response(data)
