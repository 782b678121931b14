from marshmallow import fields, validate

from fitclub.extensions import ma
from fitclub.models.booking import BOOKING_STATUSES


class ClassFilterSchema(ma.Schema):
    gym_id = fields.String(data_key="gymId", load_default=None)
    category = fields.String(load_default=None)


class ScheduleFilterSchema(ma.Schema):
    gym_id = fields.String(data_key="gymId", load_default=None)
    class_id = fields.String(data_key="classId", load_default=None)
    start_date = fields.Date(data_key="startDate", load_default=None)
    end_date = fields.Date(data_key="endDate", load_default=None)


class BookingFilterSchema(ma.Schema):
    status = fields.String(load_default=None, validate=validate.OneOf(BOOKING_STATUSES))
    upcoming = fields.Boolean(load_default=False)


class BookingCreateSchema(ma.Schema):
    class_schedule_id = fields.String(data_key="classScheduleId", required=True, validate=validate.Length(min=1))


class_filter_schema = ClassFilterSchema()
schedule_filter_schema = ScheduleFilterSchema()
booking_filter_schema = BookingFilterSchema()
booking_create_schema = BookingCreateSchema()
