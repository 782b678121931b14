from marshmallow import fields, validate

from fitclub.extensions import ma
from fitclub.models.goal import GOAL_TYPES

GOAL_STATUSES = ("active", "completed", "abandoned")


class GoalSchema(ma.Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True)
    type = fields.String(required=True, validate=validate.OneOf(GOAL_TYPES))
    target_value = fields.Float(data_key="targetValue", required=True)
    current_value = fields.Float(data_key="currentValue", load_default=0)
    unit = fields.String(required=True, validate=validate.Length(min=1, max=20))
    start_date = fields.Date(data_key="startDate", required=True)
    target_date = fields.Date(data_key="targetDate", required=True)


class GoalUpdateSchema(ma.Schema):
    name = fields.String(validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True)
    target_value = fields.Float(data_key="targetValue")
    unit = fields.String(validate=validate.Length(min=1, max=20))
    start_date = fields.Date(data_key="startDate")
    target_date = fields.Date(data_key="targetDate")
    status = fields.String(validate=validate.OneOf(GOAL_STATUSES))


class GoalProgressSchema(ma.Schema):
    current_value = fields.Float(data_key="currentValue", required=True)


class GoalFilterSchema(ma.Schema):
    status = fields.String(load_default=None, validate=validate.OneOf(GOAL_STATUSES))


class MeasurementsSchema(ma.Schema):
    chest = fields.Float(allow_none=True)
    waist = fields.Float(allow_none=True)
    hips = fields.Float(allow_none=True)
    arms = fields.Float(allow_none=True)
    thighs = fields.Float(allow_none=True)


class BodyMetricSchema(ma.Schema):
    recorded_at = fields.DateTime(data_key="recordedAt")
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0, min_inclusive=False))
    weight_unit = fields.String(data_key="weightUnit", validate=validate.OneOf(("kg", "lb")))
    body_fat = fields.Float(data_key="bodyFat", allow_none=True, validate=validate.Range(min=0, max=100))
    muscle_mass = fields.Float(data_key="muscleMass", allow_none=True, validate=validate.Range(min=0))
    bmi = fields.Float(allow_none=True, validate=validate.Range(min=0))
    measurements = fields.Nested(MeasurementsSchema, allow_none=True)
    notes = fields.String(allow_none=True, validate=validate.Length(max=500))


class TrendSchema(ma.Schema):
    days = fields.Integer(load_default=30, validate=validate.Range(min=1, max=365))


goal_schema = GoalSchema()
goal_update_schema = GoalUpdateSchema()
goal_progress_schema = GoalProgressSchema()
goal_filter_schema = GoalFilterSchema()
body_metric_schema = BodyMetricSchema()
body_metric_update_schema = BodyMetricSchema(partial=True)
trend_schema = TrendSchema()
