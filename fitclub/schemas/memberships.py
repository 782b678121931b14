from marshmallow import fields, validate

from fitclub.extensions import ma
from fitclub.models.membership import PLAN_TYPES


class CheckInSchema(ma.Schema):
    gym_id = fields.String(data_key="gymId", required=True, validate=validate.Length(min=1))


class CheckOutSchema(ma.Schema):
    check_in_id = fields.String(data_key="checkInId", load_default=None)


class UpgradeSchema(ma.Schema):
    new_plan_type = fields.String(
        data_key="newPlanType",
        required=True,
        validate=validate.OneOf(PLAN_TYPES, error="Plan type must be basic, premium, or vip"),
    )


check_in_schema = CheckInSchema()
check_out_schema = CheckOutSchema()
upgrade_schema = UpgradeSchema()
