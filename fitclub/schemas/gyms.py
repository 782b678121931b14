from marshmallow import fields, validate

from fitclub.extensions import ma


class GymSearchSchema(ma.Schema):
    q = fields.String(load_default=None)
    city = fields.String(load_default=None)


class NearbySchema(ma.Schema):
    lat = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    lng = fields.Float(required=True, validate=validate.Range(min=-180, max=180))
    radius = fields.Float(load_default=None, validate=validate.Range(min=0, min_inclusive=False))


gym_search_schema = GymSearchSchema()
nearby_schema = NearbySchema()
