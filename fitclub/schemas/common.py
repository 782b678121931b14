from marshmallow import fields, validate

from fitclub.extensions import ma


class PaginationSchema(ma.Schema):
    limit = fields.Integer(load_default=None, validate=validate.Range(min=1))
    offset = fields.Integer(load_default=0, validate=validate.Range(min=0))


pagination_schema = PaginationSchema()
