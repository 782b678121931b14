from flask import request
from marshmallow import EXCLUDE
from marshmallow import ValidationError as SchemaValidationError

from fitclub.errors import ValidationError
from fitclub.schemas.common import pagination_schema


def parse_body(schema, allow_empty=False):
    """Load the JSON request body through a marshmallow ``schema``.

    With ``allow_empty`` a request with no body at all loads as ``{}``.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        if not (allow_empty and not request.get_data()):
            raise ValidationError("Invalid JSON body")
        payload = {}
    try:
        return schema.load(payload)
    except SchemaValidationError as err:
        raise ValidationError("Validation failed", {"fieldErrors": err.messages}) from err


def parse_query(schema):
    """Load query-string parameters through a marshmallow ``schema``.

    Unknown keys are dropped, so paging parameters can ride along.
    """
    try:
        return schema.load(request.args.to_dict(), unknown=EXCLUDE)
    except SchemaValidationError as err:
        raise ValidationError("Invalid query parameters", {"fieldErrors": err.messages}) from err


def pagination_args(app_config):
    """``(limit, offset)`` from the query string; limit is capped at MAX_PAGE_SIZE."""
    args = parse_query(pagination_schema)
    limit = args["limit"] or app_config["DEFAULT_PAGE_SIZE"]
    return min(limit, app_config["MAX_PAGE_SIZE"]), args["offset"]
