from flask import jsonify


def success_response(data, status=200, meta=None):
    """Wrap ``data`` in the ``{"success": true, "data": ...}`` envelope."""
    body = {"success": True, "data": data}
    if meta:
        body["meta"] = meta
    return jsonify(body), status
