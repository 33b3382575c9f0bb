"""
admin_api/routes/responses.py
-----------------------------
The response envelope shared by every route:
``{"success": true, "data": ...}`` or ``{"success": false, "error": ...}``.
"""

from datetime import date, datetime
from decimal import Decimal

from flask import jsonify, request
from flask.json.provider import DefaultJSONProvider

from admin_api.db.query import Page
from admin_api.errors import ValidationError


class ApiJSONProvider(DefaultJSONProvider):
    """Numbers stay numbers and timestamps become ISO-8601 strings."""

    @staticmethod
    def default(o):
        if isinstance(o, Decimal):
            return float(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def success(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def page(result: Page):
    return jsonify({
        "success": True,
        "data": result.rows,
        "total": result.total,
        "limit": result.limit,
        "offset": result.offset,
    }), 200


def deleted(entity: str):
    return jsonify({"success": True, "message": f"{entity} deleted"}), 200


def failure(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def json_body() -> dict:
    """The request's JSON object, or an empty dict when there is no body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
