"""
admin_api/routes/competitors.py
-------------------------------
Admin endpoints for competitor intelligence, mounted at /api/competitors.
"""

from flask import Blueprint, request

from admin_api.db.query import Pagination
from admin_api.routes import responses
from admin_api.services.competitor_service import CompetitorService


def create_blueprint(service: CompetitorService, guard) -> Blueprint:
    bp = Blueprint("competitors", __name__)
    bp.before_request(guard)

    @bp.get("/", strict_slashes=False)
    def list_competitors():
        page = Pagination.from_args(request.args, default_limit=20)
        result = service.list_competitors(page, threat_level=request.args.get("threat_level"))
        return responses.page(result)

    @bp.get("/summary")
    def competitor_summary():
        return responses.success(service.get_summary())

    @bp.get("/<int:competitor_id>")
    def get_competitor(competitor_id: int):
        return responses.success(service.get_competitor(competitor_id))

    @bp.post("/", strict_slashes=False)
    def create_competitor():
        return responses.success(service.create_competitor(responses.json_body()), 201)

    @bp.put("/<int:competitor_id>")
    def update_competitor(competitor_id: int):
        return responses.success(service.update_competitor(competitor_id, responses.json_body()))

    @bp.delete("/<int:competitor_id>")
    def delete_competitor(competitor_id: int):
        service.delete_competitor(competitor_id)
        return responses.deleted("Competitor")

    return bp
