"""
admin_api/routes/orders.py
--------------------------
Admin endpoints for order management, mounted at /api/orders.
"""

from flask import Blueprint, request

from admin_api.db.query import Pagination
from admin_api.routes import responses
from admin_api.services.order_service import OrderService


def create_blueprint(service: OrderService, guard) -> Blueprint:
    bp = Blueprint("orders", __name__)
    bp.before_request(guard)

    @bp.get("/", strict_slashes=False)
    def list_orders():
        page = Pagination.from_args(request.args, default_limit=50)
        result = service.list_orders(
            page,
            status=request.args.get("status"),
            payment_status=request.args.get("payment_status"),
            search=request.args.get("search"),
        )
        return responses.page(result)

    @bp.get("/stats")
    def order_stats():
        return responses.success(service.get_stats())

    @bp.get("/<int:order_id>")
    def get_order(order_id: int):
        return responses.success(service.get_order(order_id))

    @bp.post("/", strict_slashes=False)
    def create_order():
        return responses.success(service.create_order(responses.json_body()), 201)

    @bp.put("/<int:order_id>")
    def update_order(order_id: int):
        return responses.success(service.update_order(order_id, responses.json_body()))

    @bp.delete("/<int:order_id>")
    def delete_order(order_id: int):
        service.delete_order(order_id)
        return responses.deleted("Order")

    return bp
