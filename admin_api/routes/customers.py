"""
admin_api/routes/customers.py
-----------------------------
Admin endpoints for customer management, mounted at /api/customers.
"""

from flask import Blueprint, request

from admin_api.db.query import Pagination
from admin_api.routes import responses
from admin_api.services.customer_service import CustomerService


def create_blueprint(service: CustomerService, guard) -> Blueprint:
    bp = Blueprint("customers", __name__)
    bp.before_request(guard)

    @bp.get("/", strict_slashes=False)
    def list_customers():
        page = Pagination.from_args(request.args, default_limit=50)
        result = service.list_customers(
            page,
            search=request.args.get("search"),
            segment=request.args.get("segment"),
        )
        return responses.page(result)

    @bp.get("/<int:customer_id>")
    def get_customer(customer_id: int):
        return responses.success(service.get_customer(customer_id))

    @bp.post("/", strict_slashes=False)
    def create_customer():
        return responses.success(service.create_customer(responses.json_body()), 201)

    @bp.put("/<int:customer_id>")
    def update_customer(customer_id: int):
        return responses.success(service.update_customer(customer_id, responses.json_body()))

    @bp.delete("/<int:customer_id>")
    def delete_customer(customer_id: int):
        service.delete_customer(customer_id)
        return responses.deleted("Customer")

    return bp
