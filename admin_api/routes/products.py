"""
admin_api/routes/products.py
----------------------------
Admin endpoints for product management, mounted at /api/products.
"""

from flask import Blueprint, request

from admin_api.db.query import Pagination
from admin_api.routes import responses
from admin_api.services.product_service import ProductService


def create_blueprint(service: ProductService, guard) -> Blueprint:
    bp = Blueprint("products", __name__)
    bp.before_request(guard)

    @bp.get("/", strict_slashes=False)
    def list_products():
        page = Pagination.from_args(request.args, default_limit=50)
        result = service.list_products(
            page,
            category=request.args.get("category"),
            active=request.args.get("active"),
            search=request.args.get("search"),
        )
        return responses.page(result)

    @bp.get("/categories")
    def list_categories():
        return responses.success(service.get_categories())

    @bp.get("/<int:product_id>")
    def get_product(product_id: int):
        return responses.success(service.get_product(product_id))

    @bp.post("/", strict_slashes=False)
    def create_product():
        return responses.success(service.create_product(responses.json_body()), 201)

    @bp.put("/<int:product_id>")
    def update_product(product_id: int):
        return responses.success(service.update_product(product_id, responses.json_body()))

    @bp.delete("/<int:product_id>")
    def delete_product(product_id: int):
        service.delete_product(product_id)
        return responses.deleted("Product")

    return bp
