"""
admin_api/services/product_service.py
-------------------------------------
Business logic for the product catalogue.
"""

from typing import Optional

from admin_api.db.query import Page, Pagination
from admin_api.errors import NotFoundError, ValidationError
from admin_api.repositories.product_repo import FIELDS, ProductRepository
from admin_api.services.validation import as_bool, as_decimal, as_int, pick


def _coerce(data: dict) -> dict:
    values = pick(data, FIELDS)
    values["price"] = as_decimal(values["price"], "price")
    values["inventory_count"] = as_int(values["inventory_count"], "inventory_count")
    values["active"] = as_bool(values["active"], "active")
    return values


class ProductService:
    """Validates product payloads and delegates to the repository."""

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, page: Pagination, category: Optional[str] = None,
                      active: Optional[str] = None, search: Optional[str] = None) -> Page:
        return self.repo.list_page(page, category=category, active=active, search=search)

    def get_categories(self) -> list[str]:
        return self.repo.get_categories()

    def get_product(self, product_id: int) -> dict:
        product = self.repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product")
        return product

    def create_product(self, data: dict) -> dict:
        """
        Create a product. Name and price are required; a price of 0 is valid.
        """
        if not data.get("name") or data.get("price") is None:
            raise ValidationError("Name and price are required")
        values = _coerce(data)
        values["inventory_count"] = values["inventory_count"] or 0
        values["active"] = values["active"] is not False
        return self.repo.add(values)

    def update_product(self, product_id: int, data: dict) -> dict:
        product = self.repo.update(product_id, _coerce(data))
        if product is None:
            raise NotFoundError("Product")
        return product

    def delete_product(self, product_id: int) -> None:
        if not self.repo.delete(product_id):
            raise NotFoundError("Product")
