"""
admin_api/services/customer_service.py
--------------------------------------
Business logic for customers.
"""

from typing import Optional

from admin_api.db.query import Page, Pagination
from admin_api.errors import NotFoundError, ValidationError
from admin_api.repositories.customer_repo import FIELDS, CustomerRepository
from admin_api.repositories.order_repo import OrderRepository
from admin_api.services.validation import as_decimal, as_int, pick

DEFAULT_SEGMENT = "new"
RECENT_ORDERS_LIMIT = 10


class CustomerService:
    """Validates customer payloads and assembles the customer detail view."""

    def __init__(self, repo: CustomerRepository, orders: OrderRepository):
        self.repo = repo
        self.orders = orders

    def list_customers(self, page: Pagination, search: Optional[str] = None,
                       segment: Optional[str] = None) -> Page:
        return self.repo.list_page(page, search=search, segment=segment)

    def get_customer(self, customer_id: int) -> dict:
        """Fetch a customer with their most recent orders."""
        customer = self.repo.get_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer")
        customer["recent_orders"] = self.orders.get_recent_for_customer(customer_id, RECENT_ORDERS_LIMIT)
        return customer

    def create_customer(self, data: dict) -> dict:
        """
        Raises:
            ValidationError: If name or email is missing.
            DuplicateError: If the email is already registered.
        """
        if not data.get("name") or not data.get("email"):
            raise ValidationError("Name and email are required")
        values = pick(data, ("name", "email", "phone", "segment", "notes"))
        values["segment"] = values["segment"] or DEFAULT_SEGMENT
        return self.repo.add(values)

    def update_customer(self, customer_id: int, data: dict) -> dict:
        values = pick(data, FIELDS)
        values["total_spent"] = as_decimal(values["total_spent"], "total_spent")
        values["order_count"] = as_int(values["order_count"], "order_count")
        customer = self.repo.update(customer_id, values)
        if customer is None:
            raise NotFoundError("Customer")
        return customer

    def delete_customer(self, customer_id: int) -> None:
        if not self.repo.delete(customer_id):
            raise NotFoundError("Customer")
