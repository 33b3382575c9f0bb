"""
admin_api/services/order_service.py
-----------------------------------
Business logic for orders: payload validation, totals and the
creation workflow.
"""

from typing import Optional

from admin_api.db.query import Page, Pagination
from admin_api.errors import ApiError, DuplicateError, NotFoundError, ValidationError
from admin_api.models.order import LineItem, OrderDraft, generate_order_number
from admin_api.repositories.order_repo import UPDATABLE_FIELDS, OrderRepository
from admin_api.services.validation import as_decimal, as_int, as_text, pick
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

MAX_ORDER_NUMBER_ATTEMPTS = 3


class OrderService:
    """
    Handles all business logic related to orders.

    Workflow for creation:
        1. Validate the line items.
        2. Compute subtotal, tax and total.
        3. Persist order, items and customer counters in one transaction.
        4. On an order-number collision, retry with a fresh number.
    """

    def __init__(self, repo: OrderRepository):
        self.repo = repo

    def list_orders(self, page: Pagination, status: Optional[str] = None,
                    payment_status: Optional[str] = None, search: Optional[str] = None) -> Page:
        return self.repo.list_page(page, status=status, payment_status=payment_status, search=search)

    def get_stats(self) -> dict:
        return self.repo.get_stats()

    def get_order(self, order_id: int) -> dict:
        """Fetch an order together with its items."""
        order = self.repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order")
        order["items"] = self.repo.get_items(order_id)
        return order

    def create_order(self, data: dict) -> dict:
        """
        Validate a create payload and persist the order.

        Raises:
            ValidationError: If items are missing or malformed.
            ApiError: If no unique order number could be allocated.
        """
        draft = self.build_draft(data)
        for attempt in range(1, MAX_ORDER_NUMBER_ATTEMPTS + 1):
            try:
                return self.repo.create(draft)
            except DuplicateError:
                logger.warning(f"Order number collision (attempt {attempt}/{MAX_ORDER_NUMBER_ATTEMPTS})")
                draft.order_number = generate_order_number()
        raise ApiError("Could not allocate a unique order number", 500)

    def update_order(self, order_id: int, data: dict) -> dict:
        changes = {name: as_text(value, name) for name, value in pick(data, UPDATABLE_FIELDS).items()}
        order = self.repo.update(order_id, changes)
        if order is None:
            raise NotFoundError("Order")
        return order

    def delete_order(self, order_id: int) -> None:
        if not self.repo.delete(order_id):
            raise NotFoundError("Order")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def build_draft(data: dict) -> OrderDraft:
        items = data.get("items")
        if not items or not isinstance(items, list):
            raise ValidationError("Order must have at least one item")

        line_items = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValidationError(f"Item {index} must be an object")
            quantity = as_int(item.get("quantity"), f"items[{index}].quantity")
            unit_price = as_decimal(item.get("unit_price"), f"items[{index}].unit_price")
            if quantity is None or unit_price is None:
                raise ValidationError(f"Item {index} needs a quantity and a unit_price")
            line_items.append(LineItem(
                quantity=quantity,
                unit_price=unit_price,
                product_id=as_int(item.get("product_id"), f"items[{index}].product_id"),
                product_name=item.get("product_name"),
            ))

        return OrderDraft(
            items=line_items,
            customer_id=as_int(data.get("customer_id"), "customer_id"),
            notes=data.get("notes"),
            shipping_address=data.get("shipping_address"),
            payment_method=data.get("payment_method"),
        )
