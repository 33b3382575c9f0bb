"""
admin_api/models/order.py
-------------------------
Domain model for orders and their line items.
"""

import secrets
import time
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

TAX_RATE = Decimal("0.08")
ORDER_NUMBER_PREFIX = "ORD"
_CENTS = Decimal("0.01")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36 (lowercase digits)."""
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_order_number(now_ms: Optional[int] = None) -> str:
    """
    Build an order number such as ``ORD-LXK3Q2ZA-7F2K``.

    The middle part is the creation time in milliseconds and the suffix is
    four random base-36 characters; both are uppercased.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{ORDER_NUMBER_PREFIX}-{to_base36(now_ms)}-{suffix}".upper()


@dataclass
class LineItem:
    """
    One product line of an order.

    Attributes:
        quantity: Number of units.
        unit_price: Price per unit at the time of ordering.
        product_id: Catalogue id, if the line refers to a known product.
        product_name: Snapshot of the product name.
    """
    quantity: int
    unit_price: Decimal
    product_id: Optional[int] = None
    product_name: Optional[str] = None

    @property
    def total_price(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass
class OrderDraft:
    """An order that has been validated but not yet persisted."""
    items: list[LineItem]
    customer_id: Optional[int] = None
    notes: Optional[str] = None
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None
    order_number: str = field(default_factory=generate_order_number)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0"))

    @property
    def tax(self) -> Decimal:
        return (self.subtotal * TAX_RATE).quantize(_CENTS, rounding=ROUND_HALF_UP)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax
