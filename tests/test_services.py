"""Tests for service-level validation, defaults and the order workflow."""

from decimal import Decimal

import pytest

from admin_api.errors import ApiError, DuplicateError, NotFoundError, ValidationError
from admin_api.services.competitor_service import CompetitorService
from admin_api.services.order_service import OrderService
from admin_api.services.product_service import ProductService


class _CollidingOrderRepository:
    """Raises an order-number collision a fixed number of times, then succeeds."""

    def __init__(self, collisions):
        self.collisions = collisions
        self.numbers = []

    def create(self, draft):
        self.numbers.append(draft.order_number)
        if len(self.numbers) <= self.collisions:
            raise DuplicateError("Order number already exists")
        return {"id": 1, "order_number": draft.order_number, "total": draft.total}


class _RecordingRepository:
    def __init__(self):
        self.added = []
        self.updated = []

    def add(self, values):
        self.added.append(values)
        return {"id": 1, **values}

    def update(self, row_id, changes):
        self.updated.append((row_id, changes))
        return None


@pytest.mark.parametrize("payload", [{}, {"items": []}, {"items": None}, {"items": "two mugs"}])
def test_order_without_items_is_rejected(payload):
    with pytest.raises(ValidationError, match="at least one item"):
        OrderService.build_draft(payload)


@pytest.mark.parametrize("item", [{"quantity": 2}, {"unit_price": 3}, {"quantity": "x", "unit_price": 3}])
def test_order_items_need_numeric_quantity_and_price(item):
    with pytest.raises(ValidationError):
        OrderService.build_draft({"items": [item]})


def test_build_draft_computes_totals():
    draft = OrderService.build_draft({
        "customer_id": "7",
        "items": [{"quantity": 2, "unit_price": 10}, {"quantity": 1, "unit_price": "5"}],
        "notes": "gift wrap",
    })

    assert draft.customer_id == 7
    assert draft.total == Decimal("27.00")
    assert draft.notes == "gift wrap"


def test_order_number_collision_is_retried_with_fresh_number():
    repo = _CollidingOrderRepository(collisions=1)

    order = OrderService(repo).create_order({"items": [{"quantity": 1, "unit_price": 1}]})

    assert len(repo.numbers) == 2
    assert order["order_number"] == repo.numbers[-1]


def test_order_number_collisions_give_up_after_three_attempts():
    repo = _CollidingOrderRepository(collisions=5)

    with pytest.raises(ApiError) as exc:
        OrderService(repo).create_order({"items": [{"quantity": 1, "unit_price": 1}]})

    assert exc.value.status_code == 500
    assert len(repo.numbers) == 3


def test_product_requires_name_and_price_but_accepts_zero_price():
    repo = _RecordingRepository()
    service = ProductService(repo)

    with pytest.raises(ValidationError, match="Name and price are required"):
        service.create_product({"name": "Mug"})

    service.create_product({"name": "Sample", "price": 0})
    values = repo.added[0]
    assert values["price"] == Decimal("0")
    assert values["inventory_count"] == 0
    assert values["active"] is True


def test_product_update_of_missing_row_is_not_found():
    with pytest.raises(NotFoundError) as exc:
        ProductService(_RecordingRepository()).update_product(4, {"price": "12.50"})

    assert exc.value.message == "Product not found"


def test_product_price_must_be_numeric():
    with pytest.raises(ValidationError):
        ProductService(_RecordingRepository()).create_product({"name": "Mug", "price": "cheap"})


def test_competitor_defaults_are_applied_on_create():
    repo = _RecordingRepository()

    CompetitorService(repo).create_competitor({"name": "Bean Co", "top_items": [{"name": "Latte"}]})

    values = repo.added[0]
    assert values["type"] == "Direct Competitor"
    assert values["threat_level"] == "medium"
    assert values["review_count"] == 0
    assert values["top_items"] == [{"name": "Latte"}]


def test_competitor_threat_level_is_validated():
    with pytest.raises(ValidationError, match="threat_level"):
        CompetitorService(_RecordingRepository()).create_competitor({"name": "X", "threat_level": "extreme"})


def test_competitor_requires_name():
    with pytest.raises(ValidationError, match="Competitor name is required"):
        CompetitorService(_RecordingRepository()).create_competitor({"website": "https://x.test"})


def test_whole_number_floats_are_accepted_as_integers():
    draft = OrderService.build_draft({"customer_id": 7.0, "items": [{"quantity": 2.0, "unit_price": 10}]})

    assert draft.items[0].quantity == 2
    assert draft.customer_id == 7


def test_fractional_quantity_is_rejected():
    with pytest.raises(ValidationError, match="must be an integer"):
        OrderService.build_draft({"items": [{"quantity": 2.5, "unit_price": 10}]})


def test_order_update_keeps_only_status_fields():
    repo = _RecordingRepository()

    with pytest.raises(NotFoundError):
        OrderService(repo).update_order(4, {"status": "shipped", "total": 0})

    assert repo.updated == [(4, {"status": "shipped", "payment_status": None, "notes": None})]


def test_order_update_rejects_non_text_status():
    repo = _RecordingRepository()

    with pytest.raises(ValidationError, match="'status' must be a string"):
        OrderService(repo).update_order(4, {"status": 5})

    assert repo.updated == []
