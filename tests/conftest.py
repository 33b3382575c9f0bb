"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from admin_api.app import Services, create_app
from admin_api.config import Settings
from admin_api.db.connection import Database
from admin_api.db.query import Page
from admin_api.errors import DuplicateError
from admin_api.services.competitor_service import CompetitorService
from admin_api.services.customer_service import CustomerService
from admin_api.services.order_service import OrderService
from admin_api.services.product_service import ProductService

ADMIN_TOKEN = "admin-token"
STAFF_TOKEN = "staff-token"


# ── psycopg2 stand-ins ────────────────────────────────────


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((sql, params))
        if self.conn.fail_on and self.conn.fail_on in sql:
            raise self.conn.error
        self._rows = self.conn.results.pop(0) if self.conn.results else []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    """Records statements; each execute consumes the next scripted result."""

    def __init__(self, results=None, fail_on=None, error=None):
        self.results = list(results or [])
        self.fail_on = fail_on
        self.error = error or RuntimeError("boom")
        self.executed = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.checked_out = 0
        self.released = 0
        self.closed = False

    def getconn(self):
        self.checked_out += 1
        return self.conn

    def putconn(self, conn):
        self.released += 1

    def closeall(self):
        self.closed = True


@pytest.fixture
def fake_db():
    """Factory: ``fake_db(results=[...], fail_on="INSERT INTO order_items")``."""
    def build(results=None, fail_on=None, error=None):
        conn = FakeConnection(results, fail_on, error)
        pool = FakePool(conn)
        return Database("postgresql://test", connection_pool=pool), conn, pool
    return build


# ── In-memory repositories ────────────────────────────────


def _apply_changes(row, changes, fields):
    for name in fields:
        if changes.get(name) is not None:
            row[name] = changes[name]
    return dict(row)


def _page(rows, page):
    return Page(rows=rows[page.offset:page.offset + page.limit], total=len(rows),
                limit=page.limit, offset=page.offset)


def _matches(value, term):
    return value is not None and term.lower() in str(value).lower()


class MemoryStore:
    def __init__(self):
        self.orders = {}
        self.order_items = {}
        self.products = {}
        self.customers = {}
        self.competitors = {}
        self._ids = {}

    def next_id(self, table):
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]


class MemoryOrderRepository:
    def __init__(self, store):
        self.store = store
        self.fail_create = False

    def create(self, draft):
        if self.fail_create:
            raise RuntimeError("insert failed")
        order_id = self.store.next_id("orders")
        order = {
            "id": order_id, "order_number": draft.order_number, "customer_id": draft.customer_id,
            "subtotal": draft.subtotal, "tax": draft.tax, "total": draft.total,
            "status": "pending", "payment_status": "unpaid", "notes": draft.notes,
            "shipping_address": draft.shipping_address, "payment_method": draft.payment_method,
        }
        self.store.orders[order_id] = order
        for item in draft.items:
            item_id = self.store.next_id("order_items")
            self.store.order_items[item_id] = {
                "id": item_id, "order_id": order_id, "product_id": item.product_id,
                "product_name": item.product_name, "quantity": item.quantity,
                "unit_price": item.unit_price, "total_price": item.total_price,
            }
        customer = self.store.customers.get(draft.customer_id)
        if customer is not None:
            customer["order_count"] += 1
            customer["total_spent"] += draft.total
        return dict(order)

    def list_page(self, page, status=None, payment_status=None, search=None):
        rows = list(reversed(list(self.store.orders.values())))
        if search:
            rows = [r for r in rows if _matches(r["order_number"], search)
                    or _matches(self.store.customers.get(r["customer_id"], {}).get("name"), search)]
        if status:
            rows = [r for r in rows if r["status"] == status]
        if payment_status:
            rows = [r for r in rows if r["payment_status"] == payment_status]
        return _page(rows, page)

    def get_by_id(self, order_id):
        row = self.store.orders.get(order_id)
        return dict(row) if row else None

    def get_items(self, order_id):
        return [dict(i) for i in self.store.order_items.values() if i["order_id"] == order_id]

    def get_recent_for_customer(self, customer_id, limit=10):
        rows = [dict(o) for o in self.store.orders.values() if o["customer_id"] == customer_id]
        return list(reversed(rows))[:limit]

    def get_stats(self):
        totals = [o["total"] for o in self.store.orders.values()]
        return {"total_orders": len(totals), "total_revenue": sum(totals, Decimal("0"))}

    def update(self, order_id, changes):
        row = self.store.orders.get(order_id)
        if row is None:
            return None
        return _apply_changes(row, changes, ("status", "payment_status", "notes"))

    def delete(self, order_id):
        if self.store.orders.pop(order_id, None) is None:
            return False
        for item_id in [k for k, v in self.store.order_items.items() if v["order_id"] == order_id]:
            del self.store.order_items[item_id]
        return True


class MemoryTableRepository:
    """Generic single-table repository used for products, customers and competitors."""

    table = ""
    fields = ()

    def __init__(self, store):
        self.store = store

    @property
    def rows(self):
        return getattr(self.store, self.table)

    def add(self, values):
        row_id = self.store.next_id(self.table)
        row = {"id": row_id, **values}
        self.rows[row_id] = row
        return dict(row)

    def get_by_id(self, row_id):
        row = self.rows.get(row_id)
        return dict(row) if row else None

    def update(self, row_id, changes):
        row = self.rows.get(row_id)
        if row is None:
            return None
        return _apply_changes(row, changes, self.fields)

    def delete(self, row_id):
        return self.rows.pop(row_id, None) is not None


class MemoryProductRepository(MemoryTableRepository):
    table = "products"
    fields = ("name", "description", "price", "category", "inventory_count", "sku", "active", "image_url")

    def list_page(self, page, category=None, active=None, search=None):
        rows = list(reversed(list(self.rows.values())))
        if search:
            rows = [r for r in rows if _matches(r["name"], search) or _matches(r["description"], search)]
        if category:
            rows = [r for r in rows if r["category"] == category]
        if active is not None:
            rows = [r for r in rows if r["active"] == (active == "true")]
        return _page(rows, page)

    def get_categories(self):
        return sorted({r["category"] for r in self.rows.values() if r["category"] is not None})


class MemoryCustomerRepository(MemoryTableRepository):
    table = "customers"
    fields = ("name", "email", "phone", "segment", "notes", "total_spent", "order_count")

    def add(self, values):
        if any(r["email"] == values["email"] for r in self.rows.values()):
            raise DuplicateError("Customer with this email already exists")
        return super().add({**values, "total_spent": Decimal("0"), "order_count": 0})

    def list_page(self, page, search=None, segment=None):
        rows = list(reversed(list(self.rows.values())))
        if search:
            rows = [r for r in rows if _matches(r["name"], search) or _matches(r["email"], search)]
        if segment:
            rows = [r for r in rows if r["segment"] == segment]
        return _page(rows, page)


class MemoryCompetitorRepository(MemoryTableRepository):
    table = "competitors"
    fields = (
        "name", "website", "distance", "type", "threat_level", "rating",
        "rating_change", "review_count", "avg_price", "price_diff",
        "strengths", "weaknesses", "top_items", "sentiment", "notes",
    )

    def list_page(self, page, threat_level=None):
        rows = list(self.rows.values())
        if threat_level:
            rows = [r for r in rows if r["threat_level"] == threat_level]
        return _page(rows, page)

    def get_summary(self):
        return {"total_competitors": len(self.rows)}


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def services(store):
    orders = MemoryOrderRepository(store)
    return Services(
        orders=OrderService(orders),
        products=ProductService(MemoryProductRepository(store)),
        customers=CustomerService(MemoryCustomerRepository(store), orders),
        competitors=CompetitorService(MemoryCompetitorRepository(store)),
    )


@pytest.fixture
def settings():
    return Settings(
        database_url="postgresql://test",
        admin_tokens={ADMIN_TOKEN: "admin", STAFF_TOKEN: "staff"},
    )


@pytest.fixture
def app(settings, services):
    app = create_app(settings, services=services)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def staff_auth():
    return {"Authorization": f"Bearer {STAFF_TOKEN}"}
