"""
admin_api/repositories/order_repo.py
------------------------------------
Data access layer for orders and order items.
All SQL queries related to the `orders` and `order_items` tables live here.
"""

from typing import Optional

from psycopg2 import errors

from admin_api.db.connection import Database
from admin_api.db.query import FilterSet, ListQuery, Page, Pagination, partial_update_sql
from admin_api.errors import DuplicateError
from admin_api.models.order import OrderDraft
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

LIST_QUERY = ListQuery(
    source="orders o LEFT JOIN customers c ON o.customer_id = c.id",
    columns="o.*, c.name AS customer_name, c.email AS customer_email",
    order_by="o.created_at DESC",
)

ORDER_NUMBER_CONSTRAINT = "orders_order_number_key"

UPDATABLE_FIELDS = ("status", "payment_status", "notes")

STATS_SQL = """
    SELECT
        COUNT(*) AS total_orders,
        COALESCE(SUM(total), 0) AS total_revenue,
        COALESCE(AVG(total), 0) AS avg_order_value,
        COUNT(CASE WHEN status = 'pending' THEN 1 END) AS pending_orders,
        COUNT(CASE WHEN status = 'completed' THEN 1 END) AS completed_orders,
        COUNT(CASE WHEN created_at > NOW() - INTERVAL '24 hours' THEN 1 END) AS orders_today,
        COALESCE(SUM(CASE WHEN created_at > NOW() - INTERVAL '24 hours' THEN total END), 0) AS revenue_today
    FROM orders;
"""


class OrderRepository:
    """Repository for CRUD operations on the orders table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(self, draft: OrderDraft) -> dict:
        """
        Persist an order, its items and the customer counters atomically.

        Args:
            draft: Validated order with computed totals.

        Returns:
            The inserted order row.

        Raises:
            psycopg2.Error: Any database failure; nothing is kept in that case.
        """
        order_sql = """
            INSERT INTO orders (customer_id, order_number, subtotal, tax, total, notes,
                                shipping_address, payment_method, status, payment_status,
                                created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 'pending', 'unpaid', NOW(), NOW())
            RETURNING *;
        """
        item_sql = """
            INSERT INTO order_items (order_id, product_id, product_name, quantity,
                                     unit_price, total_price, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, NOW());
        """
        customer_sql = """
            UPDATE customers
            SET order_count = order_count + 1,
                total_spent = total_spent + %s,
                updated_at = NOW()
            WHERE id = %s;
        """
        total = draft.total
        try:
            with self.db.transaction() as cur:
                cur.execute(order_sql, (
                    draft.customer_id, draft.order_number, draft.subtotal, draft.tax,
                    total, draft.notes, draft.shipping_address, draft.payment_method,
                ))
                order = dict(cur.fetchone())

                for item in draft.items:
                    cur.execute(item_sql, (
                        order["id"], item.product_id, item.product_name,
                        item.quantity, item.unit_price, item.total_price,
                    ))

                if draft.customer_id:
                    cur.execute(customer_sql, (total, draft.customer_id))
        except errors.UniqueViolation as e:
            if e.diag.constraint_name == ORDER_NUMBER_CONSTRAINT:
                logger.warning(f"Order number {draft.order_number} already taken")
                raise DuplicateError(f"Order number {draft.order_number} already exists")
            logger.error(f"Failed to create order {draft.order_number}: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create order {draft.order_number}: {e}")
            raise

        logger.info(f"Created order #{order['id']} ({order['order_number']}) with {len(draft.items)} items")
        return order

    # ── READ ──────────────────────────────────────────────

    def list_page(self, page: Pagination, status: Optional[str] = None,
                  payment_status: Optional[str] = None, search: Optional[str] = None) -> Page:
        filters = (
            FilterSet()
            .contains(("o.order_number", "c.name"), search)
            .equals("o.status", status)
            .equals("o.payment_status", payment_status)
        )
        return self.db.fetch_page(LIST_QUERY, filters, page)

    def get_by_id(self, order_id: int) -> Optional[dict]:
        """
        Fetch a single order with its customer's contact details.

        Returns:
            The order row or None if not found.
        """
        sql = """
            SELECT o.*, c.name AS customer_name, c.email AS customer_email, c.phone AS customer_phone
            FROM orders o
            LEFT JOIN customers c ON o.customer_id = c.id
            WHERE o.id = %s;
        """
        return self.db.fetch_one(sql, (order_id,))

    def get_items(self, order_id: int) -> list[dict]:
        sql = "SELECT * FROM order_items WHERE order_id = %s ORDER BY id;"
        return self.db.fetch_all(sql, (order_id,))

    def get_recent_for_customer(self, customer_id: int, limit: int = 10) -> list[dict]:
        sql = "SELECT * FROM orders WHERE customer_id = %s ORDER BY created_at DESC LIMIT %s;"
        return self.db.fetch_all(sql, (customer_id, limit))

    def get_stats(self) -> dict:
        return self.db.fetch_one(STATS_SQL) or {}

    # ── UPDATE ────────────────────────────────────────────

    def update(self, order_id: int, changes: dict) -> Optional[dict]:
        """
        Update status fields of an order; omitted fields keep their value.

        Returns:
            The updated row, or None if no order has that id.
        """
        params = {name: changes.get(name) for name in UPDATABLE_FIELDS}
        params["id"] = order_id
        try:
            return self.db.execute_returning(partial_update_sql("orders", UPDATABLE_FIELDS), params)
        except Exception as e:
            logger.error(f"Failed to update order #{order_id}: {e}")
            raise

    # ── DELETE ────────────────────────────────────────────

    def delete(self, order_id: int) -> bool:
        """
        Delete an order; its items go with it through ON DELETE CASCADE.

        Returns:
            True if a row was deleted, False otherwise.
        """
        try:
            row = self.db.execute_returning("DELETE FROM orders WHERE id = %s RETURNING id;", (order_id,))
        except Exception as e:
            logger.error(f"Failed to delete order #{order_id}: {e}")
            raise
        if row:
            logger.info(f"Deleted order #{order_id}")
        return row is not None
