"""
admin_api/repositories/product_repo.py
--------------------------------------
Data access layer for catalogue products.
"""

from typing import Optional

from admin_api.db.connection import Database
from admin_api.db.query import FilterSet, ListQuery, Page, Pagination, partial_update_sql
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

LIST_QUERY = ListQuery(source="products", order_by="created_at DESC")

FIELDS = ("name", "description", "price", "category", "inventory_count", "sku", "active", "image_url")


class ProductRepository:
    """Repository for CRUD operations on the products table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, product: dict) -> dict:
        """
        Insert a new product.

        Args:
            product: Column values keyed by field name (see ``FIELDS``).

        Returns:
            The inserted row.
        """
        sql = """
            INSERT INTO products (name, description, price, category, inventory_count,
                                  sku, active, image_url, created_at, updated_at)
            VALUES (%(name)s, %(description)s, %(price)s, %(category)s, %(inventory_count)s,
                    %(sku)s, %(active)s, %(image_url)s, NOW(), NOW())
            RETURNING *;
        """
        params = {name: product.get(name) for name in FIELDS}
        try:
            row = self.db.execute_returning(sql, params)
        except Exception as e:
            logger.error(f"Failed to add product: {e}")
            raise
        logger.info(f"Added product #{row['id']} ({row['name']})")
        return row

    # ── READ ──────────────────────────────────────────────

    def list_page(self, page: Pagination, category: Optional[str] = None,
                  active: Optional[str] = None, search: Optional[str] = None) -> Page:
        filters = (
            FilterSet()
            .contains(("name", "description"), search)
            .equals("category", category)
            .flag("active", active)
        )
        return self.db.fetch_page(LIST_QUERY, filters, page)

    def get_by_id(self, product_id: int) -> Optional[dict]:
        return self.db.fetch_one("SELECT * FROM products WHERE id = %s;", (product_id,))

    def get_categories(self) -> list[str]:
        """Distinct non-null categories in alphabetical order."""
        sql = "SELECT DISTINCT category FROM products WHERE category IS NOT NULL ORDER BY category;"
        return [row["category"] for row in self.db.fetch_all(sql)]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, product_id: int, changes: dict) -> Optional[dict]:
        params = {name: changes.get(name) for name in FIELDS}
        params["id"] = product_id
        try:
            return self.db.execute_returning(partial_update_sql("products", FIELDS), params)
        except Exception as e:
            logger.error(f"Failed to update product #{product_id}: {e}")
            raise

    # ── DELETE ────────────────────────────────────────────

    def delete(self, product_id: int) -> bool:
        try:
            row = self.db.execute_returning("DELETE FROM products WHERE id = %s RETURNING id;", (product_id,))
        except Exception as e:
            logger.error(f"Failed to delete product #{product_id}: {e}")
            raise
        if row:
            logger.info(f"Deleted product #{product_id}")
        return row is not None
