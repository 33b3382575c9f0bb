"""
admin_api/repositories/customer_repo.py
---------------------------------------
Data access layer for customer records.
"""

from typing import Optional

from psycopg2 import errors

from admin_api.db.connection import Database
from admin_api.db.query import FilterSet, ListQuery, Page, Pagination, partial_update_sql
from admin_api.errors import DuplicateError
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

LIST_QUERY = ListQuery(source="customers", order_by="created_at DESC")

FIELDS = ("name", "email", "phone", "segment", "notes", "total_spent", "order_count")

DUPLICATE_EMAIL_MESSAGE = "Customer with this email already exists"


class CustomerRepository:
    """Repository for CRUD operations on the customers table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, customer: dict) -> dict:
        """
        Insert a new customer.

        Raises:
            DuplicateError: If the email is already registered.
        """
        sql = """
            INSERT INTO customers (name, email, phone, segment, notes, created_at, updated_at)
            VALUES (%(name)s, %(email)s, %(phone)s, %(segment)s, %(notes)s, NOW(), NOW())
            RETURNING *;
        """
        params = {name: customer.get(name) for name in ("name", "email", "phone", "segment", "notes")}
        try:
            row = self.db.execute_returning(sql, params)
        except errors.UniqueViolation:
            logger.warning(f"Customer email already registered: {customer.get('email')}")
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
        except Exception as e:
            logger.error(f"Failed to add customer: {e}")
            raise
        logger.info(f"Added customer #{row['id']}")
        return row

    # ── READ ──────────────────────────────────────────────

    def list_page(self, page: Pagination, search: Optional[str] = None,
                  segment: Optional[str] = None) -> Page:
        filters = (
            FilterSet()
            .contains(("name", "email"), search)
            .equals("segment", segment)
        )
        return self.db.fetch_page(LIST_QUERY, filters, page)

    def get_by_id(self, customer_id: int) -> Optional[dict]:
        return self.db.fetch_one("SELECT * FROM customers WHERE id = %s;", (customer_id,))

    # ── UPDATE ────────────────────────────────────────────

    def update(self, customer_id: int, changes: dict) -> Optional[dict]:
        """
        Update a customer; omitted fields keep their value.

        Raises:
            DuplicateError: If the new email belongs to another customer.
        """
        params = {name: changes.get(name) for name in FIELDS}
        params["id"] = customer_id
        try:
            return self.db.execute_returning(partial_update_sql("customers", FIELDS), params)
        except errors.UniqueViolation:
            logger.warning(f"Customer #{customer_id} update rejected, email already registered: {changes.get('email')}")
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
        except Exception as e:
            logger.error(f"Failed to update customer #{customer_id}: {e}")
            raise

    # ── DELETE ────────────────────────────────────────────

    def delete(self, customer_id: int) -> bool:
        try:
            row = self.db.execute_returning("DELETE FROM customers WHERE id = %s RETURNING id;", (customer_id,))
        except Exception as e:
            logger.error(f"Failed to delete customer #{customer_id}: {e}")
            raise
        if row:
            logger.info(f"Deleted customer #{customer_id}")
        return row is not None
