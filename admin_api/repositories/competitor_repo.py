"""
admin_api/repositories/competitor_repo.py
-----------------------------------------
Data access layer for competitor intelligence records.
Structured fields (top_items, sentiment) are written as JSONB.
"""

from typing import Optional

from psycopg2.extras import Json

from admin_api.db.connection import Database
from admin_api.db.query import FilterSet, ListQuery, Page, Pagination, partial_update_sql
from admin_api.models.competitor import FIELDS, JSON_FIELDS
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

LIST_QUERY = ListQuery(source="competitors", order_by="distance ASC NULLS LAST")

SUMMARY_SQL = """
    SELECT
        COUNT(*) AS total_competitors,
        COUNT(CASE WHEN threat_level = 'high' THEN 1 END) AS high_threat,
        COUNT(CASE WHEN threat_level = 'medium' THEN 1 END) AS medium_threat,
        COUNT(CASE WHEN threat_level = 'low' THEN 1 END) AS low_threat,
        COALESCE(AVG(rating), 0) AS avg_competitor_rating,
        COALESCE(AVG(avg_price), 0) AS avg_competitor_price,
        COALESCE(MIN(distance), 0) AS nearest_competitor
    FROM competitors;
"""


def _params(values: dict) -> dict:
    params = {name: values.get(name) for name in FIELDS}
    for name in JSON_FIELDS:
        if params[name] is not None:
            params[name] = Json(params[name])
    return params


class CompetitorRepository:
    """Repository for CRUD operations on the competitors table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, competitor: dict) -> dict:
        columns = ", ".join(FIELDS)
        placeholders = ", ".join(f"%({name})s" for name in FIELDS)
        sql = f"""
            INSERT INTO competitors ({columns}, created_at, updated_at)
            VALUES ({placeholders}, NOW(), NOW())
            RETURNING *;
        """
        try:
            row = self.db.execute_returning(sql, _params(competitor))
        except Exception as e:
            logger.error(f"Failed to add competitor: {e}")
            raise
        logger.info(f"Added competitor #{row['id']} ({row['name']})")
        return row

    # ── READ ──────────────────────────────────────────────

    def list_page(self, page: Pagination, threat_level: Optional[str] = None) -> Page:
        filters = FilterSet().equals("threat_level", threat_level)
        return self.db.fetch_page(LIST_QUERY, filters, page)

    def get_by_id(self, competitor_id: int) -> Optional[dict]:
        return self.db.fetch_one("SELECT * FROM competitors WHERE id = %s;", (competitor_id,))

    def get_summary(self) -> dict:
        return self.db.fetch_one(SUMMARY_SQL) or {}

    # ── UPDATE ────────────────────────────────────────────

    def update(self, competitor_id: int, changes: dict) -> Optional[dict]:
        params = _params(changes)
        params["id"] = competitor_id
        try:
            return self.db.execute_returning(partial_update_sql("competitors", FIELDS), params)
        except Exception as e:
            logger.error(f"Failed to update competitor #{competitor_id}: {e}")
            raise

    # ── DELETE ────────────────────────────────────────────

    def delete(self, competitor_id: int) -> bool:
        try:
            row = self.db.execute_returning("DELETE FROM competitors WHERE id = %s RETURNING id;", (competitor_id,))
        except Exception as e:
            logger.error(f"Failed to delete competitor #{competitor_id}: {e}")
            raise
        if row:
            logger.info(f"Deleted competitor #{competitor_id}")
        return row is not None
