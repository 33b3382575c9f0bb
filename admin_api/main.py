"""
admin_api/main.py
-----------------
Entry point for the Shop Admin API.

Responsibilities:
    - Load settings and configure logging.
    - Open the database connection pool (and optionally the schema).
    - Build the Flask app and serve it.
    - Close the pool on shutdown.
"""

from admin_api.app import create_app
from admin_api.config import Settings
from admin_api.db.connection import Database
from admin_api.db.init_db import create_tables
from admin_api.utils.logger import get_logger, init_logging

logger = get_logger(__name__)


def main() -> None:
    """Initialize and run the API server."""
    settings = Settings.from_env()
    init_logging(settings.log_level)

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    database = Database(settings.dsn, settings.db_pool_min, settings.db_pool_max)
    database.open()

    try:
        if settings.init_schema:
            create_tables(database)

        # ── 2. Build the Flask application ────────────────
        app = create_app(settings, db=database)

        # ── 3. Serve ──────────────────────────────────────
        logger.info(f"Shop Admin API listening on {settings.host}:{settings.port}")
        app.run(host=settings.host, port=settings.port, debug=not settings.is_production, use_reloader=False)
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        database.close()
        logger.info("Shop Admin API stopped.")


if __name__ == "__main__":
    main()
