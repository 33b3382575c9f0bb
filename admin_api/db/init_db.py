"""
admin_api/db/init_db.py
-----------------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m admin_api.db.init_db
"""

from admin_api.db.connection import Database
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Customers: contact details plus counters maintained on order creation
CREATE TABLE IF NOT EXISTS customers (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(200) NOT NULL,
    email           VARCHAR(255) UNIQUE NOT NULL,
    phone           VARCHAR(50),
    segment         VARCHAR(50) DEFAULT 'new',
    notes           TEXT,
    total_spent     NUMERIC(12,2) NOT NULL DEFAULT 0,
    order_count     INT NOT NULL DEFAULT 0,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Products: catalogue entries
CREATE TABLE IF NOT EXISTS products (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(200) NOT NULL,
    description     TEXT,
    price           NUMERIC(10,2) NOT NULL,
    category        VARCHAR(100),
    inventory_count INT NOT NULL DEFAULT 0,
    sku             VARCHAR(100),
    active          BOOLEAN NOT NULL DEFAULT TRUE,
    image_url       TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Orders: header row, totals fixed at creation time
CREATE TABLE IF NOT EXISTS orders (
    id               SERIAL PRIMARY KEY,
    order_number     VARCHAR(40) UNIQUE NOT NULL,
    customer_id      INT REFERENCES customers(id) ON DELETE SET NULL,
    subtotal         NUMERIC(12,2) NOT NULL DEFAULT 0,
    tax              NUMERIC(12,2) NOT NULL DEFAULT 0,
    total            NUMERIC(12,2) NOT NULL DEFAULT 0,
    status           VARCHAR(20) NOT NULL DEFAULT 'pending',
    payment_status   VARCHAR(20) NOT NULL DEFAULT 'unpaid',
    payment_method   VARCHAR(50),
    shipping_address TEXT,
    notes            TEXT,
    created_at       TIMESTAMPTZ DEFAULT NOW(),
    updated_at       TIMESTAMPTZ DEFAULT NOW()
);

-- Order items: removed together with their order
CREATE TABLE IF NOT EXISTS order_items (
    id              SERIAL PRIMARY KEY,
    order_id        INT NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    product_id      INT,
    product_name    VARCHAR(200),
    quantity        INT NOT NULL,
    unit_price      NUMERIC(10,2) NOT NULL,
    total_price     NUMERIC(12,2) NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Competitors: market intelligence, structured fields kept as JSONB
CREATE TABLE IF NOT EXISTS competitors (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(200) NOT NULL,
    website         TEXT,
    distance        NUMERIC(8,2),
    type            VARCHAR(50) DEFAULT 'Direct Competitor',
    threat_level    VARCHAR(10) DEFAULT 'medium' CHECK (threat_level IN ('low', 'medium', 'high')),
    rating          NUMERIC(3,2),
    rating_change   NUMERIC(4,2) DEFAULT 0,
    review_count    INT DEFAULT 0,
    avg_price       NUMERIC(10,2),
    price_diff      NUMERIC(10,2) DEFAULT 0,
    strengths       TEXT,
    weaknesses      TEXT,
    top_items       JSONB,
    sentiment       JSONB,
    notes           TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Indexes for the list filters
CREATE INDEX IF NOT EXISTS idx_orders_created ON orders(created_at DESC);
CREATE INDEX IF NOT EXISTS idx_orders_customer ON orders(customer_id);
CREATE INDEX IF NOT EXISTS idx_order_items_order ON order_items(order_id);
CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);
CREATE INDEX IF NOT EXISTS idx_competitors_threat ON competitors(threat_level);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with db.transaction() as cur:
            cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from admin_api.config import Settings

    settings = Settings.from_env()
    database = Database(settings.dsn, settings.db_pool_min, settings.db_pool_max)
    database.open()
    try:
        create_tables(database)
    finally:
        database.close()
    print("Database schema created successfully.")
