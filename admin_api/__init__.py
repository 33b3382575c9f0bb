"""
admin_api - Shop Admin API
==========================
Admin-facing REST endpoints for orders, products, customers and
competitors, backed by PostgreSQL.
"""

__version__ = "1.0.0"
