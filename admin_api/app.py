"""
admin_api/app.py
----------------
Flask application factory. Wires the database handle into repositories,
services and blueprints, and turns exceptions into failure envelopes.
"""

from typing import Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from admin_api.config import Settings
from admin_api.db.connection import Database
from admin_api.errors import ApiError
from admin_api.repositories.competitor_repo import CompetitorRepository
from admin_api.repositories.customer_repo import CustomerRepository
from admin_api.repositories.order_repo import OrderRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.routes import competitors, customers, orders, products, responses
from admin_api.security.auth import StaticTokenVerifier, admin_guard
from admin_api.services.competitor_service import CompetitorService
from admin_api.services.customer_service import CustomerService
from admin_api.services.order_service import OrderService
from admin_api.services.product_service import ProductService
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)


class Services:
    """The service objects the blueprints are built from."""

    def __init__(self, orders: OrderService, products: ProductService,
                 customers: CustomerService, competitors: CompetitorService):
        self.orders = orders
        self.products = products
        self.customers = customers
        self.competitors = competitors

    @classmethod
    def from_database(cls, db: Database) -> "Services":
        order_repo = OrderRepository(db)
        return cls(
            orders=OrderService(order_repo),
            products=ProductService(ProductRepository(db)),
            customers=CustomerService(CustomerRepository(db), order_repo),
            competitors=CompetitorService(CompetitorRepository(db)),
        )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        return responses.failure(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return responses.failure(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(f"Unhandled error: {error}")
        return responses.failure(str(error), 500)


def create_app(settings: Settings, services: Optional[Services] = None,
               db: Optional[Database] = None, verifier=None) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Runtime configuration.
        services: Pre-built services; built from ``db`` when omitted.
        db: Database handle, required when ``services`` is omitted.
        verifier: Token verifier; defaults to the configured static tokens.
    """
    if services is None:
        if db is None:
            raise ValueError("create_app() needs either services or a database handle")
        services = Services.from_database(db)
    if verifier is None:
        verifier = StaticTokenVerifier(settings.admin_tokens)
    if settings.auth_disabled:
        logger.warning("Authentication is DISABLED; do not run like this in production.")

    app = Flask(__name__)
    app.json = responses.ApiJSONProvider(app)

    if settings.cors_origins:
        CORS(app, resources={r"/api/*": {"origins": settings.cors_origins}})

    guard = admin_guard(verifier, disabled=settings.auth_disabled)
    app.register_blueprint(orders.create_blueprint(services.orders, guard), url_prefix="/api/orders")
    app.register_blueprint(products.create_blueprint(services.products, guard), url_prefix="/api/products")
    app.register_blueprint(customers.create_blueprint(services.customers, guard), url_prefix="/api/customers")
    app.register_blueprint(
        competitors.create_blueprint(services.competitors, guard), url_prefix="/api/competitors"
    )

    @app.get("/api/health")
    def health():
        return {"status": "healthy", "service": "Shop Admin API"}, 200

    _register_error_handlers(app)
    return app
