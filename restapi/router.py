"""Application configuration and router setup."""

import logging

import fastapi
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import init_db
from components.core.config import get_settings
from components.core.exceptions import (
    BankingException,
    banking_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from restapi.endpoints import (
    auth,
    calculator,
    dashboard,
    deposit,
    health_check,
    setup,
    transaction,
    user,
)

TITLE = "Onlinekonto Festgeld API"
DESCRIPTION = "Fixed-term deposit accounts: users, deposits, interest and transactions"
VERSION = "1.0.0"


def configure_logging() -> None:
    """Configure root logging from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    settings = get_settings()

    app = fastapi.FastAPI(
        title=TITLE,
        description=DESCRIPTION,
        version=VERSION,
        # Initialize database
        lifespan=init_db.init_db,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handlers
    app.add_exception_handler(BankingException, banking_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(setup.router)
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(deposit.router)
    app.include_router(transaction.router)
    app.include_router(calculator.router)
    app.include_router(dashboard.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=TITLE,
            version=VERSION,
            description=DESCRIPTION,
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
