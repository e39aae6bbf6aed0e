"""FastAPI application factory for the sample order service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from sample_order.config import AppConfig, load_config
from sample_order.db.base import get_engine
from sample_order.db.migrations_runner import apply_migrations
from sample_order.http.problem import (
    handle_http_exception,
    handle_reorder_error,
    handle_request_validation_error,
    handle_unexpected_error,
)
from sample_order.logging_setup import configure_logging
from sample_order.logic.errors import ReorderError
from sample_order.routes import api_router

logger = logging.getLogger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application: logging, migrations, routes and problem handlers."""
    configure_logging()
    cfg = config or load_config()

    if cfg.reorder.auto_apply_migrations:
        try:
            apply_migrations(get_engine(cfg.database.dsn))
        except Exception:
            logger.error("startup migrations failed dsn=%s", cfg.database.dsn, exc_info=True)
            raise

    app = FastAPI(title="Sample Order Service", version="0.1.0")
    app.include_router(api_router)
    app.add_exception_handler(ReorderError, handle_reorder_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    logger.info("app.created staging_offset=%s", cfg.reorder.staging_offset)
    return app


__all__ = ["create_app"]
