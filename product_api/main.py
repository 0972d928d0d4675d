# product_api/main.py
"""
Application factory.

``create_app`` wires settings, logging, middleware, error handlers and
routes together.  ``app`` is built at import time for uvicorn::

    uvicorn product_api.main:app --port 3000
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from . import __version__
from .config import Settings, settings as default_settings
from .database import ProductStore
from .errors import register_error_handlers
from .logging_config import setup_logging
from .middleware import ExceptionHandlingMiddleware, RequestLoggingMiddleware
from .routes import router as products_router
from .security import ApiKeyMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title="product-api (in-memory catalogue)", version=__version__)
    if store is None:
        store = ProductStore.seeded() if settings.seed_products else ProductStore()
    app.state.store = store

    if not settings.api_key:
        logger.warning("API_KEY is not set; every product request will be rejected")

    # Innermost: the key check runs after CORS preflight handling, before routing.
    app.add_middleware(ApiKeyMiddleware, secret=settings.api_key)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last means outermost: logging wraps the exception handler.
    app.add_middleware(ExceptionHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello World"

    app.include_router(products_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Server is running on http://localhost:%s", default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_level=default_settings.log_level.lower())
