"""FastAPI application factory"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fluxinvoice import __version__
from fluxinvoice.api.error import register_error_handlers
from fluxinvoice.api.routes import auth, drafts, health, invoices

logger = logging.getLogger(__name__)


def setup_logging(config) -> None:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def setup_sentry(config) -> None:
    if not config.ENABLE_SENTRY or not config.DSN_SENTRY:
        return
    import sentry_sdk

    sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)
    logger.info("Sentry error tracking enabled")


def create_app(config) -> FastAPI:
    setup_logging(config)
    setup_sentry(config)

    app = FastAPI(
        title="FluxInvoice",
        description="Invoice builder: drafts, live totals, PDF export and saved invoices",
        version=__version__,
    )

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    for module in (health, auth, drafts, invoices):
        app.include_router(module.router, prefix=config.API_PREFIX)

    return app
