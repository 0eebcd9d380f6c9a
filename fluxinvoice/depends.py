"""FastAPI dependency providers

Builds the storage backend, invoice store, PDF service and identity
provider from ApplicationConfig. Tests swap these out through
app.dependency_overrides.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, status

from config import ApplicationConfig
from fluxinvoice.adapter.repositories.invoice_store import KeyValueInvoiceStore
from fluxinvoice.adapter.services.identity_provider import StaticTokenIdentityProvider
from fluxinvoice.adapter.services.pdf_service import ReportLabPdfService
from fluxinvoice.adapter.storage import JsonFileStorage, MemoryStorage, SqlModelStorage
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.identity_provider import IdentityProvider
from fluxinvoice.app.services.key_value_storage import KeyValueStorage
from fluxinvoice.app.services.pdf_service import PdfService
from fluxinvoice.api.error import ClientError
from fluxinvoice.libs.result import Error

logger = logging.getLogger(__name__)


def build_storage(config=ApplicationConfig) -> KeyValueStorage:
    backend = str(config.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        return SqlModelStorage(config.DB_URI)
    if backend == "json":
        return JsonFileStorage(config.STORAGE_PATH)
    raise ValueError(f"Unknown STORAGE_BACKEND: {config.STORAGE_BACKEND}")


@lru_cache(maxsize=1)
def get_invoice_store() -> InvoiceStore:
    storage = build_storage(ApplicationConfig)
    logger.info(f"Invoice store using {type(storage).__name__}")
    return KeyValueInvoiceStore(storage)


@lru_cache(maxsize=1)
def get_pdf_service() -> PdfService:
    return ReportLabPdfService()


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProvider:
    return StaticTokenIdentityProvider(
        ApplicationConfig.AUTH_TOKENS, disabled=ApplicationConfig.AUTH_DISABLED
    )


def get_default_currency() -> str:
    return ApplicationConfig.DEFAULT_CURRENCY


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def require_authenticated(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> None:
    """Route guard: reject requests without a signed-in session"""
    if not identity.is_authenticated(token):
        raise ClientError(
            Error(code="UNAUTHENTICATED", message="Sign in to continue"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
