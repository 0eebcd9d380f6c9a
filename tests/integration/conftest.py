import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fluxinvoice.adapter.repositories.invoice_store import KeyValueInvoiceStore
from fluxinvoice.adapter.services.identity_provider import StaticTokenIdentityProvider
from fluxinvoice.adapter.storage.memory_storage import MemoryStorage
from fluxinvoice.depends import get_default_currency, get_identity_provider, get_invoice_store

TEST_TOKEN = "test-token"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def invoice_store(storage):
    return KeyValueInvoiceStore(storage)


@pytest.fixture
def app(invoice_store):
    """Application wired to an in-memory store and a single known token"""
    from fluxinvoice.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    identity = StaticTokenIdentityProvider([TEST_TOKEN])

    app.dependency_overrides[get_invoice_store] = lambda: invoice_store
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_default_currency] = lambda: "INR"
    return app


@pytest_asyncio.fixture
async def client(app):
    """Signed-in client"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_TOKEN}"},
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def anonymous_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def draft_payload():
    """Draft as the builder sends it; grand total 265"""
    return {
        "from": {"name": "Acme Studio", "email": "billing@acme.test"},
        "to": {"name": "Globex Corp"},
        "issueDate": "2024-03-01",
        "dueDate": "2024-03-15",
        "invoiceNumber": "INV-0042",
        "currency": "INR",
        "items": [
            {"id": 1, "name": "Logo design", "quantity": 2, "unitPrice": 100, "taxPercent": 10},
            {"id": 2, "name": "Business cards", "quantity": 1, "unitPrice": 50, "taxPercent": 0},
        ],
        "discount": 20,
        "shipping": 15,
        "notes": "Thank you",
        "theme": "indigo",
    }
