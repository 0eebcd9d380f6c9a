import pytest

from fluxinvoice.adapter.repositories.invoice_store import KeyValueInvoiceStore
from fluxinvoice.adapter.storage.memory_storage import MemoryStorage
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from fluxinvoice.domain.line_item import LineItem
from fluxinvoice.domain.party import Party


class FailingWriteStorage(MemoryStorage):
    """MemoryStorage whose writes fail, like a browser with storage quota exhausted"""

    def set(self, key, value):
        raise StorageWriteError("quota exceeded")

    def remove(self, key):
        raise StorageWriteError("storage disabled")


@pytest.fixture
def memory_storage():
    """Empty in-memory key-value storage"""
    return MemoryStorage()


@pytest.fixture
def invoice_store(memory_storage):
    """Invoice store backed by memory_storage"""
    return KeyValueInvoiceStore(memory_storage)


@pytest.fixture
def failing_storage():
    return FailingWriteStorage()


@pytest.fixture
def sample_draft():
    """Draft with two items, a discount and shipping (grand total 265)"""
    return InvoiceDraft(
        from_party=Party(name="Acme Studio", email="billing@acme.test", city="Pune", zip="411001"),
        to_party=Party(name="Globex Corp", email="ap@globex.test"),
        issue_date="2024-03-01",
        due_date="2024-03-15",
        invoice_number="INV-0042",
        currency="INR",
        items=[
            LineItem(id=1, name="Logo design", quantity=2, unit_price=100, tax_percent=10),
            LineItem(id=2, name="Business cards", quantity=1, unit_price=50, tax_percent=0),
        ],
        discount=20,
        shipping=15,
        notes="Thank you",
        terms="Net 14",
        bank_name="State Bank",
        account_number="001122",
        upi_id="acme@upi",
        theme="indigo",
    )


@pytest.fixture
def read_only_storage(memory_storage):
    """Failing-write storage that reads the same data as memory_storage"""
    storage = FailingWriteStorage()
    storage.data = memory_storage.data
    return storage
