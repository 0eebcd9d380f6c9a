"""Unit tests for DuplicateInvoice and DeleteInvoice use cases"""

from decimal import Decimal

from fluxinvoice.adapter.repositories.invoice_store import INVOICES_KEY, KeyValueInvoiceStore
from fluxinvoice.app.use_cases.invoices.delete_invoice import DeleteInvoice
from fluxinvoice.app.use_cases.invoices.duplicate_invoice import DuplicateInvoice


class TestDuplicateInvoice:

    def test_duplicate(self, invoice_store, sample_draft):
        """
        Given: One saved invoice
        When: It is duplicated
        Then: A copy with a new id and -COPY number is listed first
        """
        original = invoice_store.save_new(sample_draft, Decimal("265"))

        result = DuplicateInvoice(invoice_store).execute(original.id)

        assert result.is_ok()
        copy = result.value
        assert copy.id != original.id
        assert copy.invoice_number == "INV-0042-COPY"
        assert invoice_store.load_all()[0].id == copy.id
        assert len(invoice_store.load_all()) == 2

    def test_duplicate_missing(self, invoice_store):
        result = DuplicateInvoice(invoice_store).execute("missing")

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    def test_duplicate_write_failure(self, memory_storage, read_only_storage, sample_draft):
        seeded = KeyValueInvoiceStore(memory_storage).save_new(sample_draft, Decimal("265"))
        store = KeyValueInvoiceStore(read_only_storage)

        result = DuplicateInvoice(store).execute(seeded.id)

        assert result.error.code == "DUPLICATE_FAILED"
        assert len(store.load_all()) == 1


class TestDeleteInvoice:

    def test_delete(self, invoice_store, sample_draft):
        keep = invoice_store.save_new(sample_draft, Decimal("1"))
        drop = invoice_store.save_new(sample_draft, Decimal("2"))

        result = DeleteInvoice(invoice_store).execute(drop.id)

        assert result.is_ok()
        assert result.value.deleted is True
        assert [r.id for r in invoice_store.load_all()] == [keep.id]

    def test_delete_unknown_is_noop(self, invoice_store, sample_draft):
        invoice_store.save_new(sample_draft, Decimal("1"))

        result = DeleteInvoice(invoice_store).execute("missing")

        assert result.is_ok()
        assert result.value.deleted is False
        assert len(invoice_store.load_all()) == 1

    def test_delete_write_failure(self, memory_storage, read_only_storage, sample_draft):
        seeded = KeyValueInvoiceStore(memory_storage).save_new(sample_draft, Decimal("265"))
        before = memory_storage.data[INVOICES_KEY]
        store = KeyValueInvoiceStore(read_only_storage)

        result = DeleteInvoice(store).execute(seeded.id)

        assert result.error.code == "DELETE_FAILED"
        assert store.get_by_id(seeded.id) is not None
        assert memory_storage.data[INVOICES_KEY] == before
