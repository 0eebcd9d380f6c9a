"""Unit tests for invoice domain models"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fluxinvoice.domain.base import coerce_amount
from fluxinvoice.domain.invoice_draft import InvoiceDraft, InvoiceTheme
from fluxinvoice.domain.line_item import LineItem, LineItemPatch
from fluxinvoice.domain.party import Party, PartyPatch
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord


class TestAmountCoercion:
    """Numeric input never produces NaN/Infinity"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, Decimal("0")),
            ("", Decimal("0")),
            ("abc", Decimal("0")),
            ("NaN", Decimal("0")),
            ("Infinity", Decimal("0")),
            (float("inf"), Decimal("0")),
            (True, Decimal("0")),
            ([1, 2], Decimal("0")),
            (" 12.50 ", Decimal("12.50")),
            (0.1, Decimal("0.1")),
            (7, Decimal("7")),
            ("-3", Decimal("-3")),
        ],
    )
    def test_coerce_amount(self, raw, expected):
        assert coerce_amount(raw) == expected

    def test_line_item_coerces_numeric_fields(self):
        line = LineItem(id=1, quantity="two", unit_price=None, tax_percent="5")

        assert line.quantity == 0
        assert line.unit_price == 0
        assert line.tax_percent == Decimal("5")

    def test_omitted_amounts_are_decimal(self):
        line = LineItem(id=1)

        assert type(line.quantity) is Decimal
        assert type(line.unit_price) is Decimal
        assert type(line.tax_percent) is Decimal
        assert type(InvoiceDraft().discount) is Decimal
        assert type(InvoiceDraft().shipping) is Decimal


class TestLineItem:

    def test_accepts_legacy_client_keys(self):
        """Records written by the browser client used qty/rate/taxPct"""
        line = LineItem.model_validate({"id": 1700000000000, "name": "Hosting", "qty": 3, "rate": 9.5, "taxPct": 18})

        assert line.id == 1700000000000
        assert line.quantity == Decimal("3")
        assert line.unit_price == Decimal("9.5")
        assert line.tax_percent == Decimal("18")

    def test_serializes_camel_case(self):
        line = LineItem(id=4, name="Hosting", quantity=1, unit_price=10, tax_percent=5)

        stored = line.to_storage()

        assert set(stored) == {"id", "name", "quantity", "unitPrice", "description", "taxPercent"}

    def test_merged_applies_only_set_fields(self):
        line = LineItem(id=4, name="Hosting", quantity=1, unit_price=10, tax_percent=5)

        patched = line.merged(LineItemPatch(quantity=3))

        assert patched.id == 4
        assert patched.name == "Hosting"
        assert patched.quantity == Decimal("3")
        assert patched.unit_price == Decimal("10")
        assert line.quantity == Decimal("1")

    def test_merged_coerces_bad_numbers(self):
        line = LineItem(id=4, quantity=1, unit_price=10)

        patched = line.merged(LineItemPatch(unit_price="ten"))

        assert patched.unit_price == 0

    def test_id_required(self):
        with pytest.raises(ValidationError):
            LineItem(name="no id")


class TestParty:

    def test_merged_never_drops_existing_fields(self):
        party = Party(name="Acme", email="a@acme.test", city="Pune")

        patched = party.merged(PartyPatch(phone="+91 1234"))

        assert patched.name == "Acme"
        assert patched.email == "a@acme.test"
        assert patched.city == "Pune"
        assert patched.phone == "+91 1234"

    def test_keeps_entered_characters(self):
        party = Party(name="  Zoë & Søn <Ltd>  ")

        assert party.name == "  Zoë & Søn <Ltd>  "


class TestInvoiceDraft:

    def test_defaults(self):
        draft = InvoiceDraft()

        assert draft.items == []
        assert draft.discount == 0
        assert draft.shipping == 0
        assert draft.currency == "INR"
        assert draft.theme is None
        assert draft.from_party == Party()

    def test_currency_is_upper_cased(self):
        assert InvoiceDraft(currency=" usd ").currency == "USD"
        assert InvoiceDraft.model_validate({"currency": "eur"}).currency == "EUR"
        assert InvoiceDraft(currency=None).currency == ""

    def test_unknown_theme_becomes_none(self):
        assert InvoiceDraft(theme="neon").theme is None
        assert InvoiceDraft(theme="Emerald").theme == InvoiceTheme.EMERALD

    def test_null_text_fields_become_empty(self):
        draft = InvoiceDraft.model_validate({"notes": None, "invoiceNumber": None, "items": None})

        assert draft.notes == ""
        assert draft.invoice_number == ""
        assert draft.items == []

    def test_storage_layout_uses_logical_keys(self, sample_draft):
        stored = sample_draft.to_storage()

        assert stored["from"]["name"] == "Acme Studio"
        assert stored["to"]["name"] == "Globex Corp"
        assert stored["invoiceNumber"] == "INV-0042"
        assert stored["items"][0]["unitPrice"] == "100"
        assert stored["theme"] == "indigo"


class TestSavedInvoiceRecord:

    def test_to_draft_round_trip(self, sample_draft):
        record = SavedInvoiceRecord.from_draft(
            sample_draft, record_id="abc", total=Decimal("265"), saved_at=datetime.now(timezone.utc)
        )

        assert record.to_draft() == sample_draft

    def test_legacy_record(self):
        """Numeric ids and Z-suffixed timestamps from the browser client"""
        record = SavedInvoiceRecord.model_validate(
            {
                "id": 1717171717171,
                "invoiceNumber": "INV-1",
                "items": [],
                "total": 99.5,
                "savedAt": "2024-05-31T15:28:37.171Z",
            }
        )

        assert record.id == "1717171717171"
        assert record.total == Decimal("99.5")
        assert record.saved_at == datetime(2024, 5, 31, 15, 28, 37, 171000, tzinfo=timezone.utc)

    def test_unparseable_saved_at_is_none(self):
        record = SavedInvoiceRecord.model_validate({"id": "x", "savedAt": "yesterday"})

        assert record.saved_at is None

    def test_naive_saved_at_is_utc(self):
        record = SavedInvoiceRecord.model_validate({"id": "x", "savedAt": "2024-01-02T03:04:05"})

        assert record.saved_at.tzinfo == timezone.utc

    def test_missing_id_is_invalid(self):
        with pytest.raises(ValidationError):
            SavedInvoiceRecord.model_validate({"invoiceNumber": "INV-1"})

    def test_default_total_is_stored_as_decimal_string(self):
        stored = SavedInvoiceRecord(id="x").to_storage()

        assert stored["total"] == "0"
        assert stored["items"] == []
