"""Unit tests for the invoice preview projection"""

from fluxinvoice.domain.invoice_draft import InvoiceDraft, InvoiceTheme
from fluxinvoice.domain.line_item import LineItem
from fluxinvoice.domain.party import Party
from fluxinvoice.domain.preview import build_preview, export_filename, party_lines


def test_export_filename():
    assert export_filename("INV-7") == "invoice_INV-7.pdf"
    assert export_filename("") == "invoice_.pdf"
    assert export_filename(None) == "invoice_.pdf"


def test_party_lines_skip_empty_parts():
    party = Party(name="Acme Studio", city="Pune", zip="411001", email="billing@acme.test")

    assert party_lines(party) == ["Acme Studio", "Pune 411001", "billing@acme.test"]


def test_preview_shows_formatted_totals(sample_draft):
    # Given a draft with two items, a discount and shipping
    # When
    preview = build_preview(sample_draft)

    # Then
    assert preview.subtotal == "INR 250.00"
    assert preview.tax_total == "INR 20.00"
    assert preview.discount == "INR 20.00"
    assert preview.shipping == "INR 15.00"
    assert preview.grand_total == "INR 265.00"
    assert preview.filename == "invoice_INV-0042.pdf"
    assert preview.theme == InvoiceTheme.INDIGO


def test_preview_rows(sample_draft):
    preview = build_preview(sample_draft)

    first = preview.rows[0]
    assert first.name == "Logo design"
    assert first.quantity == "2"
    assert first.unit_price == "INR 100.00"
    assert first.tax_percent == "10%"
    assert first.tax == "INR 20.00"
    assert first.amount == "INR 200.00"
    assert len(preview.rows) == 2


def test_preview_payment_lines(sample_draft):
    preview = build_preview(sample_draft)

    assert preview.payment_lines == [
        "Bank: State Bank",
        "Account Number: 001122",
        "UPI ID: acme@upi",
    ]


def test_preview_defaults_to_classic_theme():
    preview = build_preview(InvoiceDraft())

    assert preview.theme == InvoiceTheme.CLASSIC
    assert preview.rows == []
    assert preview.grand_total == "INR 0.00"


def test_preview_keeps_markup_as_plain_text():
    draft = InvoiceDraft(
        to_party=Party(name="<b>Bold</b> & Co"),
        items=[LineItem(id=1, name="<script>x</script>", quantity=1, unit_price=5)],
    )

    preview = build_preview(draft)

    assert preview.to_lines == ["<b>Bold</b> & Co"]
    assert preview.rows[0].name == "<script>x</script>"


def test_preview_tolerates_items_without_optional_amounts():
    draft = InvoiceDraft.model_validate({"items": [{"id": 1, "name": "Widget", "quantity": 2, "unitPrice": 10}]})

    preview = build_preview(draft)

    assert preview.rows[0].quantity == "2"
    assert preview.rows[0].tax_percent == "0%"
    assert preview.rows[0].tax == "INR 0.00"
    assert preview.discount == "INR 0.00"
    assert preview.grand_total == "INR 20.00"


def test_discount_deduction_sign(sample_draft):
    assert build_preview(sample_draft).discount_deduction == "- INR 20.00"

    surcharge = sample_draft.model_copy(update={"discount": -5})

    preview = build_preview(surcharge)

    assert preview.discount_deduction == "+ INR 5.00"
    assert preview.grand_total == "INR 290.00"


def test_preview_huge_amounts_render():
    draft = InvoiceDraft(items=[LineItem(id=1, name="Big", quantity="1e999999", unit_price="1e999999")])

    preview = build_preview(draft)

    assert preview.rows[0].amount == "INR 0.00"
    assert preview.grand_total == "INR 0.00"
    assert preview.rows[0].quantity == "1E+999999"
    assert preview.rows[0].unit_price == "INR 1.000000E+999999"
