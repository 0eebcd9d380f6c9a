"""Invoice preview

Display-ready projection of a draft, shared by the HTTP preview and the
PDF renderer so that both always show the same numbers.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from fluxinvoice.domain.base import coerce_amount
from fluxinvoice.domain.invoice_draft import InvoiceDraft, InvoiceTheme
from fluxinvoice.domain.party import Party
from fluxinvoice.domain.totals import (
    InvoiceTotals,
    compute_totals,
    format_currency,
    line_tax,
    line_total,
    plain_number,
)


def export_filename(invoice_number: Optional[str]) -> str:
    return f"invoice_{invoice_number or ''}.pdf"


def party_lines(party: Party) -> List[str]:
    """Address block lines; empty parts are left out"""
    lines = [party.name, party.address]
    lines.append(" ".join(p for p in (party.city, party.zip) if p))
    lines.extend([party.country, party.email, party.phone])
    return [line for line in lines if line]


class PreviewRow(BaseModel):
    name: str
    description: str = ""
    quantity: str
    unit_price: str = Field(alias="unitPrice")
    tax_percent: str = Field(alias="taxPercent")
    tax: str
    amount: str

    class Config:
        populate_by_name = True


class InvoicePreview(BaseModel):
    """Rendered view of the current draft state"""

    invoice_number: str = Field(alias="invoiceNumber")
    issue_date: str = Field(alias="issueDate")
    due_date: str = Field(alias="dueDate")
    currency: str
    theme: InvoiceTheme
    from_lines: List[str] = Field(alias="fromLines")
    to_lines: List[str] = Field(alias="toLines")
    rows: List[PreviewRow]
    subtotal: str
    tax_total: str = Field(alias="taxTotal")
    discount: str
    discount_deduction: str = Field(alias="discountDeduction")
    shipping: str
    grand_total: str = Field(alias="grandTotal")
    payment_lines: List[str] = Field(alias="paymentLines")
    notes: str
    terms: str
    filename: str

    class Config:
        populate_by_name = True


def payment_lines(draft: InvoiceDraft) -> List[str]:
    labelled = [
        ("Bank", draft.bank_name),
        ("Account Name", draft.account_name),
        ("Account Number", draft.account_number),
        ("UPI ID", draft.upi_id),
        ("UPI Name", draft.upi_name),
    ]
    return [f"{label}: {value}" for label, value in labelled if value]


def discount_deduction(discount, money) -> str:
    """Discount as it is applied to the total: "- X" for a discount, "+ X" for a surcharge"""
    discount = coerce_amount(discount)
    if discount < 0:
        return f"+ {money(-discount)}"
    return f"- {money(discount)}"


def build_preview(draft: InvoiceDraft, totals: Optional[InvoiceTotals] = None) -> InvoicePreview:
    """
    Build the preview for a draft

    Args:
        draft: Draft to render
        totals: Totals already computed for this draft; recomputed when omitted

    Returns:
        InvoicePreview with every amount formatted in the draft's currency
    """
    if totals is None:
        totals = compute_totals(draft.items, draft.discount, draft.shipping)

    def money(amount) -> str:
        return format_currency(draft.currency, amount)

    rows = [
        PreviewRow(
            name=item.name,
            description=item.description,
            quantity=plain_number(item.quantity),
            unit_price=money(item.unit_price),
            tax_percent=f"{plain_number(item.tax_percent)}%",
            tax=money(line_tax(item)),
            amount=money(line_total(item)),
        )
        for item in draft.items
    ]

    return InvoicePreview(
        invoice_number=draft.invoice_number,
        issue_date=draft.issue_date,
        due_date=draft.due_date,
        currency=draft.currency,
        theme=draft.theme or InvoiceTheme.CLASSIC,
        from_lines=party_lines(draft.from_party),
        to_lines=party_lines(draft.to_party),
        rows=rows,
        subtotal=money(totals.subtotal),
        tax_total=money(totals.tax_total),
        discount=money(draft.discount),
        discount_deduction=discount_deduction(draft.discount, money),
        shipping=money(draft.shipping),
        grand_total=money(totals.grand_total),
        payment_lines=payment_lines(draft),
        notes=draft.notes,
        terms=draft.terms,
        filename=export_filename(draft.invoice_number),
    )
