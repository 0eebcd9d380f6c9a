"""Totals Engine

Pure derivation of subtotal, per-line tax and grand total from a draft's
items and charges. Always computed from the raw item list; nothing here
rounds to cents, so repeated calls with the same input give the same output.

Arithmetic runs under AMOUNT_CONTEXT with traps off: an overflowing
amount becomes Infinity and is then counted as 0, instead of raising.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Iterable

from pydantic import BaseModel, Field

from fluxinvoice.domain.base import ZERO, coerce_amount
from fluxinvoice.domain.line_item import LineItem

HUNDRED = Decimal("100")
CENT = Decimal("0.01")

AMOUNT_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP, traps=[])
# Wider values are displayed in scientific notation
DISPLAY_DIGITS = AMOUNT_CONTEXT.prec - 2


class InvoiceTotals(BaseModel):
    """Derived invoice amounts"""

    subtotal: Decimal = Field(default=ZERO, description="Sum of quantity * unit price")
    tax_total: Decimal = Field(default=ZERO, alias="taxTotal", description="Sum of per-line tax")
    grand_total: Decimal = Field(
        default=ZERO,
        alias="grandTotal",
        description="subtotal + tax_total - discount + shipping",
    )

    class Config:
        frozen = True
        populate_by_name = True


def finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


def line_total(item: LineItem) -> Decimal:
    with localcontext(AMOUNT_CONTEXT):
        return finite_or_zero(coerce_amount(item.quantity) * coerce_amount(item.unit_price))


def line_tax(item: LineItem) -> Decimal:
    with localcontext(AMOUNT_CONTEXT):
        return finite_or_zero(line_total(item) * coerce_amount(item.tax_percent) / HUNDRED)


def compute_totals(items: Iterable[LineItem], discount, shipping) -> InvoiceTotals:
    """
    Compute invoice totals

    Args:
        items: Line items of the invoice (may be empty)
        discount: Invoice-level discount, subtracted once
        shipping: Invoice-level shipping, added once (negative values are honored)

    Returns:
        InvoiceTotals with subtotal, tax_total and grand_total
    """
    with localcontext(AMOUNT_CONTEXT):
        subtotal = ZERO
        tax_total = ZERO
        for item in items:
            subtotal += line_total(item)
            tax_total += line_tax(item)
        subtotal = finite_or_zero(subtotal)
        tax_total = finite_or_zero(tax_total)

        grand_total = finite_or_zero(
            subtotal + tax_total - coerce_amount(discount) + coerce_amount(shipping)
        )
    return InvoiceTotals(subtotal=subtotal, tax_total=tax_total, grand_total=grand_total)


def format_currency(currency: str, amount) -> str:
    """
    Format an amount for display, e.g. ("INR", 1234.5) -> "INR 1,234.50"

    The currency code is printed verbatim as a prefix; no lookup is done,
    so unknown codes never fail. A blank code prints the number alone.
    """
    value = coerce_amount(amount)
    if value.adjusted() >= DISPLAY_DIGITS:
        number = f"{value:.6E}"
    else:
        with localcontext(AMOUNT_CONTEXT):
            number = f"{value.quantize(CENT):,.2f}"
    code = (currency or "").strip()
    return f"{code} {number}" if code else number


def plain_number(value) -> str:
    """Shortest fixed-point form of a quantity or percentage, e.g. 2.50 -> "2.5" """
    value = coerce_amount(value)
    with localcontext(AMOUNT_CONTEXT):
        normalized = finite_or_zero(value.normalize())
    if abs(normalized.adjusted()) >= DISPLAY_DIGITS:
        return f"{normalized:E}"
    return f"{normalized:f}"
