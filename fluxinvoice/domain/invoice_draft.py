"""Invoice Draft Domain Entity

The working aggregate for one invoice being composed.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_validator

from fluxinvoice.domain.base import ZERO, Amount, BaseModel, OptionalText, Text
from fluxinvoice.domain.line_item import LineItem
from fluxinvoice.domain.party import Party


class InvoiceTheme(str, Enum):
    """Named palettes an invoice can be rendered with"""
    CLASSIC = "classic"
    INDIGO = "indigo"
    EMERALD = "emerald"
    ROSE = "rose"
    SLATE = "slate"

    @property
    def palette(self) -> dict:
        return THEME_PALETTES[self]


THEME_PALETTES = {
    InvoiceTheme.CLASSIC: {"primary": "#2C3E50", "accent": "#7F8C8D", "stripe": "#F8F9F9"},
    InvoiceTheme.INDIGO: {"primary": "#4F46E5", "accent": "#6366F1", "stripe": "#EEF2FF"},
    InvoiceTheme.EMERALD: {"primary": "#047857", "accent": "#10B981", "stripe": "#ECFDF5"},
    InvoiceTheme.ROSE: {"primary": "#BE123C", "accent": "#F43F5E", "stripe": "#FFF1F2"},
    InvoiceTheme.SLATE: {"primary": "#334155", "accent": "#64748B", "stripe": "#F1F5F9"},
}


class ChargeKind(str, Enum):
    """Invoice-level adjustments applied once to the grand total"""
    DISCOUNT = "discount"
    SHIPPING = "shipping"


class MetaField(str, Enum):
    """Scalar draft fields settable through DraftEditor.set_meta"""
    ISSUE_DATE = "issueDate"
    DUE_DATE = "dueDate"
    INVOICE_NUMBER = "invoiceNumber"
    CURRENCY = "currency"
    NOTES = "notes"
    TERMS = "terms"
    BANK_NAME = "bankName"
    ACCOUNT_NUMBER = "accountNumber"
    ACCOUNT_NAME = "accountName"
    UPI_ID = "upiId"
    UPI_NAME = "upiName"
    LOGO = "logo"
    SIGNATURE = "signature"
    THEME = "theme"


class InvoiceDraft(BaseModel):
    """
    InvoiceDraft - mutable state of an invoice under construction

    Domain Rules:
    - items may be empty
    - every numeric field is 0 when absent or non-numeric
    - issue_date and due_date are YYYY-MM-DD strings (kept verbatim)
    - invoice_number is free text and not guaranteed unique
    """

    from_party: Party = Field(default_factory=Party, alias="from", description="Sender")
    to_party: Party = Field(default_factory=Party, alias="to", description="Recipient")

    issue_date: Text = Field(default="", alias="issueDate")
    due_date: Text = Field(default="", alias="dueDate")
    invoice_number: Text = Field(default="", alias="invoiceNumber")
    currency: Text = Field(default="INR", description="Currency code (upper-cased), printed verbatim")

    items: List[LineItem] = Field(default_factory=list)

    discount: Amount = Field(default=ZERO, description="Subtracted once from the grand total")
    shipping: Amount = Field(default=ZERO, description="Added once to the grand total")

    notes: Text = ""
    terms: Text = ""

    bank_name: Text = Field(default="", alias="bankName")
    account_number: Text = Field(default="", alias="accountNumber")
    account_name: Text = Field(default="", alias="accountName")
    upi_id: Text = Field(default="", alias="upiId")
    upi_name: Text = Field(default="", alias="upiName")

    logo: OptionalText = Field(default=None, description="Opaque encoded image reference")
    signature: OptionalText = Field(default=None, description="Opaque encoded image reference")
    theme: Optional[InvoiceTheme] = Field(default=None)

    @field_validator("items", mode="before")
    @classmethod
    def coerce_items(cls, v: Any):
        return v if isinstance(v, list) else []

    @field_validator("from_party", "to_party", mode="before")
    @classmethod
    def coerce_party(cls, v: Any):
        return v if isinstance(v, (dict, Party)) else {}

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str):
        return v.strip().upper()

    @field_validator("theme", mode="before")
    @classmethod
    def coerce_theme(cls, v: Any):
        if isinstance(v, InvoiceTheme):
            return v
        if isinstance(v, str):
            try:
                return InvoiceTheme(v.strip().lower())
            except ValueError:
                return None
        return None

    class Config:
        json_schema_extra = {
            "example": {
                "from": {"name": "Acme Studio", "email": "billing@acme.test", "phone": ""},
                "to": {"name": "Globex", "email": "ap@globex.test", "phone": ""},
                "issueDate": "2024-03-01",
                "dueDate": "2024-03-15",
                "invoiceNumber": "INV-0042",
                "currency": "INR",
                "items": [
                    {"id": 1, "name": "Logo design", "quantity": "2", "unitPrice": "100", "taxPercent": "10"}
                ],
                "discount": "20",
                "shipping": "15",
                "notes": "Thank you for your business",
                "terms": "Net 14",
                "theme": "indigo",
            }
        }
