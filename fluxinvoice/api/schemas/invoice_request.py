"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional
from pydantic import BaseModel, Field

from fluxinvoice.domain.invoice_draft import InvoiceDraft


class SaveInvoiceRequestSchema(BaseModel):
    """
    Request schema for saving an invoice

    Used for POST /invoices endpoint. The grand total is computed from the
    submitted draft at save time and frozen into the record.
    """

    draft: InvoiceDraft = Field(
        ...,
        description="Complete draft as currently shown in the builder"
    )

    source_record_id: Optional[str] = Field(
        default=None,
        alias="sourceRecordId",
        description="Set when saving after Edit; overwrites that record in place"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "draft": {
                    "from": {"name": "Acme Studio"},
                    "to": {"name": "Globex"},
                    "invoiceNumber": "INV-0042",
                    "currency": "INR",
                    "items": [{"id": 1, "name": "Logo design", "quantity": 2, "unitPrice": 100, "taxPercent": 10}],
                    "discount": 20,
                    "shipping": 15,
                },
                "sourceRecordId": None,
            }
        }


class EditHandoffResponseSchema(BaseModel):
    """Response for POST /invoices/{id}/edit"""

    record_id: str = Field(..., alias="recordId")

    draft_path: str = Field(
        ...,
        alias="draftPath",
        description="Builder path that picks up the staged invoice"
    )

    class Config:
        populate_by_name = True


class SessionResponseSchema(BaseModel):
    authenticated: bool
