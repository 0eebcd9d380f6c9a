"""Draft API Routes

The invoice builder: open a draft, apply edits, preview and export to PDF.
Drafts live on the client and are sent in full with every request.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from fluxinvoice.api.error import raise_for_error
from fluxinvoice.app.repositories.invoice_store import InvoiceStore
from fluxinvoice.app.services.pdf_service import PdfService
from fluxinvoice.app.use_cases.invoices import (
    DraftStateDTO,
    EditDraft,
    EditDraftCommandDTO,
    ExportInvoicePdf,
    OpenDraft,
    PreviewDraft,
)
from fluxinvoice.depends import (
    get_default_currency,
    get_invoice_store,
    get_pdf_service,
    require_authenticated,
)
from fluxinvoice.domain.invoice_draft import InvoiceDraft

router = APIRouter(
    prefix="/drafts",
    tags=["Drafts"],
    dependencies=[Depends(require_authenticated)],
)


@router.get("/new", response_model=DraftStateDTO)
def open_draft(
    record_id: Optional[str] = Query(default=None, alias="id"),
    invoice_store: InvoiceStore = Depends(get_invoice_store),
    default_currency: str = Depends(get_default_currency),
):
    """
    Open the builder.

    Without `id` a blank draft with one empty row is returned. With `id`
    the invoice staged by `POST /invoices/{id}/edit` is loaded and the
    staging slot is cleared; a stale or missing handoff yields a blank draft.
    """
    result = OpenDraft(invoice_store, default_currency).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/preview", response_model=DraftStateDTO)
def preview_draft(draft: InvoiceDraft):
    """Recompute totals and the rendered preview for a draft"""
    return PreviewDraft().execute(draft).value


@router.post("/operations", response_model=DraftStateDTO)
def edit_draft(command: EditDraftCommandDTO):
    """
    Apply editor operations to a draft.

    **Operations** (applied in order):
    - `{"op": "set_party", "which": "from|to", "patch": {...}}`
    - `{"op": "add_line_item"}`
    - `{"op": "remove_line_item", "itemId": 3}`
    - `{"op": "update_line_item", "itemId": 3, "patch": {"quantity": 2}}`
    - `{"op": "set_charge", "kind": "discount|shipping", "value": 20}`
    - `{"op": "set_meta", "field": "invoiceNumber", "value": "INV-7"}`

    Send `nextItemId` from the previous response so removed item ids are not reused.
    """
    return EditDraft().execute(command).value


@router.post(
    "/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
    },
    status_code=status.HTTP_200_OK,
)
def export_draft_pdf(
    draft: InvoiceDraft,
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Download the draft as `invoice_<invoiceNumber>.pdf`"""
    result = ExportInvoicePdf(pdf_service).execute(draft)
    if result.is_err():
        raise_for_error(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.value.filename}"'
        }
    )
