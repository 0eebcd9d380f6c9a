"""Invoice API Routes

FastAPI routes for the saved invoice collection.
"""

from fastapi import APIRouter, Depends, Query, status

from fluxinvoice.api.error import raise_for_error
from fluxinvoice.api.schemas.invoice_request import (
    EditHandoffResponseSchema,
    SaveInvoiceRequestSchema,
)
from fluxinvoice.app.repositories.invoice_store import InvoiceStore, SortMode
from fluxinvoice.app.services.draft_editor import DraftEditor
from fluxinvoice.app.use_cases.invoices import (
    DeleteInvoice,
    DeleteInvoiceResponseDTO,
    DuplicateInvoice,
    GetInvoice,
    ListInvoices,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    SaveInvoice,
    SaveInvoiceCommandDTO,
    StageInvoiceEdit,
)
from fluxinvoice.depends import get_invoice_store, require_authenticated
from fluxinvoice.domain.saved_invoice import SavedInvoiceRecord

router = APIRouter(
    prefix="/invoices",
    tags=["Invoices"],
    dependencies=[Depends(require_authenticated)],
)

NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice with ID 3f2a... not found"
                }
            }
        }
    }
}


def storage_failure_response(code: str) -> dict:
    return {
        "description": "Change was not persisted",
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": "Invoice could not be saved"}}
            }
        }
    }


@router.get("", response_model=ListInvoicesResponseDTO)
def list_invoices(
    query: str = Query(default="", description="Matches invoice number, client or sender name"),
    sort: SortMode = Query(default=SortMode.NEWEST_FIRST),
    invoice_store: InvoiceStore = Depends(get_invoice_store),
):
    """
    List saved invoices.

    **Query parameters:**
    - `query` (optional): case-insensitive substring filter
    - `sort` (optional): `new` (default), `old`, `amountDesc`, `amountAsc`
    """
    result = ListInvoices(invoice_store).execute(ListInvoicesQueryDTO(query=query, sort=sort))
    return result.value


@router.get(
    "/{record_id}",
    response_model=SavedInvoiceRecord,
    responses={404: NOT_FOUND_RESPONSE},
)
def get_invoice(record_id: str, invoice_store: InvoiceStore = Depends(get_invoice_store)):
    result = GetInvoice(invoice_store).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "",
    response_model=SavedInvoiceRecord,
    status_code=status.HTTP_201_CREATED,
    responses={404: NOT_FOUND_RESPONSE, 507: storage_failure_response("SAVE_FAILED")},
)
def save_invoice(
    request: SaveInvoiceRequestSchema,
    invoice_store: InvoiceStore = Depends(get_invoice_store),
):
    """
    Save the current draft.

    The grand total is computed from the submitted draft and frozen into
    the record. With `sourceRecordId` (save after Edit) the original record
    is overwritten in place; otherwise a new record is appended.

    **Returns:**
    - 201: Saved record
    - 404: `sourceRecordId` no longer exists
    - 507: Storage refused the write; nothing was saved
    """
    editor = DraftEditor(request.draft)
    command = SaveInvoiceCommandDTO(
        draft=editor.snapshot(),
        total=editor.totals.grand_total,
        source_record_id=request.source_record_id,
    )
    result = SaveInvoice(invoice_store).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{record_id}/duplicate",
    response_model=SavedInvoiceRecord,
    status_code=status.HTTP_201_CREATED,
    responses={404: NOT_FOUND_RESPONSE, 507: storage_failure_response("DUPLICATE_FAILED")},
)
def duplicate_invoice(record_id: str, invoice_store: InvoiceStore = Depends(get_invoice_store)):
    """Copy a saved invoice under a new id with `-COPY` appended to its number"""
    result = DuplicateInvoice(invoice_store).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{record_id}",
    response_model=DeleteInvoiceResponseDTO,
    responses={507: storage_failure_response("DELETE_FAILED")},
)
def delete_invoice(record_id: str, invoice_store: InvoiceStore = Depends(get_invoice_store)):
    """Delete a saved invoice; unknown ids return `deleted: false`"""
    result = DeleteInvoice(invoice_store).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{record_id}/edit",
    response_model=EditHandoffResponseSchema,
    responses={404: NOT_FOUND_RESPONSE, 507: storage_failure_response("EDIT_HANDOFF_FAILED")},
)
def stage_invoice_edit(record_id: str, invoice_store: InvoiceStore = Depends(get_invoice_store)):
    """Stage a saved invoice for the builder; follow `draftPath` to open it"""
    result = StageInvoiceEdit(invoice_store).execute(record_id)
    if result.is_err():
        raise_for_error(result.error)
    return EditHandoffResponseSchema(
        record_id=result.value.id,
        draft_path=f"/drafts/new?id={result.value.id}",
    )
