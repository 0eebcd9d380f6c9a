"""Draft editing Use Cases

PreviewDraft recomputes totals and the preview for a draft as submitted;
EditDraft first applies a batch of editor operations to it.
"""

from fluxinvoice.libs.result import Result, Return
from fluxinvoice.app.services.draft_editor import DraftEditor
from fluxinvoice.domain.invoice_draft import InvoiceDraft
from .dtos import DraftStateDTO, EditDraftCommandDTO


class PreviewDraft:

    def execute(self, draft: InvoiceDraft) -> Result[DraftStateDTO]:
        return Return.ok(DraftStateDTO.from_editor(DraftEditor(draft)))


class EditDraft:
    """
    Use Case: Apply editor operations to a draft

    Operations run in order through DraftEditor, so unknown item ids are
    no-ops and numeric input is coerced exactly as in interactive editing.
    """

    def execute(self, command: EditDraftCommandDTO) -> Result[DraftStateDTO]:
        editor = DraftEditor(
            command.draft,
            source_record_id=command.source_record_id,
            next_item_id=command.next_item_id,
        )
        for operation in command.operations:
            operation.apply(editor)
        return Return.ok(DraftStateDTO.from_editor(editor))
