"""Line Item Domain Entity

One billable row of an invoice.
"""

from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BeforeValidator, Field

from fluxinvoice.domain.base import ZERO, Amount, BaseModel, Text


def coerce_item_id(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("line item id must be an integer")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    return value


ItemId = Annotated[int, BeforeValidator(coerce_item_id)]


class LineItem(BaseModel):
    """
    LineItem - quantity x unit price with its own tax rate

    Domain Rules:
    - id is unique within the owning invoice and never reused after removal
    - line total (quantity * unit_price) is derived, never stored
    - tax_percent is taken as given (0-100 expected, not clamped)
    """

    id: ItemId = Field(description="Identifier unique within the invoice")

    name: Text = Field(default="", description="Item name")

    quantity: Amount = Field(
        default=ZERO,
        validation_alias=AliasChoices("quantity", "qty"),
        description="Quantity (non-numeric input counts as 0)",
    )

    unit_price: Amount = Field(
        default=ZERO,
        alias="unitPrice",
        validation_alias=AliasChoices("unitPrice", "unit_price", "rate"),
        description="Price per unit",
    )

    description: Text = Field(default="", description="Optional longer description")

    tax_percent: Amount = Field(
        default=ZERO,
        alias="taxPercent",
        validation_alias=AliasChoices("taxPercent", "tax_percent", "taxPct"),
        description="Tax rate applied to this line's pre-tax amount",
    )

    def merged(self, patch: "LineItemPatch") -> "LineItem":
        """Return a copy with the explicitly set fields of patch applied; id is kept"""
        data = self.model_dump()
        data.update(patch.model_dump(exclude_unset=True))
        data["id"] = self.id
        return LineItem.model_validate(data)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Logo design",
                "quantity": "2",
                "unitPrice": "100",
                "description": "Two concepts, three revisions",
                "taxPercent": "10",
            }
        }


class LineItemPatch(BaseModel):
    """Partial LineItem update; the id cannot be patched"""

    name: Optional[Text] = None
    quantity: Optional[Amount] = None
    unit_price: Optional[Amount] = Field(default=None, alias="unitPrice")
    description: Optional[Text] = None
    tax_percent: Optional[Amount] = Field(default=None, alias="taxPercent")
