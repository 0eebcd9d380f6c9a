"""Party Domain Entity

A billing participant, either the sender or the recipient of an invoice.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from fluxinvoice.domain.base import BaseModel, Text


class PartyRole(str, Enum):
    """Which side of the invoice a party sits on"""
    FROM = "from"
    TO = "to"


class Party(BaseModel):
    """
    Party - sender or recipient embedded in an invoice

    All fields are free text and are kept exactly as entered.
    """

    name: Text = Field(default="", description="Person or business name")
    email: Text = Field(default="", description="Contact email")
    phone: Text = Field(default="", description="Contact phone")
    address: Text = Field(default="", description="Street address")
    city: Text = Field(default="", description="City")
    zip: Text = Field(default="", description="Postal code")
    country: Text = Field(default="", description="Country")

    def merged(self, patch: "PartyPatch") -> "Party":
        """Return a copy with the explicitly set fields of patch applied"""
        data = self.model_dump()
        data.update(patch.model_dump(exclude_unset=True))
        return Party.model_validate(data)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Studio",
                "email": "billing@acme.test",
                "phone": "+91 98765 43210",
                "address": "12 MG Road",
                "city": "Bengaluru",
                "zip": "560001",
                "country": "India",
            }
        }


class PartyPatch(BaseModel):
    """Partial Party update; unset fields leave the existing value alone"""

    name: Optional[Text] = None
    email: Optional[Text] = None
    phone: Optional[Text] = None
    address: Optional[Text] = None
    city: Optional[Text] = None
    zip: Optional[Text] = None
    country: Optional[Text] = None
