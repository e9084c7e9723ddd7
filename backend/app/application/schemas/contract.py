"""Pydantic DTOs (Data Transfer Objects) for the Contract feature.

The wire format is camelCase; Python code uses snake_case attributes.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def iso_timestamp(value: Any) -> str:
    """ISO-8601 string for a datetime; "" for missing or invalid values."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value).isoformat()
        except ValueError:
            return ""
    return ""


class ContractCreate(BaseModel):
    """Schema for creating a contract.

    Required fields are checked by the domain so that a missing field
    yields a ``ValidationError`` naming it rather than a schema error.
    """

    model_config = _CAMEL

    city: str | None = Field(None, max_length=100, examples=["Beijing"])
    address: str | None = Field(None, max_length=255, examples=["1 Main St"])
    driver_name: str | None = Field(None, max_length=100, examples=["Li Wei"])
    id_number: str | None = Field(None, max_length=32, examples=["110101199001011234"])
    birthday: str | None = Field(None, max_length=32, examples=["1990-01-01"])
    extra_notes: str | None = Field(None, max_length=2000)


class ContractUpdate(BaseModel):
    """Schema for a partial update — empty or absent fields keep stored values."""

    model_config = _CAMEL

    city: str | None = Field(None, max_length=100)
    address: str | None = Field(None, max_length=255)
    driver_name: str | None = Field(None, max_length=100)
    id_number: str | None = Field(None, max_length=32)
    birthday: str | None = Field(None, max_length=32)
    extra_notes: str | None = Field(None, max_length=2000)


class ContractOut(BaseModel):
    """A contract as returned to the client, with its temporary PDF URL."""

    model_config = _CAMEL

    id: str
    city: str
    address: str
    driver_name: str
    id_number: str
    birthday: str
    extra_notes: str
    created_by: str
    created_at: str
    updated_at: str
    document_ref: str
    document_status: str
    pdf_url: str = ""


class ContractEnvelope(BaseModel):
    contract: ContractOut


class ContractListResponse(BaseModel):
    contracts: list[ContractOut]
    role: str


class MessageResponse(BaseModel):
    message: str
