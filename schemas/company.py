"""
Pydantic schemas for the company directory and the transient Party shape.
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, computed_field, field_validator

from schemas.common import CamelModel, RequestModel


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CompanyCreate(RequestModel):
    name: str = Field(..., min_length=1, description="Company name is required")
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[EmailStr] = None
    contact_person: Optional[str] = None
    country: Optional[str] = None
    section: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return _blank_to_none(v)


class CompanyUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[EmailStr] = None
    contact_person: Optional[str] = None
    country: Optional[str] = None
    section: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email(cls, v):
        return _blank_to_none(v)


class CompanyResponse(CamelModel):
    id: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    contact_person: Optional[str] = None
    country: Optional[str] = None
    section: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ShipmentCompanyResponse(CompanyResponse):
    """Company as embedded in a shipment, with the party-shaped aliases the memo form reads."""

    @computed_field(alias="companyName")
    @property
    def company_name(self) -> str:
        return self.name

    @computed_field(alias="attention")
    @property
    def attention(self) -> Optional[str]:
        return self.contact_person


class Party(RequestModel):
    """Company-like contact data typed into a memo before it is a Company row."""
    id: Optional[str] = None
    company_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    attention: Optional[str] = None
    country: Optional[str] = None
    section: Optional[str] = None

    @field_validator("id", "company_name", mode="before")
    @classmethod
    def blank_identity(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return _blank_to_none(v)
