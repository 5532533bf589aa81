"""Pydantic request models for the Clinic Medicine Finder API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def _not_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value.strip() if value is not None else None


class ClinicCreate(BaseModel):
    name: str = Field(..., description="Clinic display name")
    address: str = Field(..., description="Street address")
    phone: str = Field("", description="Contact phone number")
    email: str = Field("", description="Contact email")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    operating_hours: str = Field("", description="Free text, e.g. 'Mon-Fri 08:00-18:00'")
    verified: bool = Field(False, description="Whether the clinic has been verified")

    @field_validator("name", "address")
    @classmethod
    def check_not_blank(cls, value):
        return _not_blank(value)


class ClinicUpdate(BaseModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    operating_hours: str | None = None
    verified: bool | None = None

    @field_validator("name", "address")
    @classmethod
    def check_not_blank(cls, value):
        return _not_blank(value)


class InventoryCreate(BaseModel):
    medicine_name: str = Field(..., description="Medicine name, e.g. 'Paracetamol'")
    dosage: str = Field(..., description="Dosage, e.g. '500mg'")
    quantity: int = Field(..., ge=0, description="Units in stock")
    price: float | None = Field(None, ge=0, description="Unit price")

    @field_validator("medicine_name", "dosage")
    @classmethod
    def check_not_blank(cls, value):
        return _not_blank(value)


class InventoryUpdate(BaseModel):
    medicine_name: str | None = None
    dosage: str | None = None
    quantity: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)

    @field_validator("medicine_name", "dosage")
    @classmethod
    def check_not_blank(cls, value):
        return _not_blank(value)
