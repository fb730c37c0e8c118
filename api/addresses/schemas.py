"""
Pydantic schemas for address endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddressRequest(BaseModel):
    street: str | None = Field(default=None, max_length=300)
    city: str | None = Field(default=None, max_length=120)
    state: str | None = Field(default=None, max_length=60)
    zipcode: str | None = Field(default=None, max_length=20)


class AddressResponse(BaseModel):
    id: int
    street: str
    city: str
    state: str
    zipcode: str
