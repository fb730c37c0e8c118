"""
Pydantic schemas for service-provider endpoints.

A service provider is always exchanged with its address nested under
`address`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from addresses.schemas import AddressRequest, AddressResponse


class ServiceProviderRequest(BaseModel):
    user_id: int | None = None
    type_id: int | None = None
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    telephone: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=320)
    address: AddressRequest | None = None


class OwnerRequest(BaseModel):
    user_id: int | None = None


class ServiceProviderResponse(BaseModel):
    id: int
    user_id: int
    type_id: int
    address_id: int
    name: str
    description: str
    telephone: str
    email: str
    address: AddressResponse
