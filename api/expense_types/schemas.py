"""
Pydantic schemas for type endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TypeRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class TypeResponse(BaseModel):
    id: int
    name: str
    description: str
