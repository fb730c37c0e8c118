"""
Pydantic schemas for expense endpoints.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class ExpenseRequest(BaseModel):
    user_id: int | None = None
    type_id: int | None = None
    amount: Decimal | None = None
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    date: dt.date | None = None


class OwnerRequest(BaseModel):
    user_id: int | None = None


class ExpenseResponse(BaseModel):
    id: int
    user_id: int
    type_id: int
    amount: float
    name: str
    description: str
    date: str
