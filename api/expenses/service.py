"""
Expense business logic.
"""

from __future__ import annotations

import datetime as dt

from core import errors, sanitize, validation

from . import repository, schemas

EXPENSE_RULES = (
    validation.ident("user_id"),
    validation.ident("type_id"),
    validation.amount("amount"),
    validation.text("name"),
    validation.text("description"),
    validation.day("date"),
)

OWNER_RULES = (validation.ident("user_id"),)


def _format_date(value: object) -> str:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()[:10]
    return str(value)


def _to_response(row: dict) -> schemas.ExpenseResponse:
    return schemas.ExpenseResponse(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        type_id=int(row["type_id"]),
        amount=float(row["amount"]),
        name=sanitize.clean(str(row["name"])),
        description=sanitize.clean(str(row["description"])),
        date=_format_date(row["date"]),
    )


def _fields(payload: schemas.ExpenseRequest) -> dict:
    return {
        "user_id": payload.user_id,
        "type_id": payload.type_id,
        "amount": payload.amount,
        "name": payload.name,
        "description": payload.description,
        "date": payload.date,
    }


async def expenses_for_user(user_id: int) -> list[schemas.ExpenseResponse]:
    rows = await repository.list_expenses_for_user(user_id)
    return [_to_response(row) for row in rows]


async def get_expense(expense_id: int) -> schemas.ExpenseResponse:
    row = await repository.get_expense(expense_id)
    if row is None:
        raise errors.NotFound("The expense doesn't exist")
    return _to_response(row)


async def create_expense(payload: schemas.ExpenseRequest) -> schemas.ExpenseResponse:
    fields = _fields(payload)
    validation.validate(fields, EXPENSE_RULES)
    row = await repository.create_expense(**fields)
    return _to_response(row)


async def update_expense(expense_id: int, payload: schemas.ExpenseRequest) -> schemas.ExpenseResponse:
    fields = _fields(payload)
    validation.validate(fields, EXPENSE_RULES)
    row = await repository.update_expense(expense_id, **fields)
    if row is None:
        raise errors.NotFound("The expense doesn't exist")
    return _to_response(row)


async def delete_expense(expense_id: int, payload: schemas.OwnerRequest) -> dict:
    validation.validate(payload.model_dump(), OWNER_RULES)
    deleted = await repository.delete_expense(expense_id, user_id=payload.user_id)
    if not deleted:
        raise errors.NotFound("The expense doesn't exist")
    return {"ok": True, "id": expense_id, "message": "The expense was deleted"}
