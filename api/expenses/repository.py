"""
Expense persistence (raw SQL).
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from core import db

_COLUMNS = "id, user_id, type_id, amount, name, description, date"


async def list_expenses_for_user(user_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM expenses
        WHERE user_id = $1
        ORDER BY date DESC, id DESC
        """,
        user_id,
    )


async def get_expense(expense_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM expenses
        WHERE id = $1
        """,
        expense_id,
    )


async def create_expense(
    *,
    user_id: int,
    type_id: int,
    amount: Decimal,
    name: str,
    description: str,
    date: dt.date,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO expenses (user_id, type_id, amount, name, description, date)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {_COLUMNS}
        """,
        user_id,
        type_id,
        amount,
        name,
        description,
        date,
    )
    if row is None:
        raise RuntimeError("Failed to create expense.")
    return row


async def update_expense(
    expense_id: int,
    *,
    user_id: int,
    type_id: int,
    amount: Decimal,
    name: str,
    description: str,
    date: dt.date,
) -> dict | None:
    """
    Update an expense owned by `user_id`; None when no such (id, user_id) row exists.
    """
    return await db.fetch_one(
        f"""
        UPDATE expenses
        SET type_id = $3,
            amount = $4,
            name = $5,
            description = $6,
            date = $7
        WHERE id = $1
          AND user_id = $2
        RETURNING {_COLUMNS}
        """,
        expense_id,
        user_id,
        type_id,
        amount,
        name,
        description,
        date,
    )


async def delete_expense(expense_id: int, *, user_id: int) -> int:
    return await db.execute(
        """
        DELETE FROM expenses
        WHERE id = $1
          AND user_id = $2
        """,
        expense_id,
        user_id,
    )
