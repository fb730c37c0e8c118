"""
Type catalog persistence (raw SQL).
"""

from __future__ import annotations

from core import db


async def list_types() -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, description
        FROM types
        ORDER BY id ASC
        """
    )


async def get_type(type_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, description
        FROM types
        WHERE id = $1
        """,
        type_id,
    )


async def create_type(*, name: str, description: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO types (name, description)
        VALUES ($1, $2)
        RETURNING id, name, description
        """,
        name,
        description,
    )
    if row is None:
        raise RuntimeError("Failed to create type.")
    return row


async def update_type(type_id: int, *, name: str, description: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE types
        SET name = $2,
            description = $3
        WHERE id = $1
        RETURNING id, name, description
        """,
        type_id,
        name,
        description,
    )


async def delete_type(type_id: int) -> int:
    return await db.execute(
        """
        DELETE FROM types
        WHERE id = $1
        """,
        type_id,
    )
