"""
Address persistence (raw SQL).

The `*_with` variants run on a caller-supplied connection so they can take
part in a transaction (see `service_providers/repository.py`). The plain
variants are single statements on the pool.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

_COLUMNS = "id, street, city, state, zipcode"

_INSERT = f"""
    INSERT INTO addresses (street, city, state, zipcode)
    VALUES ($1, $2, $3, $4)
    RETURNING {_COLUMNS}
"""

_UPDATE = f"""
    UPDATE addresses
    SET street = $2,
        city = $3,
        state = $4,
        zipcode = $5
    WHERE id = $1
    RETURNING {_COLUMNS}
"""

_DELETE = "DELETE FROM addresses WHERE id = $1"


def _values(address: dict[str, Any]) -> tuple[Any, ...]:
    return address["street"], address["city"], address["state"], address["zipcode"]


async def insert_address_with(conn: asyncpg.Connection, address: dict[str, Any]) -> dict | None:
    row = await conn.fetchrow(_INSERT, *_values(address))
    return dict(row) if row is not None else None


async def update_address_with(
    conn: asyncpg.Connection,
    address_id: int,
    address: dict[str, Any],
) -> dict | None:
    row = await conn.fetchrow(_UPDATE, address_id, *_values(address))
    return dict(row) if row is not None else None


async def delete_address_with(conn: asyncpg.Connection, address_id: int) -> int:
    status = await conn.execute(_DELETE, address_id)
    return db.rows_affected(status)


async def get_address(address_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM addresses
        WHERE id = $1
        """,
        address_id,
    )


async def create_address(address: dict[str, Any]) -> dict:
    row = await db.fetch_one(_INSERT, *_values(address))
    if row is None:
        raise RuntimeError("Failed to create address.")
    return row


async def update_address(address_id: int, address: dict[str, Any]) -> dict | None:
    return await db.fetch_one(_UPDATE, address_id, *_values(address))


async def delete_address(address_id: int) -> int:
    return await db.execute(_DELETE, address_id)
