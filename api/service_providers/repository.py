"""
Service-provider persistence (raw SQL).

A service provider row always points at its own address row. Every write
that touches both tables runs in a single transaction: raising inside the
`db.transaction()` block rolls back whatever was already written.
"""

from __future__ import annotations

from typing import Any

from addresses import repository as address_repository
from core import db, errors

_PROVIDER_COLUMNS = "id, user_id, type_id, address_id, name, description, telephone, email"

_SELECT_JOINED = """
    SELECT sp.id, sp.user_id, sp.type_id, sp.address_id,
           sp.name, sp.description, sp.telephone, sp.email,
           a.street, a.city, a.state, a.zipcode
    FROM serviceproviders sp
    INNER JOIN addresses a ON sp.address_id = a.id
"""


async def get_joined(provider_id: int) -> dict | None:
    return await db.fetch_one(
        _SELECT_JOINED + "WHERE sp.id = $1",
        provider_id,
    )


async def list_joined_for_user(user_id: int) -> list[dict]:
    return await db.fetch_all(
        _SELECT_JOINED + "WHERE sp.user_id = $1 ORDER BY sp.id ASC",
        user_id,
    )


async def create_with_address(
    provider: dict[str, Any],
    address: dict[str, Any],
) -> tuple[dict, dict]:
    """
    Insert the address, then the provider pointing at it.

    Returns (provider_row, address_row).
    """
    async with db.transaction() as conn:
        address_row = await address_repository.insert_address_with(conn, address)
        if address_row is None:
            raise errors.DependencyCreateFailed("Address couldn't be created")

        row = await conn.fetchrow(
            f"""
            INSERT INTO serviceproviders (user_id, type_id, address_id, name, description, telephone, email)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {_PROVIDER_COLUMNS}
            """,
            provider["user_id"],
            provider["type_id"],
            int(address_row["id"]),
            provider["name"],
            provider["description"],
            provider["telephone"],
            provider["email"],
        )
        if row is None:
            raise errors.DependencyCreateFailed("Service Provider couldn't be created")

        return dict(row), address_row


async def update_with_address(
    provider_id: int,
    provider: dict[str, Any],
    address: dict[str, Any],
) -> tuple[dict, dict]:
    """
    Update the provider matched by (id, user_id), then its address.

    Returns (provider_row, address_row).
    """
    async with db.transaction() as conn:
        row = await conn.fetchrow(
            f"""
            UPDATE serviceproviders
            SET type_id = $3,
                name = $4,
                description = $5,
                telephone = $6,
                email = $7
            WHERE id = $1
              AND user_id = $2
            RETURNING {_PROVIDER_COLUMNS}
            """,
            provider_id,
            provider["user_id"],
            provider["type_id"],
            provider["name"],
            provider["description"],
            provider["telephone"],
            provider["email"],
        )
        if row is None:
            raise errors.NotFound("Service Provider couldn't be updated")

        provider_row = dict(row)
        address_row = await address_repository.update_address_with(
            conn,
            int(provider_row["address_id"]),
            address,
        )
        if address_row is None:
            raise errors.NotFound("Address couldn't be updated")

        return provider_row, address_row


async def delete_with_address(provider_id: int, *, user_id: int) -> int:
    """
    Delete the provider owned by `user_id` and its address.

    The provider goes first so the foreign key holds. Returns the deleted
    address id.
    """
    async with db.transaction() as conn:
        row = await conn.fetchrow(
            """
            SELECT address_id
            FROM serviceproviders
            WHERE id = $1
              AND user_id = $2
            FOR UPDATE
            """,
            provider_id,
            user_id,
        )
        if row is None or row["address_id"] is None:
            raise errors.NotFound("The service provider doesn't exist")
        address_id = int(row["address_id"])

        status = await conn.execute(
            """
            DELETE FROM serviceproviders
            WHERE id = $1
              AND user_id = $2
            """,
            provider_id,
            user_id,
        )
        if not db.rows_affected(status):
            raise errors.NotFound("The service provider couldn't be deleted")

        if not await address_repository.delete_address_with(conn, address_id):
            raise errors.NotFound("The address for the service provider couldn't be deleted")

        return address_id
