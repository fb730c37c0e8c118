"""
User persistence helpers.
"""

from __future__ import annotations

from core import db


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def create_user(*, username: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (username, password)
        VALUES ($1, $2)
        RETURNING id, username, password
        """,
        normalize_username(username),
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, password
        FROM users
        WHERE username = $1
        """,
        normalize_username(username),
    )


async def update_password(*, user_id: int, current_hash: str, new_hash: str) -> dict | None:
    # Matching on the old hash keeps a concurrent password change from being overwritten.
    return await db.fetch_one(
        """
        UPDATE users
        SET password = $3
        WHERE id = $1
          AND password = $2
        RETURNING id, username, password
        """,
        user_id,
        current_hash,
        new_hash,
    )


async def delete_user(user_id: int) -> int:
    # Providers and expenses go with the user through ON DELETE CASCADE; the
    # providers' addresses have to be removed by hand.
    async with db.transaction() as conn:
        rows = await conn.fetch(
            """
            SELECT address_id
            FROM serviceproviders
            WHERE user_id = $1
            FOR UPDATE
            """,
            user_id,
        )
        address_ids = [row["address_id"] for row in rows]

        status = await conn.execute("DELETE FROM users WHERE id = $1", user_id)
        deleted = db.rows_affected(status)
        if deleted and address_ids:
            await conn.execute("DELETE FROM addresses WHERE id = ANY($1::bigint[])", address_ids)
    return deleted
