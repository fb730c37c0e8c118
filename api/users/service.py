"""
User business logic: registration, authentication, password changes.
"""

from __future__ import annotations

import logging

from auth import security
from core import errors, sanitize, validation

from . import repository, schemas

logger = logging.getLogger(__name__)

CREDENTIAL_RULES = (
    validation.text("username"),
    validation.text("password"),
)

CHANGE_PASSWORD_RULES = CREDENTIAL_RULES + (validation.text("newPassword"),)

# bcrypt rejects secrets longer than this many bytes.
MAX_PASSWORD_BYTES = 72


def _check_password_size(field: str, password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise errors.ValidationFailed(f"{field} must be at most {MAX_PASSWORD_BYTES} bytes")


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=sanitize.clean(str(user_row["username"])),
    )


async def _authenticated_row(username: str, password: str) -> dict:
    user_row = await repository.get_user_by_username(username)
    if user_row is None:
        raise errors.NotFound("User doesn't exist")

    if not security.verify_password(password, str(user_row.get("password") or "")):
        raise errors.NotFound("password is invalid")
    return user_row


async def register(payload: schemas.CredentialsRequest) -> schemas.UserResponse:
    validation.validate(payload.model_dump(), CREDENTIAL_RULES)

    existing = await repository.get_user_by_username(payload.username)
    if existing is not None:
        raise errors.ValidationFailed("username already exists")

    _check_password_size("password", payload.password)
    password_hash = security.hash_password(payload.password)
    user_row = await repository.create_user(username=payload.username, password_hash=password_hash)
    logger.info("user_created user_id=%s", user_row["id"])
    return _to_user_response(user_row)


async def authenticate(payload: schemas.CredentialsRequest) -> schemas.UserResponse:
    validation.validate(payload.model_dump(), CREDENTIAL_RULES)
    user_row = await _authenticated_row(payload.username, payload.password)
    return _to_user_response(user_row)


async def change_password(payload: schemas.ChangePasswordRequest) -> schemas.UserResponse:
    validation.validate(payload.model_dump(by_alias=True), CHANGE_PASSWORD_RULES)
    _check_password_size("newPassword", payload.new_password)
    user_row = await _authenticated_row(payload.username, payload.password)

    updated = await repository.update_password(
        user_id=int(user_row["id"]),
        current_hash=str(user_row["password"]),
        new_hash=security.hash_password(payload.new_password),
    )
    if updated is None:
        raise errors.NotFound("User doesn't exist")
    logger.info("password_changed user_id=%s", updated["id"])
    return _to_user_response(updated)


async def delete(payload: schemas.CredentialsRequest) -> dict:
    validation.validate(payload.model_dump(), CREDENTIAL_RULES)
    user_row = await _authenticated_row(payload.username, payload.password)

    user_id = int(user_row["id"])
    deleted = await repository.delete_user(user_id)
    if not deleted:
        raise errors.NotFound("User doesn't exist")
    logger.info("user_deleted user_id=%s", user_id)
    return {"ok": True, "id": user_id, "message": "The user was deleted"}
