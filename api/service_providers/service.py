"""
Service-provider business logic.

A service provider and its address are one logical resource: they are
created, updated and deleted together (see `repository.py`) and always
returned nested:

    {"id": 1, ..., "address_id": 7, "address": {"id": 7, "street": ...}}
"""

from __future__ import annotations

import logging

from addresses import service as address_service
from core import errors, sanitize, validation

from . import repository, schemas

logger = logging.getLogger(__name__)

PROVIDER_RULES = (
    validation.ident("user_id"),
    validation.ident("type_id"),
    validation.text("name"),
    validation.text("description"),
    validation.text("telephone"),
    validation.text("email"),
)

OWNER_RULES = (validation.ident("user_id"),)

PROVIDER_TEXT_FIELDS = ("name", "description", "telephone", "email")
_ADDRESS_FIELDS = ("street", "city", "state", "zipcode")


def _nest(provider_row: dict, address_row: dict) -> schemas.ServiceProviderResponse:
    cleaned = sanitize.clean_fields(provider_row, PROVIDER_TEXT_FIELDS)
    return schemas.ServiceProviderResponse(
        id=int(cleaned["id"]),
        user_id=int(cleaned["user_id"]),
        type_id=int(cleaned["type_id"]),
        address_id=int(cleaned["address_id"]),
        name=str(cleaned["name"]),
        description=str(cleaned["description"]),
        telephone=str(cleaned["telephone"]),
        email=str(cleaned["email"]),
        address=address_service.to_response(address_row),
    )


def _from_joined(row: dict) -> schemas.ServiceProviderResponse:
    # Joined rows are flat; the address id travels as address_id.
    address_row = {"id": row["address_id"], **{field: row[field] for field in _ADDRESS_FIELDS}}
    return _nest(row, address_row)


def _validated_parts(payload: schemas.ServiceProviderRequest) -> tuple[dict, dict]:
    provider = payload.model_dump(exclude={"address"})
    validation.validate(provider, PROVIDER_RULES)

    if payload.address is None:
        raise errors.ValidationFailed("address is mandatory")
    address = payload.address.model_dump()
    validation.validate(address, address_service.ADDRESS_RULES)
    return provider, address


async def get_provider(provider_id: int) -> schemas.ServiceProviderResponse:
    row = await repository.get_joined(provider_id)
    if row is None:
        raise errors.NotFound("The service provider doesn't exist")
    return _from_joined(row)


async def providers_for_user(user_id: int) -> list[schemas.ServiceProviderResponse]:
    rows = await repository.list_joined_for_user(user_id)
    return [_from_joined(row) for row in rows]


async def create_provider(payload: schemas.ServiceProviderRequest) -> schemas.ServiceProviderResponse:
    provider, address = _validated_parts(payload)
    provider_row, address_row = await repository.create_with_address(provider, address)
    logger.info(
        "service_provider_created id=%s user_id=%s address_id=%s",
        provider_row["id"],
        provider_row["user_id"],
        provider_row["address_id"],
    )
    return _nest(provider_row, address_row)


async def update_provider(
    provider_id: int,
    payload: schemas.ServiceProviderRequest,
) -> schemas.ServiceProviderResponse:
    provider, address = _validated_parts(payload)
    provider_row, address_row = await repository.update_with_address(provider_id, provider, address)
    return _nest(provider_row, address_row)


async def delete_provider(provider_id: int, payload: schemas.OwnerRequest) -> dict:
    validation.validate(payload.model_dump(), OWNER_RULES)
    address_id = await repository.delete_with_address(provider_id, user_id=payload.user_id)
    logger.info("service_provider_deleted id=%s address_id=%s", provider_id, address_id)
    return {"ok": True, "id": provider_id, "message": "The service provider was deleted"}
