"""
Address business logic.
"""

from __future__ import annotations

from core import errors, sanitize, validation

from . import repository, schemas

ADDRESS_RULES = (
    validation.text("street"),
    validation.text("city"),
    validation.text("state"),
    validation.text("zipcode"),
)

ADDRESS_TEXT_FIELDS = ("street", "city", "state", "zipcode")


def to_response(row: dict) -> schemas.AddressResponse:
    cleaned = sanitize.clean_fields(row, ADDRESS_TEXT_FIELDS)
    return schemas.AddressResponse(
        id=int(cleaned["id"]),
        street=str(cleaned["street"]),
        city=str(cleaned["city"]),
        state=str(cleaned["state"]),
        zipcode=str(cleaned["zipcode"]),
    )


async def get_address(address_id: int) -> schemas.AddressResponse:
    row = await repository.get_address(address_id)
    if row is None:
        raise errors.NotFound("The address doesn't exist")
    return to_response(row)


async def create_address(payload: schemas.AddressRequest) -> schemas.AddressResponse:
    fields = payload.model_dump()
    validation.validate(fields, ADDRESS_RULES)
    row = await repository.create_address(fields)
    return to_response(row)


async def update_address(address_id: int, payload: schemas.AddressRequest) -> schemas.AddressResponse:
    fields = payload.model_dump()
    validation.validate(fields, ADDRESS_RULES)
    row = await repository.update_address(address_id, fields)
    if row is None:
        raise errors.NotFound("The address doesn't exist")
    return to_response(row)


async def delete_address(address_id: int) -> dict:
    deleted = await repository.delete_address(address_id)
    if not deleted:
        raise errors.NotFound("The address doesn't exist")
    return {"ok": True, "id": address_id, "message": "The address was deleted"}
