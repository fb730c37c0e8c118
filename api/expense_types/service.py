"""
Type catalog business logic.

Types are a shared lookup used by expenses and service providers.
"""

from __future__ import annotations

from core import errors, sanitize, validation

from . import repository, schemas

TYPE_RULES = (
    validation.text("name"),
    validation.text("description"),
)


def _to_response(row: dict) -> schemas.TypeResponse:
    return schemas.TypeResponse(
        id=int(row["id"]),
        name=sanitize.clean(str(row["name"])),
        description=sanitize.clean(str(row["description"])),
    )


async def all_types() -> list[schemas.TypeResponse]:
    rows = await repository.list_types()
    if not rows:
        raise errors.NotFound("There are no types available")
    return [_to_response(row) for row in rows]


async def get_type(type_id: int) -> schemas.TypeResponse:
    row = await repository.get_type(type_id)
    if row is None:
        raise errors.NotFound("The type doesn't exist")
    return _to_response(row)


async def create_type(payload: schemas.TypeRequest) -> schemas.TypeResponse:
    validation.validate(payload.model_dump(), TYPE_RULES)
    row = await repository.create_type(name=payload.name, description=payload.description)
    return _to_response(row)


async def update_type(type_id: int, payload: schemas.TypeRequest) -> schemas.TypeResponse:
    validation.validate(payload.model_dump(), TYPE_RULES)
    row = await repository.update_type(type_id, name=payload.name, description=payload.description)
    if row is None:
        raise errors.NotFound("The type doesn't exist")
    return _to_response(row)


async def delete_type(type_id: int) -> dict:
    deleted = await repository.delete_type(type_id)
    if not deleted:
        raise errors.NotFound("The type doesn't exist")
    return {"ok": True, "id": type_id, "message": "The type was deleted"}
