"""
Type catalog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/types", status_code=status.HTTP_201_CREATED, response_model=schemas.TypeResponse)
async def create_type(request: schemas.TypeRequest) -> schemas.TypeResponse:
    return await service.create_type(request)


# Registered before /types/{id} so "all" is not parsed as an id.
@router.get("/types/all", response_model=list[schemas.TypeResponse])
async def get_all_types() -> list[schemas.TypeResponse]:
    return await service.all_types()


@router.get("/types/{id}", response_model=schemas.TypeResponse)
async def get_type(id: int) -> schemas.TypeResponse:
    return await service.get_type(id)


@router.put("/types/{id}", status_code=status.HTTP_201_CREATED, response_model=schemas.TypeResponse)
async def update_type(id: int, request: schemas.TypeRequest) -> schemas.TypeResponse:
    return await service.update_type(id, request)


@router.delete("/types/{id}")
async def delete_type(id: int) -> dict:
    return await service.delete_type(id)
