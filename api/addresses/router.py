"""
Address API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/addresses", status_code=status.HTTP_201_CREATED, response_model=schemas.AddressResponse)
async def create_address(request: schemas.AddressRequest) -> schemas.AddressResponse:
    return await service.create_address(request)


@router.post("/addresses/{id}", response_model=schemas.AddressResponse)
async def get_address(id: int) -> schemas.AddressResponse:
    return await service.get_address(id)


@router.put("/addresses/{id}", status_code=status.HTTP_201_CREATED, response_model=schemas.AddressResponse)
async def update_address(id: int, request: schemas.AddressRequest) -> schemas.AddressResponse:
    return await service.update_address(id, request)


@router.delete("/addresses/{id}")
async def delete_address(id: int) -> dict:
    return await service.delete_address(id)
