"""
Service-provider API endpoints.

Reads by id are served on POST as well as GET; existing clients use POST.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post(
    "/serviceproviders",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ServiceProviderResponse,
)
async def create_service_provider(request: schemas.ServiceProviderRequest) -> schemas.ServiceProviderResponse:
    return await service.create_provider(request)


@router.post("/serviceproviders/all/{user_id}", response_model=list[schemas.ServiceProviderResponse])
async def list_user_service_providers(user_id: int) -> list[schemas.ServiceProviderResponse]:
    return await service.providers_for_user(user_id)


@router.api_route(
    "/serviceproviders/{id}",
    methods=["GET", "POST"],
    response_model=schemas.ServiceProviderResponse,
)
async def get_service_provider(id: int) -> schemas.ServiceProviderResponse:
    return await service.get_provider(id)


@router.put(
    "/serviceproviders/{id}",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ServiceProviderResponse,
)
async def update_service_provider(
    id: int,
    request: schemas.ServiceProviderRequest,
) -> schemas.ServiceProviderResponse:
    return await service.update_provider(id, request)


@router.delete("/serviceproviders/{id}")
async def delete_service_provider(id: int, request: schemas.OwnerRequest) -> dict:
    return await service.delete_provider(id, request)
