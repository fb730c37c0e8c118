"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=schemas.UserResponse)
async def create_user(request: schemas.CredentialsRequest) -> schemas.UserResponse:
    return await service.register(request)


@router.post("/users/auth", response_model=schemas.UserResponse)
async def authenticate_user(request: schemas.CredentialsRequest) -> schemas.UserResponse:
    return await service.authenticate(request)


@router.api_route(
    "/users",
    methods=["PUT", "PATCH"],
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.UserResponse,
)
async def change_password(request: schemas.ChangePasswordRequest) -> schemas.UserResponse:
    return await service.change_password(request)


@router.delete("/users")
async def delete_user(request: schemas.CredentialsRequest) -> dict:
    return await service.delete(request)
