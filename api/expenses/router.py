"""
Expense API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/expenses", status_code=status.HTTP_201_CREATED, response_model=schemas.ExpenseResponse)
async def create_expense(request: schemas.ExpenseRequest) -> schemas.ExpenseResponse:
    return await service.create_expense(request)


@router.post("/expenses/{user_id}", response_model=list[schemas.ExpenseResponse])
async def list_user_expenses(user_id: int) -> list[schemas.ExpenseResponse]:
    """
    All expenses of a user, newest first.
    """
    return await service.expenses_for_user(user_id)


@router.get("/expenses/{id}", response_model=schemas.ExpenseResponse)
async def get_expense(id: int) -> schemas.ExpenseResponse:
    return await service.get_expense(id)


@router.put("/expenses/{id}", status_code=status.HTTP_201_CREATED, response_model=schemas.ExpenseResponse)
async def update_expense(id: int, request: schemas.ExpenseRequest) -> schemas.ExpenseResponse:
    return await service.update_expense(id, request)


@router.delete("/expenses/{id}")
async def delete_expense(id: int, request: schemas.OwnerRequest) -> dict:
    return await service.delete_expense(id, request)
