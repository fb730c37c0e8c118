"""
User API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    username: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=72)


class ChangePasswordRequest(CredentialsRequest):
    model_config = ConfigDict(populate_by_name=True)

    new_password: str | None = Field(default=None, alias="newPassword", max_length=72)


class UserResponse(BaseModel):
    id: int
    username: str
