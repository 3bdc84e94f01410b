"""Request and response models for the auth API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Register request model."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Login request model."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class VerifyIdRequest(BaseModel):
    """Verify-id request model."""

    uuid: UUID


class UserResponse(BaseModel):
    """Public user fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: UUID
    username: str
    email: str
    subscription: str
    date_joined: datetime | None = None


class RegisterResponse(BaseModel):
    """Register response model."""

    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    """Login response model."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"  # noqa: S105
    expires_in: int


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
