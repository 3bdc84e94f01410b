"""Authentication routes for registration, login, logout and id verification."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Request, status

from academy.auth import crud
from academy.auth.dependencies import CurrentUser
from academy.auth.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from academy.auth.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    VerifyIdRequest,
)
from academy.auth.security import create_access_token
from academy.config.settings import get_settings
from academy.database.session import DbSession
from academy.exceptions import ResourceNotFoundError
from academy.middleware.security import auth_rate_limit


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED)
@auth_rate_limit
async def register(request: Request, data: RegisterRequest, session: DbSession) -> RegisterResponse:  # noqa: ARG001
    """Create a new user account."""
    if await crud.get_user_by_email(session, data.email):
        raise UserAlreadyExistsError

    user = await crud.create_user(session, email=data.email, password=data.password, username=data.username)
    await session.commit()

    logger.info(f"Registered user {user.id}")
    return RegisterResponse(message="User has been saved!", user=UserResponse.model_validate(user))


@router.post("/login")
@auth_rate_limit
async def login(request: Request, data: LoginRequest, session: DbSession) -> LoginResponse:  # noqa: ARG001
    """Login with email and password and receive a bearer token."""
    user = await crud.authenticate(session, email=data.email, password=data.password)
    if not user:
        raise InvalidCredentialsError
    await session.commit()

    expires_in = get_settings().ACCESS_TOKEN_EXPIRE_MINUTES * 60
    token = create_access_token(
        user.id,
        user.email,
        timedelta(seconds=expires_in),
        token_version=user.auth_token_version,
    )
    return LoginResponse(user=UserResponse.model_validate(user), access_token=token, expires_in=expires_in)


@router.post("/logout")
async def logout(user: CurrentUser, session: DbSession) -> MessageResponse:
    """Revoke every token issued to the current user so far."""
    version = await crud.revoke_tokens(session, user)
    await session.commit()
    logger.info(f"User {user.id} logged out, token version now {version}")
    return MessageResponse(message="You have successfully logged out")


@router.post("/verify-id")
async def verify_id(data: VerifyIdRequest, session: DbSession) -> UserResponse:
    """Check that a public user UUID belongs to an existing account."""
    user = await crud.get_user_by_uuid(session, data.uuid)
    if not user:
        raise ResourceNotFoundError("User", str(data.uuid))
    return UserResponse.model_validate(user)


@router.get("/me")
async def me(user: CurrentUser) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(user)
