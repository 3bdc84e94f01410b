"""FastAPI authentication dependencies.

The verified user id is the only identity the analytics modules trust; request
bodies never carry it.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from academy.auth.exceptions import InvalidTokenError, MissingTokenError, RevokedTokenError
from academy.auth.security import decode_access_token
from academy.database.session import DbSession
from academy.user.models import User


logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request) -> str | None:
    """Extract JWT token from the Authorization header."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.removeprefix("Bearer ").strip() or None
    return None


async def get_current_user(request: Request, session: DbSession) -> User:
    """Resolve the user behind the bearer token or reject the request."""
    token = extract_bearer_token(request)
    if not token:
        raise MissingTokenError

    claims = decode_access_token(token)
    user = await session.get(User, int(claims["sub"]))
    if user is None:
        logger.debug(f"Token refers to missing user {claims['sub']}")
        raise InvalidTokenError
    if claims["ver"] != user.auth_token_version:
        raise RevokedTokenError

    request.state.user_id = user.id
    return user


async def _get_user_id(user: Annotated[User, Depends(get_current_user)]) -> int:
    return user.id


# Usage: async def my_route(user_id: UserId) -> Response:
CurrentUser = Annotated[User, Depends(get_current_user)]
UserId = Annotated[int, Depends(_get_user_id)]
