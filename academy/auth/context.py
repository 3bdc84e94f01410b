"""Request-scoped access to the current user's behaviour rows.

``CurrentAuth`` pairs the user id from the bearer token with the request's
session, so analytics routes never take a user id from the client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

from fastapi import Depends
from sqlalchemy import select

from academy.auth.dependencies import UserId
from academy.database.session import DbSession


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    session: AsyncSession

    async def query_owned(self, model: type[T], /, **filters: Any) -> list[T]:
        """Rows of ``model`` belonging to the current user, oldest first.

        ``filters`` are equality conditions on model attributes, e.g.
        ``course_id=...``.
        """
        stmt = select(model).where(model.user_id == self.user_id).filter_by(**filters).order_by(model.id)
        return list(await self.session.scalars(stmt))


async def get_auth_context(user_id: UserId, session: DbSession) -> AuthContext:
    return AuthContext(user_id=user_id, session=session)


CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
