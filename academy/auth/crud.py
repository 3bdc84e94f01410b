"""Database-backed user CRUD for local auth."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import func, select, update

from academy.auth.security import get_password_hash, verify_password
from academy.database.upsert import insert_for
from academy.user.models import Counter, User


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


logger = logging.getLogger(__name__)

DUMMY_HASH = get_password_hash(secrets.token_urlsafe(32))
USER_ID_SEQUENCE = "user_id"


def normalize_email(email: str) -> str:
    """Normalize email for consistent storage and lookups."""
    return email.strip().lower()


async def next_sequence_value(session: AsyncSession, name: str) -> int:
    """Atomically increment the named counter and return its new value.

    The first call for a name creates the counter at 1.
    """
    stmt = insert_for(session, Counter).values(name=name, value=1)
    stmt = stmt.on_conflict_do_update(
        index_elements=["name"],
        set_={"value": Counter.value + 1},
    ).returning(Counter.value)

    result = await session.execute(stmt)
    value = result.scalar_one()
    logger.debug(f"Generated sequence value {value} for {name}")
    return value


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    username: str,
) -> User:
    """Create a new local user with the next sequential id."""
    user = User(
        id=await next_sequence_value(session, USER_ID_SEQUENCE),
        email=normalize_email(email),
        username=username,
        password_hash=get_password_hash(password),
    )
    session.add(user)
    await session.flush()
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email or None."""
    normalized_email = normalize_email(email)
    result = await session.execute(select(User).where(func.lower(User.email) == normalized_email))
    return result.scalar_one_or_none()


async def get_user_by_uuid(session: AsyncSession, user_uuid: UUID) -> User | None:
    """Return a user by public UUID or None."""
    result = await session.execute(select(User).where(User.uuid == user_uuid))
    return result.scalar_one_or_none()


async def authenticate(session: AsyncSession, *, email: str, password: str) -> User | None:
    """Return user if email/password are valid, else None (timing-safe)."""
    user = await get_user_by_email(session, email)
    if not user:
        verify_password(password, DUMMY_HASH)
        return None

    verified, updated_hash = verify_password(password, user.password_hash)
    if not verified:
        return None

    if updated_hash:
        user.password_hash = updated_hash
        session.add(user)
        await session.flush()

    return user


async def revoke_tokens(session: AsyncSession, user: User) -> int:
    """Invalidate every token issued to ``user`` so far and return the new token version.

    The version is incremented in a single UPDATE statement.
    """
    result = await session.execute(
        update(User)
        .where(User.id == user.id)
        .values(auth_token_version=User.auth_token_version + 1)
        .returning(User.auth_token_version)
    )
    return result.scalar_one()
