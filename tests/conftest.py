"""Shared fixtures.

Tests run against an in-memory SQLite database created fresh for every test.
The API is driven in-process through httpx's ASGI transport.
"""

import os


# Configure the environment before anything from academy reads settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass, field
from uuid import UUID

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import academy.database.init  # noqa: F401  # registers every model with Base.metadata
from academy.courses.models import Course, Unit
from academy.database.base import Base
from academy.database.session import get_db_session
from academy.main import create_app
from academy.personalisation.models import PersonalisedText


TEST_PASSWORD = "correct horse battery staple"  # noqa: S105


@dataclass
class SeededCourse:
    id: UUID
    title: str
    video_unit_ids: list[UUID] = field(default_factory=list)
    text_unit_ids: list[UUID] = field(default_factory=list)

    @property
    def unit_ids(self) -> list[UUID]:
        return self.video_unit_ids + self.text_unit_ids


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def app(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[FastAPI, None]:
    """Application wired to the per-test database."""
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous API client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def client_factory(app: FastAPI) -> AsyncGenerator[Callable[..., Awaitable[AsyncClient]], None]:
    """Create API clients logged in as freshly registered users."""
    clients: list[AsyncClient] = []

    async def factory(email: str = "learner@example.com") -> AsyncClient:
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(ac)

        username = email.split("@")[0]
        resp = await ac.post(
            "/api/v1/auth/register", json={"username": username, "email": email, "password": TEST_PASSWORD}
        )
        assert resp.status_code == 201, resp.text

        resp = await ac.post("/api/v1/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert resp.status_code == 200, resp.text
        ac.headers["Authorization"] = f"Bearer {resp.json()['access_token']}"
        return ac

    yield factory

    for ac in clients:
        await ac.aclose()


@pytest_asyncio.fixture
async def course_factory(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[SeededCourse]]:
    """Insert a course with the given number of video and text-only units."""

    async def factory(title: str = "Intro to Statistics", video_units: int = 2, text_units: int = 2) -> SeededCourse:
        async with session_maker() as session:
            course = Course(title=title, description=f"{title} description")
            session.add(course)
            await session.flush()

            seeded = SeededCourse(id=course.id, title=title)
            position = 0
            for has_video, count in ((True, video_units), (False, text_units)):
                for _ in range(count):
                    unit = Unit(
                        course_id=course.id,
                        position=position,
                        title=f"Unit {position + 1}",
                        description="Unit description",
                        video_url="https://videos.example.com/unit.mp4" if has_video else None,
                        title_first_part="First",
                        content_first_part="First part content",
                        title_second_part="Second",
                        content_second_part="Second part content",
                        title_third_part="Third",
                        content_third_part="Third part content",
                    )
                    session.add(unit)
                    await session.flush()
                    (seeded.video_unit_ids if has_video else seeded.text_unit_ids).append(unit.id)
                    position += 1

            await session.commit()
            return seeded

    return factory


@pytest_asyncio.fixture
async def course(course_factory: Callable[..., Awaitable[SeededCourse]]) -> SeededCourse:
    """A course with two video units followed by two text-only units."""
    return await course_factory()


@pytest_asyncio.fixture
async def feedback_templates(session_maker: async_sessionmaker[AsyncSession]) -> list[PersonalisedText]:
    """Non-overlapping templates covering every course statistic."""
    rows = [
        PersonalisedText(
            type="time_video",
            average=[0, 59],
            first_part_text="You spent on average",
            second_part_text="seconds on video units. Try watching the whole video.",
        ),
        PersonalisedText(
            type="time_video",
            average=[60, 100000],
            first_part_text="You spent on average",
            second_part_text="seconds on video units. Great focus!",
        ),
        PersonalisedText(
            type="time_non_video",
            average=[0, 100000],
            first_part_text="You spent on average",
            second_part_text="seconds on text units.",
        ),
        PersonalisedText(
            type="scroll_video",
            average=[0, 49],
            first_part_text="You scrolled",
            second_part_text="of video units. Keep reading below the video.",
        ),
        PersonalisedText(
            type="scroll_video",
            average=[50, 100],
            first_part_text="You scrolled",
            second_part_text="of video units",
        ),
    ]
    async with session_maker() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest_asyncio.fixture
async def user_password() -> str:
    """Password used by every account ``client_factory`` registers."""
    return TEST_PASSWORD
