"""HTTP client for the analytics API.

Behaviour logging is best-effort telemetry: a failed call is logged and
dropped, never retried, and never raised to the caller. Content and
authentication calls raise as usual.
"""

import logging
from typing import Any
from uuid import UUID

import httpx

from academy.config.settings import get_settings
from academy.tracking.visit import TrackedUnit


logger = logging.getLogger(__name__)


class AnalyticsClient:
    """Async API client implementing the tracker's ``AnalyticsSink``."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.TRACKING_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.token = token

    async def __aenter__(self) -> "AnalyticsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def login(self, email: str, password: str) -> str:
        """Log in and keep the bearer token for later calls."""
        response = await self._client.post("/api/v1/auth/login", json={"email": email, "password": password})
        response.raise_for_status()
        self.token = response.json()["access_token"]
        return self.token

    async def course_units(self, course_id: UUID) -> list[TrackedUnit]:
        """Units of a course in display order."""
        response = await self._client.get(f"/api/v1/units/{course_id}")
        response.raise_for_status()
        return [
            TrackedUnit(
                course_id=UUID(unit["course_id"]),
                unit_id=UUID(unit["id"]),
                has_video=unit["has_video"],
                title=unit["title"],
            )
            for unit in response.json()
        ]

    async def viewed_unit_ids(self, course_id: UUID) -> list[UUID]:
        """Units of a course the user has already viewed."""
        response = await self._client.get(f"/api/v1/user-activity/courses/{course_id}", headers=self._headers)
        response.raise_for_status()
        return [UUID(unit_id) for unit_id in response.json()["viewed_units"]]

    async def _send(self, method: str, path: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        try:
            response = await self._client.request(method, path, json=payload, headers=self._headers)
            response.raise_for_status()
            return response.json() if response.content else None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Dropping analytics event {method} {path}: {e}")
            return None

    async def log_view(self, course_id: UUID, unit_id: UUID) -> None:
        await self._send("POST", "/api/v1/user-activity", {"courseId": str(course_id), "unitId": str(unit_id)})

    async def log_time_spent(self, course_id: UUID, unit_id: UUID, seconds: int, video_included: bool) -> None:
        await self._send(
            "POST",
            "/api/v1/user-behavior/time-spent",
            {
                "courseId": str(course_id),
                "unitId": str(unit_id),
                "timeSpent": seconds,
                "videoIncluded": video_included,
            },
        )

    async def log_scroll_percentage(
        self, course_id: UUID, unit_id: UUID, percentage: float, video_included: bool
    ) -> None:
        await self._send(
            "POST",
            "/api/v1/user-behavior/scroll-percentage",
            {
                "courseId": str(course_id),
                "unitId": str(unit_id),
                "scrollPercentage": percentage,
                "videoIncluded": video_included,
            },
        )

    async def consolidate_scroll(self, course_id: UUID, unit_id: UUID) -> None:
        await self._send(
            "DELETE",
            "/api/v1/user-behavior/scroll-percentages",
            {"courseId": str(course_id), "unitId": str(unit_id)},
        )
