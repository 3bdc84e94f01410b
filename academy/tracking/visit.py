"""Unit visit state machine.

    Idle --enter--> Viewing --leave--> Leaving --(flushed)--> Idle

While Viewing the tracker keeps the running maximum scroll depth and the
visit start time. Leaving flushes, in order: the seconds spent, the maximum
scroll depth, and a request to consolidate the unit's scroll records. Entering
a new unit while Viewing performs the whole leave first, so no visit is ever
dropped on rapid switching. A sink failure is logged and the remaining steps
still run, so the tracker always returns to Idle.
"""

import logging
import math
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol
from uuid import UUID


logger = logging.getLogger(__name__)


class VisitState(StrEnum):
    IDLE = "idle"
    VIEWING = "viewing"
    LEAVING = "leaving"


@dataclass(frozen=True)
class TrackedUnit:
    course_id: UUID
    unit_id: UUID
    has_video: bool = False
    title: str = ""


class AnalyticsSink(Protocol):
    """Where the tracker sends its events."""

    async def log_view(self, course_id: UUID, unit_id: UUID) -> None: ...

    async def log_time_spent(self, course_id: UUID, unit_id: UUID, seconds: int, video_included: bool) -> None: ...

    async def log_scroll_percentage(
        self, course_id: UUID, unit_id: UUID, percentage: float, video_included: bool
    ) -> None: ...

    async def consolidate_scroll(self, course_id: UUID, unit_id: UUID) -> None: ...


def scroll_percentage(scroll_top: float, scroll_height: float, viewport_height: float) -> float:
    """Share of a page scrolled, 0-100.

    A page that fits in the viewport counts as fully scrolled.
    """
    scrollable = scroll_height - viewport_height
    if scrollable <= 0:
        return 100.0
    return max(0.0, min(100.0, scroll_top / scrollable * 100))


class UnitVisitTracker:
    """Tracks one reader moving between the units of a course."""

    def __init__(
        self,
        sink: AnalyticsSink,
        *,
        clock: Callable[[], float] = time.monotonic,
        viewed_unit_ids: Iterable[UUID] = (),
    ) -> None:
        self.sink = sink
        self.clock = clock
        self.viewed_unit_ids: set[UUID] = set(viewed_unit_ids)
        self.state = VisitState.IDLE
        self.current_unit: TrackedUnit | None = None
        self.max_scroll = 0.0
        self._started_at = 0.0

    async def enter(self, unit: TrackedUnit) -> None:
        """Start viewing ``unit``, leaving the current unit first."""
        if self.state is VisitState.VIEWING:
            await self.leave()

        self.current_unit = unit
        self.max_scroll = 0.0
        self._started_at = self.clock()
        self.state = VisitState.VIEWING

        if unit.unit_id not in self.viewed_unit_ids:
            await self._deliver("view", self.sink.log_view(unit.course_id, unit.unit_id))
            self.viewed_unit_ids.add(unit.unit_id)

    def record_scroll(self, percentage: float) -> float:
        """Feed a scroll measurement; returns the running maximum."""
        if self.state is not VisitState.VIEWING:
            logger.debug(f"Ignoring scroll event while {self.state}")
            return self.max_scroll
        if not math.isfinite(percentage):
            return self.max_scroll
        self.max_scroll = max(self.max_scroll, min(100.0, max(0.0, percentage)))
        return self.max_scroll

    async def leave(self) -> None:
        """Flush the current visit and return to Idle. No-op when not viewing."""
        if self.state is not VisitState.VIEWING or self.current_unit is None:
            return

        self.state = VisitState.LEAVING
        unit = self.current_unit
        seconds = int(self.clock() - self._started_at)
        max_scroll = self.max_scroll
        try:
            if seconds > 0:
                await self._deliver(
                    "time spent", self.sink.log_time_spent(unit.course_id, unit.unit_id, seconds, unit.has_video)
                )
            if max_scroll > 0:
                await self._deliver(
                    "scroll percentage",
                    self.sink.log_scroll_percentage(unit.course_id, unit.unit_id, max_scroll, unit.has_video),
                )
            await self._deliver("scroll consolidation", self.sink.consolidate_scroll(unit.course_id, unit.unit_id))
        finally:
            self.state = VisitState.IDLE
            self.current_unit = None
            self.max_scroll = 0.0

    async def _deliver(self, event: str, call: Awaitable[None]) -> None:
        try:
            await call
        except Exception as e:
            logger.warning(f"Failed to send {event} event: {e}")

    async def exit(self) -> None:
        """Leave the course page entirely."""
        await self.leave()
