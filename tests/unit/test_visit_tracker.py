import logging
from uuid import UUID, uuid4

import pytest

from academy.tracking.visit import TrackedUnit, UnitVisitTracker, VisitState, scroll_percentage


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSink:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def log_view(self, course_id: UUID, unit_id: UUID) -> None:
        self.calls.append(("view", unit_id))

    async def log_time_spent(self, course_id: UUID, unit_id: UUID, seconds: int, video_included: bool) -> None:
        self.calls.append(("time", unit_id, seconds, video_included))

    async def log_scroll_percentage(
        self, course_id: UUID, unit_id: UUID, percentage: float, video_included: bool
    ) -> None:
        self.calls.append(("scroll", unit_id, percentage, video_included))

    async def consolidate_scroll(self, course_id: UUID, unit_id: UUID) -> None:
        self.calls.append(("consolidate", unit_id))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def course_id() -> UUID:
    return uuid4()


@pytest.fixture
def video_unit(course_id) -> TrackedUnit:
    return TrackedUnit(course_id=course_id, unit_id=uuid4(), has_video=True, title="Video unit")


@pytest.fixture
def text_unit(course_id) -> TrackedUnit:
    return TrackedUnit(course_id=course_id, unit_id=uuid4(), has_video=False, title="Text unit")


async def test_enter_logs_view_and_starts_viewing(sink, clock, video_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)

    await tracker.enter(video_unit)

    assert tracker.state is VisitState.VIEWING
    assert tracker.current_unit == video_unit
    assert sink.calls == [("view", video_unit.unit_id)]


async def test_leave_flushes_time_scroll_then_consolidation(sink, clock, video_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(video_unit)
    tracker.record_scroll(40)
    tracker.record_scroll(90)
    tracker.record_scroll(60)
    clock.advance(42.7)

    await tracker.leave()

    assert sink.calls[1:] == [
        ("time", video_unit.unit_id, 42, True),
        ("scroll", video_unit.unit_id, 90, True),
        ("consolidate", video_unit.unit_id),
    ]
    assert tracker.state is VisitState.IDLE
    assert tracker.current_unit is None


async def test_switching_units_leaves_the_previous_one_first(sink, clock, video_unit, text_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(video_unit)
    tracker.record_scroll(30)
    clock.advance(10)

    await tracker.enter(text_unit)

    assert sink.calls == [
        ("view", video_unit.unit_id),
        ("time", video_unit.unit_id, 10, True),
        ("scroll", video_unit.unit_id, 30, True),
        ("consolidate", video_unit.unit_id),
        ("view", text_unit.unit_id),
    ]
    assert tracker.current_unit == text_unit
    assert tracker.max_scroll == 0


async def test_zero_time_and_zero_scroll_are_not_sent(sink, clock, text_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(text_unit)
    clock.advance(0.4)

    await tracker.leave()

    assert sink.calls == [("view", text_unit.unit_id), ("consolidate", text_unit.unit_id)]


async def test_already_viewed_units_are_not_logged_again(sink, clock, video_unit, text_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock, viewed_unit_ids=[video_unit.unit_id])

    await tracker.enter(video_unit)
    await tracker.enter(text_unit)
    await tracker.enter(video_unit)

    views = [call for call in sink.calls if call[0] == "view"]
    assert views == [("view", text_unit.unit_id)]


async def test_scroll_is_clamped_and_keeps_running_max(sink, clock, video_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(video_unit)

    assert tracker.record_scroll(-5) == 0
    assert tracker.record_scroll(140) == 100
    assert tracker.record_scroll(20) == 100
    assert tracker.record_scroll(float("nan")) == 100


async def test_scroll_outside_a_visit_is_ignored(sink, clock) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)

    assert tracker.record_scroll(50) == 0
    await tracker.leave()

    assert sink.calls == []
    assert tracker.state is VisitState.IDLE


async def test_exit_flushes_the_last_unit(sink, clock, text_unit) -> None:
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(text_unit)
    clock.advance(5)

    await tracker.exit()

    assert ("time", text_unit.unit_id, 5, False) in sink.calls
    assert tracker.state is VisitState.IDLE


async def test_sink_failure_is_logged_and_later_steps_still_run(clock, text_unit, video_unit, caplog) -> None:
    class BrokenSink(RecordingSink):
        async def log_time_spent(self, *args) -> None:
            raise RuntimeError("sink down")

    sink = BrokenSink()
    tracker = UnitVisitTracker(sink, clock=clock)
    await tracker.enter(text_unit)
    tracker.record_scroll(40)
    clock.advance(3)

    with caplog.at_level(logging.WARNING, logger="academy.tracking.visit"):
        await tracker.leave()

    assert tracker.state is VisitState.IDLE
    assert "Failed to send time spent event: sink down" in caplog.text
    assert ("scroll", text_unit.unit_id, 40, False) in sink.calls
    assert ("consolidate", text_unit.unit_id) in sink.calls

    await tracker.enter(video_unit)

    assert tracker.state is VisitState.VIEWING
    assert tracker.current_unit == video_unit


async def test_failed_view_still_enters_unit(clock, text_unit) -> None:
    class BrokenSink(RecordingSink):
        async def log_view(self, *args) -> None:
            raise RuntimeError("sink down")

    tracker = UnitVisitTracker(BrokenSink(), clock=clock)
    await tracker.enter(text_unit)

    assert tracker.state is VisitState.VIEWING
    assert tracker.current_unit == text_unit


def test_scroll_percentage_from_page_geometry() -> None:
    assert scroll_percentage(scroll_top=500, scroll_height=1800, viewport_height=800) == 50
    assert scroll_percentage(scroll_top=2000, scroll_height=1800, viewport_height=800) == 100
    assert scroll_percentage(scroll_top=0, scroll_height=600, viewport_height=800) == 100
