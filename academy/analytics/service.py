"""Course analytics assembled from behaviour records and feedback templates."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.activity.models import ViewEvent
from academy.activity.service import ActivityService
from academy.analytics.aggregator import BehaviorValue, CourseAggregates, UnitDescriptor, aggregate_course
from academy.analytics.feedback import FeedbackCatalog, FeedbackCategory
from academy.analytics.schemas import (
    CourseAggregatesEntry,
    CourseAggregatesSchema,
    CourseAnalyticsResponse,
    CourseRecordsResponse,
    GeneralAnalyticsResponse,
    ViewEventResponse,
)
from academy.behavior.models import ScrollRecord, TimeSpentRecord
from academy.behavior.schemas import ScrollPercentageResponse, TimeSpentResponse
from academy.behavior.service import BehaviorService
from academy.courses.models import Unit
from academy.courses.service import get_course, list_courses, list_units
from academy.personalisation.service import load_catalog


logger = logging.getLogger(__name__)


def _unit_descriptors(units: Iterable[Unit]) -> list[UnitDescriptor]:
    return [UnitDescriptor(unit_id=unit.id, has_video=unit.has_video) for unit in units]


def _time_values(records: Iterable[TimeSpentRecord]) -> list[BehaviorValue]:
    return [BehaviorValue(r.unit_id, float(r.time_spent), r.video_included) for r in records]


def _scroll_values(records: Iterable[ScrollRecord]) -> list[BehaviorValue]:
    # Deepest first, so a unit whose records are not consolidated yet still
    # contributes its maximum.
    ordered = sorted(records, key=lambda r: (-r.scroll_percentage, r.id))
    return [BehaviorValue(r.unit_id, r.scroll_percentage, r.video_included) for r in ordered]


def feedback_for(catalog: FeedbackCatalog, aggregates: CourseAggregates) -> dict[str, str]:
    """One feedback sentence per course statistic."""
    values = aggregates.as_dict()
    return {category.value: catalog.resolve(category.value, values[category.value]) for category in FeedbackCategory}


class AnalyticsService:
    """Read-side analytics for one user."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id
        self.behavior = BehaviorService(session, user_id)

    async def course_records(self, course_id: UUID) -> CourseRecordsResponse:
        """Raw view, time and scroll rows for one course."""
        result = await self.session.execute(
            select(ViewEvent)
            .where(ViewEvent.user_id == self.user_id, ViewEvent.course_id == course_id)
            .order_by(ViewEvent.id)
        )
        return CourseRecordsResponse(
            activities=[ViewEventResponse.model_validate(row) for row in result.scalars().all()],
            time_spent=[
                TimeSpentResponse.model_validate(row) for row in await self.behavior.list_time_spent(course_id)
            ],
            scroll_percentages=[
                ScrollPercentageResponse.model_validate(row)
                for row in await self.behavior.list_scroll_percentages(course_id)
            ],
        )

    async def course_analytics(self, course_id: UUID) -> CourseAnalyticsResponse:
        """Aggregates, feedback and progress for one course."""
        course = await get_course(self.session, course_id)
        units = await list_units(self.session, course_id)

        aggregates = aggregate_course(
            _unit_descriptors(units),
            _time_values(await self.behavior.list_time_spent(course_id)),
            _scroll_values(await self.behavior.list_scroll_percentages(course_id)),
        )
        catalog = await load_catalog(self.session)

        return CourseAnalyticsResponse(
            course_id=course.id,
            course_title=course.title,
            aggregates=CourseAggregatesSchema(**aggregates.as_dict()),
            feedback=feedback_for(catalog, aggregates),
            progress=await ActivityService(self.session, self.user_id).get_progress(course_id),
        )

    async def general_analytics(self) -> GeneralAnalyticsResponse:
        """Aggregates for every course, computed from one pass over the user's records."""
        units_by_course: dict[UUID, list[Unit]] = defaultdict(list)
        for unit in await list_units(self.session):
            units_by_course[unit.course_id].append(unit)

        time_by_course: dict[UUID, list[TimeSpentRecord]] = defaultdict(list)
        for record in await self.behavior.list_time_spent():
            time_by_course[record.course_id].append(record)

        scroll_by_course: dict[UUID, list[ScrollRecord]] = defaultdict(list)
        for record in await self.behavior.list_scroll_percentages():
            scroll_by_course[record.course_id].append(record)

        entries = []
        for course in await list_courses(self.session):
            aggregates = aggregate_course(
                _unit_descriptors(units_by_course[course.id]),
                _time_values(time_by_course[course.id]),
                _scroll_values(scroll_by_course[course.id]),
            )
            entries.append(
                CourseAggregatesEntry(
                    course_id=course.id,
                    course_title=course.title,
                    aggregates=CourseAggregatesSchema(**aggregates.as_dict()),
                )
            )

        logger.debug(f"Computed general analytics for user {self.user_id} over {len(entries)} courses")
        return GeneralAnalyticsResponse(courses=entries)
