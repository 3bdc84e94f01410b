"""Business logic for time spent and scroll depth logging."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.analytics.consolidation import select_survivor
from academy.behavior.models import ScrollRecord, TimeSpentRecord
from academy.behavior.schemas import ConsolidationResponse, ScrollPercentageLog, TimeSpentLog
from academy.database.upsert import insert_for


logger = logging.getLogger(__name__)


class BehaviorService:
    """Service for one user's behaviour records."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id

    async def log_time_spent(self, log: TimeSpentLog) -> TimeSpentRecord:
        """Add ``log.time_spent`` seconds to the user's record for the unit.

        The first log creates the record; later logs increment it in the same
        statement, so concurrent visits cannot lose an increment.
        """
        stmt = insert_for(self.session, TimeSpentRecord).values(
            user_id=self.user_id,
            course_id=log.course_id,
            unit_id=log.unit_id,
            video_included=log.video_included,
            time_spent=log.time_spent,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "course_id", "unit_id"],
            set_={
                "time_spent": TimeSpentRecord.time_spent + stmt.excluded.time_spent,
                "video_included": stmt.excluded.video_included,
                "date": stmt.excluded.date,
            },
        ).returning(TimeSpentRecord)

        result = await self.session.scalars(stmt, execution_options={"populate_existing": True})
        record = result.one()
        await self.session.commit()

        logger.info(f"Logged {log.time_spent}s for user {self.user_id} on unit {log.unit_id} (total {record.time_spent}s)")
        return record

    async def log_scroll_percentage(self, log: ScrollPercentageLog) -> ScrollRecord:
        """Append a scroll depth measurement for the unit."""
        record = ScrollRecord(
            user_id=self.user_id,
            course_id=log.course_id,
            unit_id=log.unit_id,
            scroll_percentage=log.scroll_percentage,
            video_included=log.video_included,
        )
        self.session.add(record)
        await self.session.commit()

        logger.info(f"Logged scroll {log.scroll_percentage:.1f}% for user {self.user_id} on unit {log.unit_id}")
        return record

    async def delete_extra_scroll_records(self, course_id: UUID, unit_id: UUID) -> ConsolidationResponse:
        """Keep only the deepest scroll record for the unit and delete the rest.

        Running it again right away deletes nothing.
        """
        result = await self.session.execute(
            select(ScrollRecord)
            .where(
                ScrollRecord.user_id == self.user_id,
                ScrollRecord.course_id == course_id,
                ScrollRecord.unit_id == unit_id,
            )
            .order_by(ScrollRecord.id)
        )
        survivor, extras = select_survivor(result.scalars().all())

        if survivor is None:
            return ConsolidationResponse(found=False, message="No scroll percentages found for this unit.")

        if extras:
            await self.session.execute(
                delete(ScrollRecord).where(ScrollRecord.id.in_([record.id for record in extras]))
            )
            await self.session.commit()
            logger.info(
                f"Deleted {len(extras)} extra scroll records for user {self.user_id} on unit {unit_id}, "
                f"kept {survivor.scroll_percentage:.1f}%"
            )

        return ConsolidationResponse(
            found=True,
            kept_id=survivor.id,
            kept_scroll_percentage=survivor.scroll_percentage,
            deleted_count=len(extras),
            message="Unnecessary scroll percentages deleted." if extras else "Nothing to delete.",
        )

    async def list_time_spent(self, course_id: UUID | None = None) -> list[TimeSpentRecord]:
        stmt = select(TimeSpentRecord).where(TimeSpentRecord.user_id == self.user_id)
        if course_id is not None:
            stmt = stmt.where(TimeSpentRecord.course_id == course_id)
        result = await self.session.execute(stmt.order_by(TimeSpentRecord.id))
        return list(result.scalars().all())

    async def list_scroll_percentages(self, course_id: UUID | None = None) -> list[ScrollRecord]:
        stmt = select(ScrollRecord).where(ScrollRecord.user_id == self.user_id)
        if course_id is not None:
            stmt = stmt.where(ScrollRecord.course_id == course_id)
        result = await self.session.execute(stmt.order_by(ScrollRecord.id))
        return list(result.scalars().all())
