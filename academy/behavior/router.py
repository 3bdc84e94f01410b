"""Behaviour logging endpoints called while a user reads a unit."""

import logging

from fastapi import APIRouter, Request

from academy.auth import CurrentAuth
from academy.behavior.schemas import (
    ConsolidationResponse,
    ScrollPercentageLog,
    ScrollPercentageResponse,
    TimeSpentLog,
    TimeSpentResponse,
    UnitKey,
)
from academy.behavior.service import BehaviorService
from academy.middleware.security import tracking_rate_limit


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user-behavior", tags=["user-behavior"])


@router.post("/time-spent")
@tracking_rate_limit
async def log_time_spent(request: Request, data: TimeSpentLog, auth: CurrentAuth) -> TimeSpentResponse:  # noqa: ARG001
    """Add the seconds spent during one unit visit to the running total."""
    record = await BehaviorService(auth.session, auth.user_id).log_time_spent(data)
    return TimeSpentResponse.model_validate(record)


@router.post("/scroll-percentage")
@tracking_rate_limit
async def log_scroll_percentage(
    request: Request,  # noqa: ARG001
    data: ScrollPercentageLog,
    auth: CurrentAuth,
) -> ScrollPercentageResponse:
    """Record the deepest scroll reached during one unit visit."""
    record = await BehaviorService(auth.session, auth.user_id).log_scroll_percentage(data)
    return ScrollPercentageResponse.model_validate(record)


@router.delete("/scroll-percentages")
async def delete_extra_scroll_percentages(data: UnitKey, auth: CurrentAuth) -> ConsolidationResponse:
    """Collapse the unit's scroll records to the deepest one."""
    return await BehaviorService(auth.session, auth.user_id).delete_extra_scroll_records(data.course_id, data.unit_id)
