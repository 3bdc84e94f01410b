"""Feedback template endpoints."""

from fastapi import APIRouter

from academy.database.session import DbSession
from academy.personalisation.schemas import PersonalisedTextResponse
from academy.personalisation.service import list_templates


router = APIRouter(prefix="/api/v1/personalised-texts", tags=["personalisation"])


@router.get("")
async def get_personalised_texts(session: DbSession) -> list[PersonalisedTextResponse]:
    """List all feedback templates."""
    return [PersonalisedTextResponse.model_validate(row) for row in await list_templates(session)]
