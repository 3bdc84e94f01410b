"""Loading and replacing feedback templates."""

import logging
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.analytics.feedback import (
    FeedbackCatalog,
    FeedbackTemplate,
    OverlappingFeedbackRangesError,
    validate_templates,
)
from academy.exceptions import ValidationError
from academy.personalisation.models import PersonalisedText
from academy.personalisation.schemas import PersonalisedTextBase


logger = logging.getLogger(__name__)


async def list_templates(session: AsyncSession) -> list[PersonalisedText]:
    """Return all template rows in collection (insertion) order."""
    result = await session.execute(select(PersonalisedText).order_by(PersonalisedText.id))
    return list(result.scalars().all())


def to_template(row: PersonalisedText | PersonalisedTextBase) -> FeedbackTemplate:
    return FeedbackTemplate(
        type=row.type,
        average=list(row.average) if isinstance(row.average, list) else row.average,
        first_part_text=row.first_part_text,
        second_part_text=row.second_part_text,
    )


async def load_catalog(session: AsyncSession, *, strict: bool = False) -> FeedbackCatalog:
    """Build a FeedbackCatalog from the stored templates, in collection order."""
    rows = await list_templates(session)
    return FeedbackCatalog((to_template(row) for row in rows), strict=strict)


def check_templates(templates: Iterable[PersonalisedTextBase]) -> None:
    """Reject a template set with malformed or overlapping ranges."""
    malformed, overlaps = validate_templates(to_template(t) for t in templates)
    if malformed:
        raise ValidationError("Malformed feedback templates: " + "; ".join(malformed), issues=malformed)
    if overlaps:
        raise OverlappingFeedbackRangesError(overlaps)


async def replace_templates(session: AsyncSession, templates: Iterable[PersonalisedTextBase]) -> int:
    """Validate ``templates`` strictly and make them the stored template set.

    Nothing is written when a range is malformed (ValidationError) or two
    ranges of one category overlap (OverlappingFeedbackRangesError).
    """
    templates = list(templates)
    check_templates(templates)

    await session.execute(delete(PersonalisedText))
    session.add_all(PersonalisedText(**t.model_dump()) for t in templates)
    await session.commit()

    logger.info(f"Stored {len(templates)} feedback templates")
    return len(templates)
