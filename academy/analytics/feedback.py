"""Personalised feedback text for aggregate statistics.

Feedback templates map a statistic category and an inclusive numeric range to
the two halves of a sentence; the rounded statistic is placed between them::

    {"type": "scroll_video", "average": [50, 100],
     "first_part_text": "You scrolled", "second_part_text": "of video units"}

    resolve("scroll_video", 75.2) -> "You scrolled 75 of video units"

A statistic that no template covers is not an error: the resolver returns
``NO_FEEDBACK_MESSAGE`` and logs the miss.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real

from academy.analytics.numbers import round_half_up


logger = logging.getLogger(__name__)

NO_FEEDBACK_MESSAGE = "No personalised feedback is available for this statistic yet."


class FeedbackCategory(StrEnum):
    """Template categories for the course statistics."""

    TIME_VIDEO = "time_video"
    TIME_NON_VIDEO = "time_non_video"
    SCROLL_VIDEO = "scroll_video"
    SCROLL_NON_VIDEO = "scroll_non_video"


class OverlappingFeedbackRangesError(ValueError):
    """Two templates of the same category claim the same value."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        super().__init__("Overlapping feedback ranges: " + "; ".join(issues))


@dataclass(frozen=True)
class FeedbackTemplate:
    """A sentence split around a statistic, applied when the statistic falls in ``average``."""

    type: str
    average: Sequence[float]
    first_part_text: str
    second_part_text: str

    @property
    def bounds(self) -> tuple[float, float] | None:
        """The inclusive ``(min, max)`` range, or None when the range is malformed."""
        if not isinstance(self.average, Sequence) or len(self.average) != 2:
            return None
        low, high = self.average
        if not all(isinstance(v, Real) and not isinstance(v, bool) for v in (low, high)) or low > high:
            return None
        return float(low), float(high)

    def contains(self, value: float) -> bool:
        bounds = self.bounds
        return bounds is not None and bounds[0] <= value <= bounds[1]


def format_feedback(template: FeedbackTemplate, average: float) -> str:
    """Join the template halves around the rounded statistic."""
    return f"{template.first_part_text.rstrip()} {round_half_up(average)} {template.second_part_text.lstrip()}"


def validate_templates(templates: Iterable[FeedbackTemplate]) -> tuple[list[str], list[str]]:
    """Check a template set.

    Returns
    -------
        (malformed, overlaps): human-readable descriptions of templates whose
        range is not a ``[min, max]`` pair, and of same-category ranges that
        share at least one value.
    """
    malformed: list[str] = []
    by_category: dict[str, list[tuple[float, float]]] = defaultdict(list)

    for index, template in enumerate(templates):
        bounds = template.bounds
        if bounds is None:
            malformed.append(f"template #{index} ({template.type}) has malformed range {template.average!r}")
            continue
        by_category[template.type].append(bounds)

    overlaps: list[str] = []
    for category, ranges in by_category.items():
        ranges.sort()
        for (low_a, high_a), (low_b, high_b) in zip(ranges, ranges[1:], strict=False):
            if low_b <= high_a:
                overlaps.append(f"{category}: [{low_a:g}, {high_a:g}] overlaps [{low_b:g}, {high_b:g}]")

    return malformed, overlaps


class FeedbackCatalog:
    """Resolves (category, average) pairs against an ordered template set.

    Lookup is first-match in the order the templates were given. With
    ``strict=True`` the catalog refuses template sets whose ranges overlap, so
    the order never decides the outcome.
    """

    def __init__(self, templates: Iterable[FeedbackTemplate], *, strict: bool = False) -> None:
        self.templates = list(templates)
        malformed, overlaps = validate_templates(self.templates)

        for issue in malformed:
            logger.warning(f"Ignoring feedback template: {issue}")
        if overlaps:
            if strict:
                raise OverlappingFeedbackRangesError(overlaps)
            logger.warning(f"Overlapping feedback ranges, first match wins: {overlaps}")

    def match(self, category: str, average: float) -> FeedbackTemplate | None:
        """Return the first template of ``category`` whose range contains ``average``."""
        for template in self.templates:
            if template.type == category and template.contains(average):
                return template
        return None

    def resolve(self, category: str, average: float) -> str:
        """Return the feedback sentence, or ``NO_FEEDBACK_MESSAGE`` on a miss."""
        template = self.match(category, average)
        if template is None:
            logger.warning(f"No feedback template for {category} with average {average}")
            return NO_FEEDBACK_MESSAGE
        return format_feedback(template, average)
