"""Behaviour analytics: aggregation, feedback text, progress and scroll consolidation."""

from academy.analytics.aggregator import CourseAggregates, UnitDescriptor, aggregate_course, partition_average
from academy.analytics.consolidation import select_survivor
from academy.analytics.feedback import NO_FEEDBACK_MESSAGE, FeedbackCatalog, FeedbackCategory
from academy.analytics.progress import course_progress


__all__ = [
    "NO_FEEDBACK_MESSAGE",
    "CourseAggregates",
    "FeedbackCatalog",
    "FeedbackCategory",
    "UnitDescriptor",
    "aggregate_course",
    "course_progress",
    "partition_average",
    "select_survivor",
]
