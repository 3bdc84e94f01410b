"""Per-course averages of time spent and scroll depth, split by video units.

Pure functions over already-fetched rows: the service layer loads a course's
units and the user's behaviour records and hands them in here.
"""

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UnitDescriptor:
    """The part of a unit the aggregator needs."""

    unit_id: Hashable
    has_video: bool


@dataclass(frozen=True)
class BehaviorValue:
    """One behaviour measurement for one unit."""

    unit_id: Hashable
    value: float
    video_included: bool = False


@dataclass(frozen=True)
class CourseAggregates:
    """The four course statistics shown on the analytics dashboard."""

    time_video: float = 0.0
    time_non_video: float = 0.0
    scroll_video: float = 0.0
    scroll_non_video: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "time_video": self.time_video,
            "time_non_video": self.time_non_video,
            "scroll_video": self.scroll_video,
            "scroll_non_video": self.scroll_non_video,
        }


def _first_by_unit(records: Iterable[BehaviorValue]) -> dict[Any, BehaviorValue]:
    first: dict[Any, BehaviorValue] = {}
    for record in records:
        first.setdefault(record.unit_id, record)
    return first


def partition_average(
    units: Sequence[UnitDescriptor],
    records: Iterable[BehaviorValue],
    *,
    has_video: bool,
) -> float:
    """Average the records of the units whose ``has_video`` flag matches.

    Each unit contributes the first record carrying its id. Units without a
    record are left out of the mean rather than counted as zero, and a
    partition with no matched units averages to exactly ``0.0``.
    """
    by_unit = _first_by_unit(records)
    matched = [by_unit[unit.unit_id].value for unit in units if unit.has_video == has_video and unit.unit_id in by_unit]
    if not matched:
        return 0.0
    return sum(matched) / len(matched)


def aggregate_course(
    units: Sequence[UnitDescriptor],
    time_records: Iterable[BehaviorValue],
    scroll_records: Iterable[BehaviorValue],
) -> CourseAggregates:
    """Compute all four averages for one course."""
    time_records = list(time_records)
    scroll_records = list(scroll_records)
    return CourseAggregates(
        time_video=partition_average(units, time_records, has_video=True),
        time_non_video=partition_average(units, time_records, has_video=False),
        scroll_video=partition_average(units, scroll_records, has_video=True),
        scroll_non_video=partition_average(units, scroll_records, has_video=False),
    )
