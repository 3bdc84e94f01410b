from uuid import uuid4

import pytest

from academy.analytics.aggregator import (
    BehaviorValue,
    CourseAggregates,
    UnitDescriptor,
    aggregate_course,
    partition_average,
)


@pytest.fixture
def units() -> list[UnitDescriptor]:
    return [
        UnitDescriptor("u1", has_video=True),
        UnitDescriptor("u2", has_video=True),
        UnitDescriptor("u3", has_video=False),
        UnitDescriptor("u4", has_video=False),
    ]


def test_partition_average_splits_by_video(units) -> None:
    records = [BehaviorValue("u1", 30), BehaviorValue("u2", 90), BehaviorValue("u3", 10), BehaviorValue("u4", 20)]

    assert partition_average(units, records, has_video=True) == 60
    assert partition_average(units, records, has_video=False) == 15


def test_units_without_records_are_excluded_not_zero(units) -> None:
    records = [BehaviorValue("u1", 40)]

    assert partition_average(units, records, has_video=True) == 40


def test_empty_partition_is_zero(units) -> None:
    assert partition_average(units, [], has_video=True) == 0.0
    assert partition_average([], [BehaviorValue("u1", 40)], has_video=True) == 0.0


def test_first_record_per_unit_wins(units) -> None:
    records = [BehaviorValue("u3", 80), BehaviorValue("u3", 20)]

    assert partition_average(units, records, has_video=False) == 80


def test_records_for_other_courses_are_ignored(units) -> None:
    records = [BehaviorValue("u1", 50), BehaviorValue(uuid4(), 1000)]

    assert partition_average(units, records, has_video=True) == 50


def test_aggregate_course_returns_all_four_statistics(units) -> None:
    time_records = [BehaviorValue("u1", 120), BehaviorValue("u3", 45)]
    scroll_records = [BehaviorValue("u2", 75.5), BehaviorValue("u4", 100), BehaviorValue("u3", 50)]

    result = aggregate_course(units, time_records, scroll_records)

    assert result == CourseAggregates(time_video=120, time_non_video=45, scroll_video=75.5, scroll_non_video=75)
    assert result.as_dict() == {
        "time_video": 120,
        "time_non_video": 45,
        "scroll_video": 75.5,
        "scroll_non_video": 75,
    }


def test_aggregate_course_without_records() -> None:
    assert aggregate_course([UnitDescriptor("u1", has_video=True)], [], []) == CourseAggregates()
