from collections.abc import Hashable, Iterable

from academy.analytics.numbers import round_half_up


def course_progress(unit_ids: Iterable[Hashable], viewed_unit_ids: Iterable[Hashable]) -> int:
    """Percentage (0-100) of a course's units the user has viewed.

    Repeated views and views of units outside the course do not count. A course
    without units reports 0.
    """
    course_units = set(unit_ids)
    if not course_units:
        return 0
    viewed = course_units.intersection(viewed_unit_ids)
    return round_half_up(100 * len(viewed) / len(course_units))
