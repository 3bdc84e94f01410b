import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    The built-in ``round`` uses banker's rounding (``round(2.5) == 2``), which
    disagrees with how percentages are shown on the dashboards.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
