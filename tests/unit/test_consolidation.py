from dataclasses import dataclass

from academy.analytics.consolidation import select_survivor


@dataclass
class Sample:
    id: int
    scroll_percentage: float


def test_keeps_the_deepest_record() -> None:
    records = [Sample(1, 40), Sample(2, 90), Sample(3, 60)]

    survivor, extras = select_survivor(records)

    assert survivor.id == 2
    assert sorted(r.id for r in extras) == [1, 3]


def test_tie_keeps_the_first_record() -> None:
    records = [Sample(1, 80), Sample(2, 80), Sample(3, 10)]

    survivor, extras = select_survivor(records)

    assert survivor.id == 1
    assert [r.id for r in extras] == [2, 3]


def test_no_records() -> None:
    assert select_survivor([]) == (None, [])


def test_single_record_has_no_extras() -> None:
    survivor, extras = select_survivor([Sample(7, 55)])

    assert survivor.id == 7
    assert extras == []


def test_second_pass_is_a_no_op() -> None:
    survivor, _ = select_survivor([Sample(1, 40), Sample(2, 90), Sample(3, 60)])

    again, extras = select_survivor([survivor])

    assert again is survivor
    assert extras == []
