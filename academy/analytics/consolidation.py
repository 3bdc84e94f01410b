from collections.abc import Iterable
from typing import Protocol, TypeVar


class ScrollSample(Protocol):
    scroll_percentage: float


S = TypeVar("S", bound=ScrollSample)


def select_survivor(records: Iterable[S]) -> tuple[S | None, list[S]]:
    """Split scroll records for one key into the row to keep and the rows to drop.

    The survivor has the highest ``scroll_percentage``; on a tie the first
    record encountered wins, so callers must pass rows in a stable order.
    """
    survivor: S | None = None
    extras: list[S] = []
    for record in records:
        if survivor is None:
            survivor = record
        elif record.scroll_percentage > survivor.scroll_percentage:
            extras.append(survivor)
            survivor = record
        else:
            extras.append(record)
    return survivor, extras
