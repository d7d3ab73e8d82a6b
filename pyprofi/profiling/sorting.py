"""Ordering of function reports prior to output."""

from __future__ import annotations

from operator import attrgetter
from typing import Callable, Dict, List

from pyprofi.profiling.registry import FunctionReport
from pyprofi.types import SortMethod

#: Sort key per method; every method sorts descending.
SORT_KEYS: Dict[SortMethod, Callable[[FunctionReport], float]] = {
    SortMethod.DURATION: attrgetter("duration"),
    SortMethod.COUNT: attrgetter("call_count"),
}


def sort_reports(
    reports: List[FunctionReport], method: SortMethod | str = SortMethod.DURATION
) -> List[FunctionReport]:
    """Sort ``reports`` in place, largest first, and return the same list.

    Ties keep no particular order.
    """
    reports.sort(key=SORT_KEYS[SortMethod.coerce(method)], reverse=True)
    return reports


def sorted_reports(
    reports: List[FunctionReport], method: SortMethod | str = SortMethod.DURATION
) -> List[FunctionReport]:
    """Return a sorted copy of ``reports``, leaving the input untouched."""
    return sort_reports(list(reports), method)
