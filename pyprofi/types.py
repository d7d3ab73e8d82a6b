"""Enumerations shared by the profiler, its configuration, and the CLI."""

from __future__ import annotations

import re
import time
from enum import IntEnum
from typing import Callable

#: A zero-argument callable returning seconds as a float.
Clock = Callable[[], float]


def _describe(cls: type) -> str:
    """Return a lower-case phrase for an enum class name (SortMethod -> sort method)."""
    return re.sub(r"(?<!^)(?=[A-Z])", " ", cls.__name__).lower()


class _NamedEnum(IntEnum):
    """IntEnum with case-insensitive parsing from user-facing strings."""

    @classmethod
    def from_string(cls, value: str):
        """Parse a case-insensitive member name.

        Args:
            value: Member name such as "duration" or "COUNT".

        Returns:
            The matching enum member.

        Raises:
            ValueError: If the string doesn't match any member.
        """
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ValueError(
                f"Invalid {_describe(cls)} '{value}'. Valid values are: {valid}"
            ) from None

    @classmethod
    def coerce(cls, value):
        """Return ``value`` as a member, parsing strings with ``from_string``."""
        if isinstance(value, cls):
            return value
        return cls.from_string(value)


class SortMethod(_NamedEnum):
    """Ordering applied to function reports before they are written."""

    #: Largest accumulated duration first.
    DURATION = 1
    #: Most calls first.
    COUNT = 2


class StartMode(_NamedEnum):
    """How ``Profiler.start`` treats repeated sessions."""

    NORMAL = 1
    #: Allow a single start/stop cycle; later starts are ignored until reset.
    ONCE = 2


class ClockKind(_NamedEnum):
    """Time source used to measure function durations."""

    CPU = 1  # process CPU time
    WALL = 2  # monotonic wall-clock time


_CLOCKS = {
    ClockKind.CPU: time.process_time,
    ClockKind.WALL: time.perf_counter,
}


def resolve_clock(kind: ClockKind | str) -> Clock:
    """Return the clock function for ``kind``."""
    return _CLOCKS[ClockKind.coerce(kind)]
