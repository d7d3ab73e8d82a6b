"""Global pytest configuration.

Provides a controllable clock and an in-memory instrumentation so profiler
sessions can be driven event by event without installing real hooks.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from pyprofi.profiling import CallSite, Profiler


class FakeClock:
    """Clock returning ``now``; advance it with ``tick``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def tick(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class FakeInstrumentation:
    """Records install/remove calls and lets tests emit events directly."""

    def __init__(self) -> None:
        self.installed = False
        self.install_count = 0
        self.remove_count = 0
        self.frequency: Optional[int] = None
        self._on_call: Optional[Callable[[CallSite], None]] = None
        self._on_return: Optional[Callable[[CallSite], None]] = None

    def install(self, on_call, on_return, frequency: int = 0) -> None:
        self.installed = True
        self.install_count += 1
        self.frequency = frequency
        self._on_call = on_call
        self._on_return = on_return

    def remove(self) -> None:
        self.installed = False
        self.remove_count += 1

    def call(self, site: CallSite) -> None:
        if self.installed:
            self._on_call(site)

    def ret(self, site: CallSite) -> None:
        if self.installed:
            self._on_return(site)


class Driver:
    """Emits balanced call/return pairs against a FakeInstrumentation."""

    def __init__(self, clock: FakeClock, hooks: FakeInstrumentation) -> None:
        self.clock = clock
        self.hooks = hooks

    def invoke(self, site: CallSite, seconds: float, times: int = 1) -> None:
        for _ in range(times):
            self.hooks.call(site)
            self.clock.tick(seconds)
            self.hooks.ret(site)

    def nest(self, sites: List[CallSite], seconds: float) -> None:
        """Call ``sites`` nested in order, spending ``seconds`` in the innermost."""
        for site in sites:
            self.hooks.call(site)
        self.clock.tick(seconds)
        for site in reversed(sites):
            self.hooks.ret(site)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=100.0)


@pytest.fixture
def hooks() -> FakeInstrumentation:
    return FakeInstrumentation()


@pytest.fixture
def profiler(clock: FakeClock, hooks: FakeInstrumentation) -> Profiler:
    return Profiler(clock=clock, instrumentation=hooks)


@pytest.fixture
def driver(clock: FakeClock, hooks: FakeInstrumentation) -> Driver:
    return Driver(clock, hooks)
