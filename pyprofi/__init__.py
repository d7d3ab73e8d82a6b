"""pyprofi: deterministic call profiler for Python programs.

pyprofi hooks function call and return events, accumulates per-function
time and call counts, and writes a sorted fixed-width text report.

Primary API:
    Profiler - An independent profiling session
    start(), stop(), reset(), write_report() - Control the default session
    set_hook_frequency(), set_sort_method() - Configure the default session
    ProfilerConfig - Session configuration, loadable from YAML

Example:
    import pyprofi

    pyprofi.start()
    some_function()
    another_function()
    pyprofi.stop()
    pyprofi.write_report("MyProfilingReport.txt")
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pyprofi import cli, logging
from pyprofi._version import __version__
from pyprofi.config import ProfilerConfig
from pyprofi.profiling import (
    CallSite,
    FunctionIdentity,
    FunctionReport,
    Profiler,
    ReportRegistry,
    ReportWriteError,
)
from pyprofi.types import ClockKind, SortMethod, StartMode

#: Session used by the module-level functions below.
default_profiler = Profiler()


def start(mode: Union[StartMode, str] = StartMode.NORMAL) -> None:
    """Start the default session; see ``Profiler.start``."""
    default_profiler.start(mode)


def stop() -> None:
    """Stop the default session."""
    default_profiler.stop()


def reset() -> None:
    """Clear the default session's data."""
    default_profiler.reset()


def write_report(path: Union[str, Path, None] = None) -> Path:
    """Write the default session's report (``ProFi.txt`` unless configured)."""
    return default_profiler.write_report(path)


def set_hook_frequency(frequency: int) -> None:
    default_profiler.set_hook_frequency(frequency)


def set_sort_method(sort_method: Union[SortMethod, str]) -> None:
    default_profiler.set_sort_method(sort_method)


__all__ = [
    # Version
    "__version__",
    # Session
    "Profiler",
    "ProfilerConfig",
    "default_profiler",
    "start",
    "stop",
    "reset",
    "write_report",
    "set_hook_frequency",
    "set_sort_method",
    # Records
    "CallSite",
    "FunctionIdentity",
    "FunctionReport",
    "ReportRegistry",
    "ReportWriteError",
    # Types
    "ClockKind",
    "SortMethod",
    "StartMode",
    # Utilities
    "cli",
    "logging",
]
