"""Call profiler session.

``Profiler`` owns one profiling session: it arms the instrumentation, turns
call/return events into per-function timing and call counts, and writes the
sorted report. The clock and the instrumentation are injectable so sessions
can be driven deterministically in tests.

Example:
    profiler = Profiler()
    profiler.start()
    some_function()
    profiler.stop()
    profiler.write_report("MyProfilingReport.txt")
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Union

from pyprofi.config import ProfilerConfig
from pyprofi.logging import get_logger
from pyprofi.profiling.hooks import Instrumentation, SysProfileInstrumentation
from pyprofi.profiling.identity import CallSite
from pyprofi.profiling.registry import FunctionReport, ReportRegistry
from pyprofi.profiling.reporter import render_report, write_report_file
from pyprofi.profiling.sorting import sort_reports, sorted_reports
from pyprofi.types import Clock, SortMethod, StartMode, resolve_clock

logger = get_logger(__name__)


class Profiler:
    """Deterministic call profiler keyed by function identity.

    Lifecycle: ``start`` installs the hooks, ``stop`` removes them, ``reset``
    drops all collected data. In ``"once"`` mode a session that has completed
    one start/stop cycle ignores further ``start``/``stop`` calls until reset.
    """

    def __init__(
        self,
        config: Optional[ProfilerConfig] = None,
        clock: Optional[Clock] = None,
        instrumentation: Optional[Instrumentation] = None,
    ):
        """Initialize a profiler session.

        Args:
            config: Session configuration. Copied, so later setter calls do not
                modify the caller's object.
            clock: Time source in seconds. Defaults to the configured clock kind.
            instrumentation: Event source. Defaults to ``sys.setprofile`` on the
                thread that calls ``start``.
        """
        self.config = replace(config) if config is not None else ProfilerConfig()
        self._clock: Clock = clock or resolve_clock(self.config.clock)
        self._instrumentation: Instrumentation = (
            instrumentation or SysProfileInstrumentation()
        )
        self.registry = ReportRegistry(
            merge_truncated_titles=self.config.merge_truncated_titles
        )
        self._finished = False
        self._run_once = False

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def on_call(self, site: CallSite) -> None:
        """Arm the timer for the called function."""
        report = self.registry.get_or_create(site.resolve())
        report.enter(self._clock())

    def on_return(self, site: CallSite) -> None:
        """Stop the timer for the returning function and count the call."""
        now = self._clock()
        self.registry.get_or_create(site.resolve()).exit(now)

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._instrumentation.installed

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def run_once(self) -> bool:
        return self._run_once

    @property
    def hook_frequency(self) -> int:
        return self.config.hook_frequency

    @property
    def sort_method(self) -> SortMethod:
        return self.config.sort_method

    @property
    def reports(self) -> List[FunctionReport]:
        """Reports in first-seen order (or last-written order after ``write_report``)."""
        return self.registry.reports

    def _should_skip(self) -> bool:
        return self._run_once and self._finished

    def start(self, mode: Union[StartMode, str] = StartMode.NORMAL) -> None:
        """Start profiling every function called until ``stop``.

        Args:
            mode: ``"normal"`` or ``"once"``. In once mode the session can
                only complete one start/stop cycle until ``reset``.
        """
        mode = StartMode.coerce(mode)
        if mode is StartMode.ONCE:
            if self._should_skip():
                logger.debug("Run-once session already finished; start ignored")
                return
            self._run_once = True

        if self.is_active:
            logger.debug("Profiler already active; start ignored")
            return

        self._finished = False
        logger.debug(
            f"Starting profiler (mode={mode.name.lower()}, "
            f"hook_frequency={self.config.hook_frequency})"
        )
        self._instrumentation.install(
            self.on_call, self.on_return, self.config.hook_frequency
        )

    def stop(self) -> None:
        """Stop profiling. Collected data is kept."""
        if self._should_skip() or not self.is_active:
            return
        self._instrumentation.remove()
        self._finished = True
        logger.debug(f"Profiler stopped with {len(self.registry)} function reports")

    def reset(self) -> None:
        """Drop collected data and session flags; configuration is kept."""
        if self.is_active:
            self._instrumentation.remove()
        self.registry.reset()
        self._finished = False
        self._run_once = False
        logger.debug("Profiler reset")

    def set_hook_frequency(self, frequency: int) -> None:
        """Deliver every Nth call event from the next ``start`` (0 = every event)."""
        if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 0:
            raise ValueError(
                f"Hook frequency must be a non-negative integer, got {frequency!r}"
            )
        self.config.hook_frequency = frequency

    def set_sort_method(self, sort_method: Union[SortMethod, str]) -> None:
        """Choose report ordering: ``"duration"`` or ``"count"``."""
        self.config.sort_method = SortMethod.coerce(sort_method)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def sorted_reports(self) -> List[FunctionReport]:
        """Return reports ordered by the configured sort method."""
        return sorted_reports(self.registry.reports, self.config.sort_method)

    def report_text(self) -> str:
        return render_report(self.sorted_reports())

    def write_report(self, path: Union[str, Path, None] = None) -> Path:
        """Sort the reports and write them to ``path``.

        Args:
            path: Destination file. Defaults to ``config.report_path``.

        Returns:
            The path written.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        target = Path(path) if path is not None else Path(self.config.report_path)
        sort_reports(self.registry.reports, self.config.sort_method)
        write_report_file(self.registry.reports, target)
        logger.info(f"Report written to {target}")
        return target

    def __enter__(self) -> Profiler:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
