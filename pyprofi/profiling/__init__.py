"""Call profiling engine for pyprofi.

This package exposes the profiling APIs:

- ``Profiler``: session control and call/return accounting.
- ``ReportRegistry`` and ``FunctionReport``: per-function records.
- ``CallSite`` and ``FunctionIdentity``: call-site metadata and its resolved key.
- ``SysProfileInstrumentation``: ``sys.setprofile``-based event source.
- ``write_report_file`` and ``render_report``: fixed-width text output.
"""

from .hooks import (
    Instrumentation as Instrumentation,
)
from .hooks import (
    SysProfileInstrumentation as SysProfileInstrumentation,
)
from .identity import (
    CallSite as CallSite,
)
from .identity import (
    FunctionIdentity as FunctionIdentity,
)
from .profiler import (
    Profiler as Profiler,
)
from .registry import (
    FunctionReport as FunctionReport,
)
from .registry import (
    ReportRegistry as ReportRegistry,
)
from .reporter import (
    ReportWriteError as ReportWriteError,
)
from .reporter import (
    render_report as render_report,
)
from .reporter import (
    write_report_file as write_report_file,
)
from .sorting import (
    sort_reports as sort_reports,
)

__all__ = [
    "CallSite",
    "FunctionIdentity",
    "FunctionReport",
    "Instrumentation",
    "Profiler",
    "ReportRegistry",
    "ReportWriteError",
    "SysProfileInstrumentation",
    "render_report",
    "sort_reports",
    "write_report_file",
]
