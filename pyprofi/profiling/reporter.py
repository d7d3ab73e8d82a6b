"""Fixed-width text report for profiled functions.

The layout is one header line followed by one line per function::

    | FILE ...: FUNCTION ...: LINE ...: TIME ...: CALLED ...|
    | <title>: 0.125               : 0000003             |

Columns are left-justified at 50/40/20/20/20 characters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from pyprofi.profiling.registry import FunctionReport

#: Default report file name.
DEFAULT_REPORT_PATH = "ProFi.txt"

FORMAT_HEADER = "| %-50s: %-40s: %-20s: %-20s: %-20s|\n"
FORMAT_OUTPUT_LINE = "| %s: %-20s: %-20s|\n"


class ReportWriteError(RuntimeError):
    """Raised when the report file cannot be written.

    Attributes:
        path: Report path that failed.
        error: Underlying OS error.
    """

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"Failed to write profiling report to '{path}': {reason}")


def format_header() -> str:
    return FORMAT_HEADER % ("FILE", "FUNCTION", "LINE", "TIME", "CALLED")


def format_report_line(report: FunctionReport) -> str:
    timer = "%04.3f" % report.duration
    called = "%07d" % report.call_count
    return FORMAT_OUTPUT_LINE % (report.title, timer, called)


def render_lines(reports: Iterable[FunctionReport]) -> List[str]:
    """Return the header line followed by one line per report, in input order."""
    lines = [format_header()]
    lines.extend(format_report_line(r) for r in reports)
    return lines


def render_report(reports: Iterable[FunctionReport]) -> str:
    """Render the full report text."""
    return "".join(render_lines(reports))


def write_report_file(
    reports: Iterable[FunctionReport], path: Union[str, Path] = DEFAULT_REPORT_PATH
) -> Path:
    """Write the report to ``path``, replacing any existing file.

    Args:
        reports: Reports in the order they should appear.
        path: Destination file.

    Returns:
        The path written.

    Raises:
        ReportWriteError: If the file cannot be opened or written.
    """
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as fh:
            for line in render_lines(reports):
                fh.write(line)
    except OSError as exc:
        raise ReportWriteError(path, exc) from exc
    return path
