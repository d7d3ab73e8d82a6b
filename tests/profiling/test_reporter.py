"""Tests for the fixed-width text report."""

from pathlib import Path

import pytest

from pyprofi.profiling.identity import FunctionIdentity
from pyprofi.profiling.registry import FunctionReport
from pyprofi.profiling.reporter import (
    ReportWriteError,
    format_header,
    format_report_line,
    render_report,
    write_report_file,
)

HEADER = (
    "| "
    + "FILE".ljust(50)
    + ": "
    + "FUNCTION".ljust(40)
    + ": "
    + "LINE".ljust(20)
    + ": "
    + "TIME".ljust(20)
    + ": "
    + "CALLED".ljust(20)
    + "|\n"
)


def _report(name="f", duration=1.5, count=3, line=12):
    return FunctionReport(
        identity=FunctionIdentity("app.py", name, line),
        duration=duration,
        call_count=count,
    )


class TestFormatting:
    def test_header(self):
        assert format_header() == HEADER

    def test_report_line(self):
        """Rows show duration with three decimals and a zero-padded count."""
        report = _report()
        line = format_report_line(report)
        assert line == f"| {report.title}: {'1.500':<20}: {'0000003':<20}|\n"

    def test_columns_align_with_header(self):
        """Rows and header have the same width."""
        line = format_report_line(_report(duration=12.3456, count=1234567))
        assert len(line) == len(HEADER)
        assert "12.346" in line
        assert "1234567" in line

    def test_small_duration_format(self):
        """Sub-second durations keep a leading zero."""
        assert "0.000" in format_report_line(_report(duration=0.0))

    def test_render_report_keeps_input_order(self):
        """Rendering keeps the caller's order."""
        text = render_report(
            [_report(name="second", duration=0.1), _report(name="first", duration=9.0)]
        )
        lines = text.splitlines(keepends=True)
        assert lines[0] == HEADER
        assert "second" in lines[1]
        assert "first" in lines[2]

    def test_render_empty(self):
        assert render_report([]) == HEADER


class TestWriteReportFile:
    def test_writes_file(self, tmp_path: Path):
        """The report file holds header and rows."""
        target = tmp_path / "ProFi.txt"
        result = write_report_file([_report()], target)
        assert result == target
        content = target.read_text(encoding="utf-8")
        assert content.startswith(HEADER)
        assert content.count("\n") == 2

    def test_overwrites_existing_file(self, tmp_path: Path):
        """An existing file is replaced."""
        target = tmp_path / "ProFi.txt"
        target.write_text("stale contents that are longer than a header\n" * 100)
        write_report_file([], target)
        assert target.read_text(encoding="utf-8") == HEADER

    def test_accepts_string_path(self, tmp_path: Path):
        target = tmp_path / "report.txt"
        write_report_file([], str(target))
        assert target.exists()

    def test_missing_directory_raises_with_path(self, tmp_path: Path):
        """A missing parent directory raises with the offending path."""
        target = tmp_path / "missing" / "ProFi.txt"
        with pytest.raises(ReportWriteError) as exc_info:
            write_report_file([_report()], target)

        err = exc_info.value
        assert err.path == target
        assert isinstance(err.error, FileNotFoundError)
        assert isinstance(err.__cause__, FileNotFoundError)
        assert str(target) in str(err)

    def test_directory_as_target_raises(self, tmp_path: Path):
        """A directory as target raises ReportWriteError."""
        with pytest.raises(ReportWriteError):
            write_report_file([], tmp_path)
