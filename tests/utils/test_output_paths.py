from __future__ import annotations

from pathlib import Path

from pyprofi.utils.output_paths import (
    ensure_parent_dir,
    report_path_for_run,
    resolve_override_path,
)


def test_default_report_path_without_output_dir() -> None:
    """Without overrides the default path is used."""
    assert report_path_for_run("ProFi.txt", None, None) == Path("ProFi.txt")


def test_output_dir_uses_default_file_name(tmp_path: Path) -> None:
    """An output directory keeps the default file name."""
    path = report_path_for_run("reports/ProFi.txt", tmp_path, None)
    assert path == tmp_path / "ProFi.txt"


def test_relative_override_under_output_dir(tmp_path: Path) -> None:
    """A relative override lands under the output directory."""
    path = report_path_for_run("ProFi.txt", tmp_path, Path("mine.txt"))
    assert path == tmp_path / "mine.txt"


def test_absolute_override_wins(tmp_path: Path) -> None:
    """An absolute override ignores the output directory."""
    absolute = tmp_path / "abs.txt"
    assert report_path_for_run("ProFi.txt", Path("elsewhere"), absolute) == absolute


def test_resolve_override_none() -> None:
    assert resolve_override_path(None, Path("out")) is None


def test_resolve_override_relative_without_output_dir() -> None:
    assert resolve_override_path(Path("r.txt"), None) == Path("r.txt")


def test_ensure_parent_dir_creates_directories(tmp_path: Path) -> None:
    """Missing parent directories are created."""
    target = tmp_path / "a" / "b" / "ProFi.txt"
    ensure_parent_dir(target)
    assert target.parent.is_dir()
