"""Utilities for building CLI report output paths.

The report path for ``pyprofi run`` is chosen from an explicit override, an
optional output directory, and the configured default file name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_override_path(
    override: Optional[Path], output_dir: Optional[Path]
) -> Optional[Path]:
    """Resolve an override path with respect to an optional output directory.

    - Absolute override paths are returned as-is.
    - Relative override paths are interpreted as relative to ``output_dir``
      when provided; otherwise relative to the current working directory.

    Args:
        override: Path provided by the user to override the default.
        output_dir: Optional base directory for relative overrides.

    Returns:
        The resolved path or None if no override was provided.
    """
    if override is None:
        return None
    if override.is_absolute() or output_dir is None:
        return override
    return output_dir / override


def report_path_for_run(
    default_path: str,
    output_dir: Optional[Path],
    report_override: Optional[Path],
) -> Path:
    """Determine the report path for the ``run`` command.

    Behavior:
    - If ``report_override`` is provided, return it (relative to ``output_dir``
      when that is specified).
    - Else if ``output_dir`` is provided, return ``output_dir/<default file name>``.
    - Else, return ``default_path`` as given.

    Args:
        default_path: Configured report path, e.g. ``ProFi.txt``.
        output_dir: Optional base output directory.
        report_override: Optional explicit report file path.

    Returns:
        The path where the report should be written.
    """
    resolved_override = resolve_override_path(report_override, output_dir)
    if resolved_override is not None:
        return resolved_override
    if output_dir is not None:
        return output_dir / Path(default_path).name
    return Path(default_path)
