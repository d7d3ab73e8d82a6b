"""Command-line interface for pyprofi."""

from __future__ import annotations

import argparse
import json
import logging
import runpy
import sys
from dataclasses import replace
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from pyprofi.config import ProfilerConfig
from pyprofi.logging import get_logger, set_global_log_level
from pyprofi.profiling import Profiler, ReportWriteError
from pyprofi.types import ClockKind, SortMethod
from pyprofi.utils.output_paths import ensure_parent_dir, report_path_for_run

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _load_config(
    config_path: Optional[Path],
    sort: Optional[str] = None,
    hook_count: Optional[int] = None,
    clock: Optional[str] = None,
) -> ProfilerConfig:
    """Load the config file (if any) and apply command-line overrides.

    Exits with status 1 when the file is missing or invalid.
    """
    config = ProfilerConfig()
    if config_path is not None:
        try:
            config = ProfilerConfig.from_yaml(config_path.read_text())
        except FileNotFoundError:
            logger.error(f"Config file not found: {config_path}")
            print(f"❌ ERROR: Config file not found: {config_path}")
            sys.exit(1)
        except ValueError as e:
            logger.error(f"Invalid config file {config_path}: {e}")
            print(f"❌ ERROR: Invalid config file {config_path}: {e}")
            sys.exit(1)

    overrides: Dict[str, Any] = {}
    if sort is not None:
        overrides["sort_method"] = SortMethod.from_string(sort)
    if hook_count is not None:
        overrides["hook_frequency"] = hook_count
    if clock is not None:
        overrides["clock"] = ClockKind.from_string(clock)
    if overrides:
        try:
            config = replace(config, **overrides)
        except ValueError as e:
            logger.error(str(e))
            print(f"❌ ERROR: {e}")
            sys.exit(1)
    return config


def _run_target(
    target: str,
    target_args: List[str],
    config: ProfilerConfig,
    module: bool = False,
    report_override: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    stdout: bool = False,
) -> None:
    """Run a script or module under the profiler and write the report.

    The report is written even when the program raises. A ``SystemExit``
    from the program is re-raised with its code after the report is written;
    any other exception exits with status 1.

    Args:
        target: Script path, or module name when ``module`` is True.
        target_args: Arguments passed to the program as ``sys.argv[1:]``.
        config: Profiler configuration.
        module: Run ``target`` as a module (like ``python -m``).
        report_override: Explicit report path.
        output_dir: Directory for the report when no explicit path is given.
        stdout: Also print the report to stdout.
    """
    if not module and not Path(target).is_file():
        logger.error(f"Script not found: {target}")
        print(f"❌ ERROR: Script not found: {target}")
        sys.exit(1)

    kind = "module" if module else "script"
    logger.info(f"Profiling {kind}: {target}")
    _start_time = perf_counter()

    profiler = Profiler(config)
    exit_code: Any = None
    program_failed = False

    saved_argv = sys.argv
    sys.argv = [target, *target_args]
    try:
        profiler.start()
        try:
            if module:
                runpy.run_module(target, run_name="__main__", alter_sys=True)
            else:
                runpy.run_path(target, run_name="__main__")
        finally:
            profiler.stop()
            sys.argv = saved_argv
    except SystemExit as e:
        exit_code = e.code
        logger.debug(f"Profiled program exited with code {exit_code!r}")
    except Exception as e:
        program_failed = True
        logger.error(f"Profiled {kind} failed: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Profiled {kind} failed: {type(e).__name__}: {e}")

    report_path = report_path_for_run(config.report_path, output_dir, report_override)
    try:
        ensure_parent_dir(report_path)
        profiler.write_report(report_path)
    except (ReportWriteError, OSError) as e:
        logger.error(f"Failed to write report: {e}")
        print(f"❌ ERROR: {e}")
        sys.exit(1)

    print(f"✅ Report written to: {report_path}")
    if stdout:
        print(profiler.report_text(), end="")

    _elapsed = perf_counter() - _start_time
    logger.info(
        f"Profiled {len(profiler.reports)} functions in {_format_duration(_elapsed)}"
    )

    if program_failed:
        sys.exit(1)
    if exit_code not in (None, 0):
        raise SystemExit(exit_code)


def _show_config(config: ProfilerConfig) -> None:
    """Print the effective configuration as JSON."""
    print(json.dumps(config.to_dict(), indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``pyprofi`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="pyprofi",
        description="Profile Python programs and write a per-function timing report.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,config}",
        help="Available commands",
    )

    # Run command
    run_parser = subparsers.add_parser("run", help="Profile a script or module")
    run_parser.add_argument(
        "--module",
        "-m",
        action="store_true",
        help="Treat TARGET as a module name and run it like 'python -m'",
    )
    run_parser.add_argument(
        "--report",
        "-r",
        type=Path,
        default=None,
        help=(
            "Report file path (default: ProFi.txt or the config's report_path;"
            " placed under --output when relative)"
        ),
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output directory for the report file",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print the report to stdout",
    )
    run_parser.add_argument("target", help="Script path or module name")
    run_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the profiled program",
    )

    # Config command
    config_parser = subparsers.add_parser(
        "config", help="Validate a config file and print the effective settings"
    )

    for p in (run_parser, config_parser):
        p.add_argument(
            "--config",
            "-c",
            type=Path,
            default=None,
            help="YAML profiler configuration file",
        )
        p.add_argument(
            "--sort",
            choices=[m.name.lower() for m in SortMethod],
            default=None,
            help="Report ordering (default: duration)",
        )
        p.add_argument(
            "--hook-count",
            type=int,
            default=None,
            help="Record every Nth call event; 0 records every event",
        )
        p.add_argument(
            "--clock",
            choices=[c.name.lower() for c in ClockKind],
            default=None,
            help="Time source: process CPU time or wall-clock time (default: cpu)",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    config = _load_config(args.config, args.sort, args.hook_count, args.clock)

    if args.command == "run":
        _run_target(
            target=args.target,
            target_args=args.args,
            config=config,
            module=args.module,
            report_override=args.report,
            output_dir=args.output,
            stdout=args.stdout,
        )
    elif args.command == "config":
        _show_config(config)


if __name__ == "__main__":
    main()
