"""
Command-line interface for cmdbridge.

This module is a host adapter: it resolves configuration and host paths
once, calls the library, and turns typed results and classified errors into
terminal output and exit codes.
"""

import argparse
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Dict, List, Optional

from ..bulk import summarize_outcome
from ..config import get_config, set_config_path
from ..host import (
    HostPaths,
    capture_region,
    list_recent_screenshots,
    open_screenshots_folder,
)
from ..models.config import AppConfig
from ..models.results import BulkStatus
from ..system import CommandExecutor, ProcessInventory, is_tool_available, search_files
from ..templates import compile_template
from ..validation import CommandError, ValidationError, handle_cli_error

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

logger = logging.getLogger(__name__)

# Exit codes for bulk commands, by outcome status.
EXIT_CODES = {
    BulkStatus.SUCCESS: 0,
    BulkStatus.FAILURE: 1,
    BulkStatus.PARTIAL_FAILURE: 2,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="cmdbridge",
        description="Run OS commands and CLI tools and report typed results.",
    )
    parser.add_argument("--config", type=Path, help="Path to a config.toml file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ps_parser = subparsers.add_parser("ps", help="List running processes.")
    ps_parser.add_argument("--filter", help="Only show processes whose name contains this text.")

    kill_parser = subparsers.add_parser("kill", help="Forcefully terminate processes.")
    target = kill_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--pid", nargs="+", help="Process identifiers to terminate.")
    target.add_argument("--name", nargs="+", help="Image names to terminate.")
    kill_parser.add_argument(
        "--concurrent", action="store_true",
        help="Terminate on a bounded thread pool (see [bulk] max_workers).",
    )

    run_parser = subparsers.add_parser("run", help="Run a command template.")
    run_parser.add_argument("template", help='Command template, e.g. \'notepad.exe "%%s"\'.')
    run_parser.add_argument(
        "--set", dest="bindings", action="append", default=[], metavar="KEY=VALUE",
        help="Placeholder binding; may be repeated.",
    )
    run_parser.add_argument("--timeout", type=float, help="Timeout in seconds.")

    which_parser = subparsers.add_parser("which", help="Check whether a tool is on PATH.")
    which_parser.add_argument("tool")

    search_parser = subparsers.add_parser("search", help="Search files with the Everything CLI.")
    search_parser.add_argument("query")
    search_parser.add_argument("-n", "--max-results", type=int)

    shots_parser = subparsers.add_parser("screenshots", help="Screenshot helpers.")
    shots_parser.add_argument("action", choices=["list", "capture", "open"])

    return parser


def parse_bindings(pairs: List[str]) -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` strings into a bindings mapping.

    Raises:
        ValidationError: If a pair has no ``=`` or an empty key.
    """
    bindings = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValidationError(
                f"Binding must look like KEY=VALUE, got {pair!r}",
                field_name="--set",
                value=pair,
            )
        bindings[key] = value
    return bindings


def _cmd_ps(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    records = ProcessInventory(executor).list_processes()
    if args.filter:
        needle = args.filter.lower()
        records = [r for r in records if needle in r.name.lower()]
    print(f"{'Name':<32} {'PID':>8} {'Session':<16} {'#':>4} {'Memory':>14}")
    for record in records:
        print(
            f"{record.name:<32} {record.process_id:>8} {record.session_name:<16} "
            f"{record.session_number:>4} {record.memory_usage:>14}"
        )
    return 0


def _cmd_kill(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    inventory = ProcessInventory(executor)

    def _progress(completed: int, total: int) -> None:
        logger.info(f"Terminated {completed}/{total}")

    if args.pid:
        concurrent = args.concurrent or app_config.bulk.concurrent
        outcome = inventory.terminate_processes(
            args.pid,
            on_progress=_progress,
            max_workers=app_config.bulk.max_workers if concurrent else None,
        )
    else:
        outcome = inventory.terminate_by_names(args.name, on_progress=_progress)

    summary = summarize_outcome(outcome, "Terminate processes")
    print(summary.title)
    print(summary.message)
    return EXIT_CODES[summary.status]


def _cmd_run(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    spec = compile_template(args.template, parse_bindings(args.bindings))
    result = executor.execute_spec(spec, timeout=args.timeout)
    if result.stdout:
        print(result.stdout)
    if not result.exit_succeeded:
        sys.stderr.write(result.stderr)
        return 1
    return 0


def _cmd_which(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    available = is_tool_available(args.tool)
    print(f"{args.tool}: {'available' if available else 'not found'}")
    return 0 if available else 1


def _cmd_search(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    for path in search_files(
        args.query, max_results=args.max_results, executor=executor, config=app_config.tools
    ):
        print(path)
    return 0


def _cmd_screenshots(args, app_config: AppConfig, executor: CommandExecutor) -> int:
    host_paths = HostPaths.from_environment(os.environ, app_config.paths)

    if args.action == "capture":
        capture_region(host_paths.sharex_path or "", executor=executor)
        print("Started region capture")
        return 0

    if host_paths.screenshots_root is None:
        raise ValidationError(
            "paths.screenshots_root is not configured", field_name="paths.screenshots_root"
        )
    if args.action == "open":
        folder = open_screenshots_folder(
            host_paths.screenshots_root, executor=executor, config=app_config.tools
        )
        print(f"Opened {folder}")
        return 0

    screenshots = list_recent_screenshots(host_paths.screenshots_root)
    if not screenshots:
        print("No screenshots found this month.")
    for shot in screenshots:
        print(f"{shot.created_at:%Y-%m-%d %H:%M:%S}  {shot.path}")
    return 0


_COMMANDS = {
    "ps": _cmd_ps,
    "kill": _cmd_kill,
    "run": _cmd_run,
    "which": _cmd_which,
    "search": _cmd_search,
    "screenshots": _cmd_screenshots,
}


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Exits with 0 on success and 1 on errors. Bulk commands exit with 2 when
    only some items failed.

    Raises:
        SystemExit: Always, carrying the exit code.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    if args.config:
        set_config_path(args.config)
    try:
        app_config = get_config()
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    executor = CommandExecutor(app_config.executor)
    try:
        exit_code = _COMMANDS[args.command](args, app_config, executor)
    except (CommandError, ValidationError) as e:
        handle_cli_error(error=e, context=f"'{args.command}' command", exit_code=1, logger=logger)
    sys.exit(exit_code)


if __name__ == "__main__":
    main_cli()
