"""Command-line front door for spoiler.

Parses CLI options, merges them over the config file, and configures logging.
Then either prints one job table (``--once``) or launches the dashboard.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import shutil
import sys
from pathlib import Path

from .config import CONFIG_PATH, MIN_REFRESH_SECONDS, DashboardSettings, load_settings
from .daemon import DaemonGateway, TransmissionGateway
from .errors import GatewayError
from .formatting import format_field
from .logging_setup import configure_logging
from .render.ansi import fit_cell
from .render.job_list import EMPTY_LIST_TEXT, RIGHT_ALIGNED, column_widths
from .runtime import run_dashboard
from .state import ColumnSpec, Snapshot, StateStore
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _refresh_seconds(value: str) -> float:
    """argparse type for the refresh interval."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed != parsed or parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return max(MIN_REFRESH_SECONDS, parsed)


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spoiler",
        description="Watch and control torrent jobs on a remote Transmission daemon.",
    )
    parser.add_argument("--host", default=None, help="Daemon host (default from config, else 127.0.0.1).")
    parser.add_argument("--port", type=_positive_int, default=None, help="Daemon RPC port.")
    parser.add_argument("--username", default=None, help="RPC username.")
    parser.add_argument("--password", default=None, help="RPC password.")
    parser.add_argument("--rpc-path", default=None, help="RPC endpoint path.")
    parser.add_argument(
        "--refresh",
        type=_refresh_seconds,
        default=None,
        metavar="SECONDS",
        help="Seconds between daemon refreshes.",
    )
    parser.add_argument(
        "--torrent-dir",
        default=None,
        metavar="DIR",
        help="Directory listed by the add-torrent picker.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--config", default=None, metavar="PATH", help=f"Config file (default: {CONFIG_PATH}).")
    parser.add_argument("--log-level", default=None, help="Log level for the log file (default: WARNING).")
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Log file path.")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print the job table once and exit without starting the dashboard.",
    )
    return parser


def apply_cli_overrides(settings: DashboardSettings, args: argparse.Namespace) -> DashboardSettings:
    """Return ``settings`` with every explicitly given CLI option applied."""
    connection = settings.connection
    connection_changes = {
        name: getattr(args, name)
        for name in ("host", "port", "username", "password", "rpc_path")
        if getattr(args, name) is not None
    }
    if connection_changes:
        connection = dataclasses.replace(connection, **connection_changes)
    changes: dict[str, object] = {"connection": connection}
    if args.refresh is not None:
        changes["refresh_seconds"] = args.refresh
    if args.torrent_dir is not None:
        changes["torrent_dir"] = Path(args.torrent_dir)
    if args.theme is not None:
        changes["theme"] = args.theme
    if args.no_color:
        changes["no_color"] = True
    return dataclasses.replace(settings, **changes)


def format_job_table(snapshot: Snapshot, columns: ColumnSpec, width: int) -> str:
    """Plain-text job table for ``--once`` output."""
    fields = columns.visible_fields()
    widths = column_widths(fields, width)
    header = " ".join(fit_cell(field.title, widths[field], field in RIGHT_ALIGNED) for field in fields)
    lines = [header.rstrip()]
    if not snapshot.jobs:
        lines.append(EMPTY_LIST_TEXT)
    for job in snapshot.jobs:
        cells = [fit_cell(format_field(job, field), widths[field], field in RIGHT_ALIGNED) for field in fields]
        lines.append(" ".join(cells).rstrip())
    return "\n".join(lines) + "\n"


def print_once(settings: DashboardSettings, gateway: DaemonGateway | None = None) -> None:
    if gateway is None:
        gateway = TransmissionGateway(settings.connection)
    store = StateStore(sort=settings.sort)
    try:
        snapshot = store.refresh(gateway)
    except GatewayError as exc:
        raise SystemExit(f"spoiler: {exc}") from exc
    sys.stdout.write(format_job_table(snapshot, settings.columns, _default_render_width()))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run spoiler.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    """
    args = build_parser().parse_args(argv)
    config_path = Path(args.config).expanduser() if args.config else None
    log_path = configure_logging(args.log_level, Path(args.log_file) if args.log_file else None)
    if log_path is not None:
        logger.debug("logging to %s", log_path)
    settings = apply_cli_overrides(load_settings(config_path), args)

    if args.once:
        print_once(settings)
        return
    if not _is_interactive():
        raise SystemExit("spoiler: the dashboard needs an interactive terminal (try --once).")
    run_dashboard(settings)


if __name__ == "__main__":
    main()
