"""Command-line front door for omega.

Parses CLI options, resolves the launch target, and opens it in a fresh
session. Prints the resulting session status for the display layer.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from . import config
from .loader import open_paths, resolve_launch_target
from .session import Session

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_level_name(value: str) -> str:
    """argparse type for stdlib log level names."""
    level = value.strip().upper()
    if level not in config.LOG_LEVEL_NAMES:
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return level


def configure_logging(cli_level: str | None = None) -> str:
    """Configure root logging once; CLI flag beats env var beats config."""
    level = cli_level or os.environ.get("OMEGA_LOG_LEVEL", "").strip().upper() or None
    if level not in config.LOG_LEVEL_NAMES:
        level = config.load_log_level() or "WARNING"
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    return level


def session_status(session: Session, dirty_marker: str) -> dict[str, object]:
    current = session.current_file
    return {
        "project": str(session.project_root),
        "current_file": str(current) if current is not None else None,
        "title": session.current_title(dirty_marker),
        "documents": [str(path) for path in session.document_paths()],
        "open": len(session.store),
        "dirty": len(session.dirty_paths()),
    }


def format_status(status: dict[str, object]) -> str:
    lines = [f"project: {status['project']}"]
    if status["current_file"] is not None:
        lines.append(f"file:    {status['current_file']}")
        lines.append(f"title:   {status['title']}")
    lines.append(f"open:    {status['open']} document(s), {status['dirty']} modified")
    return "\n".join(lines) + "\n"


def run(default_path: Path | None = None) -> Session:
    """Parse CLI arguments, open a project or file, and print its status.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used, or the remembered project with ``--last``.
    """
    parser = argparse.ArgumentParser(description="Open a project or file in an omega editor session.")
    parser.add_argument("path", nargs="?", default=None, help="File or directory. Defaults to current directory.")
    parser.add_argument("--last", action="store_true", help="Reopen the last project when no path is given.")
    parser.add_argument("--log-level", type=_log_level_name, default=None, help="Logging level (default: WARNING).")
    parser.add_argument("--json", action="store_true", help="Print the session status as JSON.")
    args = parser.parse_args()

    configure_logging(args.log_level)

    last_project = config.load_last_project() if args.last else None
    if args.path is not None:
        target = Path(args.path)
    elif last_project is not None:
        target = last_project
    else:
        target = default_path if default_path is not None else Path.cwd()

    try:
        project_path, file_path = resolve_launch_target(target)
    except ValueError as exc:
        logger.debug("rejected launch target: %s", exc)
        raise SystemExit(str(exc)) from exc

    session = Session(fallback_root=config.load_fallback_root())
    open_paths(session, project_path, file_path)
    config.save_last_project(session.project_root)

    status = session_status(session, config.load_dirty_marker())
    if args.json:
        sys.stdout.write(json.dumps(status, indent=2) + "\n")
    else:
        sys.stdout.write(format_status(status))
    return session


def main(default_path: Path | None = None) -> None:
    run(default_path)


if __name__ == "__main__":
    main()
