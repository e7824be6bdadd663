"""termpad CLI entry point.

Allows running via `python -m termpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .cli import USAGE, UsageError, parse_args


def get_version_string() -> str:
    try:
        return importlib.metadata.version("termpad")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def configure_logging() -> Optional[Path]:
    """Send logs to a file when TERMPAD_LOG names a level.

    The terminal belongs to the editor, so nothing is logged to it.

    Returns:
        The log file in use, or None if logging stays off
    """
    level_name = os.environ.get("TERMPAD_LOG")
    if not level_name:
        return None
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.DEBUG

    from .config import log_dir
    log_file = os.environ.get("TERMPAD_LOG_FILE")
    if log_file:
        path = Path(log_file)
    else:
        path = log_dir() / "termpad.log"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"termpad: cannot create log directory {path.parent}: {e}", file=sys.stderr)
        return None
    logging.basicConfig(
        filename=str(path),
        level=level,
        format="%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
    )
    return path


def main(argv: Optional[Sequence[str]] = None) -> None:
    args_list = sys.argv[1:] if argv is None else list(argv)
    try:
        args = parse_args(args_list)
    except UsageError as e:
        print(f"termpad: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    if args.show_version:
        print(get_version_string())
        return
    if args.show_help:
        print(USAGE)
        return

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .config import EditorConfig
    from .editor import Editor
    from .session import EditorSession

    config = EditorConfig.load()
    session = EditorSession.open(args.path, args.line_index, config)
    Editor(session, config).run()


if __name__ == "__main__":  # pragma: no cover
    main()
