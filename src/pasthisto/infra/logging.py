"""Central logging infrastructure for pasthisto command-line use.

Library code (the decoder) only ever calls ``logging.getLogger(__name__)``;
handlers are configured here, by the CLI.

Environment variables:
    PASTHISTO_LOG_LEVEL   Override root log level (default: INFO).

Public API:
    setup_logging(path=None, also_console=True, suppress_initial_message=False)
    log_run_header(command)
    reset_logging()
"""
from __future__ import annotations

import logging
import os
from logging.handlers import WatchedFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _is_console_handler(h: logging.Handler) -> bool:
    return isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)


def setup_logging(
    log_path=None,
    also_console: bool = True,
    suppress_initial_message: bool = False,
    level: str | None = None,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    log_path : str | Path | None
        Optional log file. A ``WatchedFileHandler`` is (re)used so external
        rotation is respected; handlers for other files are removed.
    also_console : bool, default True
        Ensure exactly one stderr stream handler; when False, remove them.
    suppress_initial_message : bool, default False
        Skip the "Logging initialized" line.
    level : str | None
        Level name from configuration; ``PASTHISTO_LOG_LEVEL`` takes precedence.

    A more verbose level already set on the root logger is never downgraded.
    """
    root = logging.getLogger()
    env_level = (os.getenv("PASTHISTO_LOG_LEVEL") or level or "INFO").upper()
    desired_level = getattr(logging, env_level, logging.INFO)
    if root.level > desired_level or root.level == logging.NOTSET:
        root.setLevel(desired_level)
    effective_level = logging.getLevelName(root.level)

    path = Path(log_path).resolve() if log_path else None
    existing_same = False
    for h in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        if path is not None and Path(h.baseFilename).resolve() == path:
            existing_same = True
            continue
        root.removeHandler(h)
        h.close()

    if also_console:
        if not any(_is_console_handler(h) for h in root.handlers):
            ch = logging.StreamHandler()
            ch.setLevel(root.level)
            ch.setFormatter(logging.Formatter(_FORMAT))
            root.addHandler(ch)
    else:
        for h in [h for h in root.handlers if _is_console_handler(h)]:
            root.removeHandler(h)
            h.close()

    if path is not None and not existing_same:
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = WatchedFileHandler(path, mode="a", encoding="utf-8")
        fh.setLevel(root.level)
        fh.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(fh)
    if not suppress_initial_message:
        target = f"Log file: {path}" if path else "console only"
        root.info(f"Logging initialized. {target} (level={effective_level})")


def log_run_header(command: str) -> None:
    """Emit ``pasthisto <version> | cmd=<command>``."""
    from pasthisto import __version__

    logging.getLogger().info(f"pasthisto {__version__} | cmd={command}")


def reset_logging() -> None:
    """Remove and close every handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


__all__ = ["setup_logging", "log_run_header", "reset_logging"]
