from __future__ import annotations

import logging
import pathlib
import sys
import threading
import time
import traceback
from typing import Optional, Union

import orjson

LOG_FILE_NAME = "reversi-engine.log"


def get_log_path(file_name: str = LOG_FILE_NAME) -> pathlib.Path:
    return pathlib.Path.cwd() / file_name


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_path: Optional[pathlib.Path] = None,
    overwrite: bool = True,
) -> None:
    """Configure root logging to a log file plus STDERR.

    - Overwrites the log file on first setup (per process) if overwrite is True
    - Installs sys.excepthook and threading excepthook
    - Captures warnings via logging

    Calling it again in the same process is a no-op.
    """
    root_logger = logging.getLogger()
    if getattr(root_logger, "_reversi_logging_configured", False):
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {level!r}")

    fmt = "%(asctime)s.%(msecs)03d %(levelname)s [%(process)d:%(threadName)s] %(name)s - %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = []
    file_mode = "w" if overwrite else "a"
    file_handler = logging.FileHandler(log_path or get_log_path(), mode=file_mode, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    handlers.append(file_handler)

    # Only warnings reach the console so they do not interleave with the board
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    handlers.append(stderr_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    root_logger._reversi_logging_configured = True  # type: ignore[attr-defined]

    logging.captureWarnings(True)

    sys.excepthook = _log_unhandled_exception  # type: ignore[assignment]
    threading.excepthook = _log_thread_exception  # type: ignore[assignment]


def _log_unhandled_exception(exc_type, exc_value, exc_tb) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("unhandled")
    tb_str = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logger.critical("Unhandled exception:\n%s", tb_str)


def _log_thread_exception(args) -> None:  # type: ignore[no-untyped-def]
    logger = logging.getLogger("thread")
    tb_str = "".join(traceback.format_exception(args.exc_type, args.exc_value, args.exc_traceback))
    logger.critical("Unhandled thread exception in %s:\n%s", getattr(args, "thread", None), tb_str)


def log_event(module: str, event: str, **kwargs) -> None:
    """Structured event logging through the central logger.

    Emits a single JSON line via the logger `event.<module>` so it lands in
    the log file configured by setup_logging().
    """
    payload = {"ts": time.time(), "module": module, "event": event}
    payload.update(kwargs)
    line = orjson.dumps(payload, default=str).decode("utf-8")
    logging.getLogger(f"event.{module}").info(line)
