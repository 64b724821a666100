"""
Logging configuration using Loguru.

Modules log through `get_logger(__name__)` and pass structured context as
`extra={...}`. The context is bound onto the record (not used to format the
message), so messages containing braces are logged verbatim and the JSON file
sink carries `user_id`, `document_id` etc. as top-level `extra` fields.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

# Context fields echoed on the console line when present
CONTEXT_FIELDS = ("user_id", "document_id", "file_id")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level><dim>{extra[context]}</dim>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{function}:{line} - "
    "{message}{extra[context]}"
)


def _add_context(record) -> None:
    """Render the known context fields into `extra["context"]`."""
    extra = record["extra"]
    extra.setdefault("module", record["name"])
    pairs = [f"{key}={extra[key]}" for key in CONTEXT_FIELDS if extra.get(key) is not None]
    extra["context"] = f" [{' '.join(pairs)}]" if pairs else ""


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """Configure Loguru with a console sink and an optional rotating JSON file sink."""
    logger.remove()
    logger.configure(patcher=_add_context)

    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True, serialize=False)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "docgraph_{time:YYYY-MM-DD}.log",
            level=level,
            format=FILE_FORMAT,
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )


class ContextLogger:
    """
    Module logger accepting `extra={...}` context on every call.

    Context is bound onto the record instead of being passed as format
    arguments, and `opt(depth=2)` keeps function/line pointing at the caller.
    """

    def __init__(self, name: str):
        self.name = name
        self._logger = logger.bind(module=name)

    def _log(self, level: str, message: str, extra: dict[str, Any] | None) -> None:
        self._logger.bind(**(extra or {})).opt(depth=2).log(level, message)

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._log("DEBUG", message, extra)

    def info(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._log("ERROR", message, extra)


def get_logger(name: str) -> ContextLogger:
    """Get a logger instance for a module."""
    return ContextLogger(name)
