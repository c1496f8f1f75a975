"""Logging setup for scripts and hosts embedding the rotation.

Modules log through ``logging.getLogger(__name__)``; executions go out at
INFO, skipped and waiting opener steps at DEBUG.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

PLAIN_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"
JSON_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
    '"msg":"%(message)s"}'
)


def configure_logging(
    level: str | int = "INFO",
    *,
    json: bool = False,
    logfile: str | Path | None = None,
    logger_name: str = "",
) -> logging.Logger:
    """Attach stdout (and optionally file) output to one logger.

    Args:
        level: Level name or number applied to the logger.
        json: Emit one JSON object per line instead of plain text.
        logfile: Also append to this file, creating parent directories.
        logger_name: Logger to configure; "" is the root logger, use
            "tick_rotation" to leave the host's root logger alone.

    Returns:
        The configured logger. Earlier handlers on it are replaced.
    """
    formatter = logging.Formatter(JSON_FORMAT if json else PLAIN_FORMAT)
    target = logging.getLogger(logger_name)
    target.handlers.clear()
    target.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    target.addHandler(console)

    if logfile is not None:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        target.addHandler(file_handler)
    return target
