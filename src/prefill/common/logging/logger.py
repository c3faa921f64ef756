#  Copyright (c) 2024 Astramind. Licensed under Apache License, Version 2.0.

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Union

PACKAGE_LOGGER_NAME = "prefill"

_loggers: Dict[str, logging.Logger] = {}


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        'DEBUG': '\033[36m',     # cyan
        'INFO': '\033[32m',      # green
        'WARNING': '\033[33m',   # yellow
        'ERROR': '\033[31m',     # red
        'CRITICAL': '\033[1;31m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _logger_name(name: str) -> str:
    # setup_logger is called both with __name__ and with __file__
    if os.path.sep in name or name.endswith('.py'):
        name = Path(name).stem
    if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + '.'):
        return name
    return f"{PACKAGE_LOGGER_NAME}.{name}"


def setup_logger(name: Union[str, Path], level: int = logging.INFO) -> logging.Logger:
    """
    Return a configured logger living under the ``prefill`` hierarchy.

    Args:
        name: a module ``__name__`` or a ``__file__`` path.
        level: level applied the first time the logger is created.

    Returns:
        logging.Logger: the configured logger, cached by name.
    """
    logger_name = _logger_name(str(name))
    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColoredFormatter(use_colors=sys.stdout.isatty()))
        logger.addHandler(handler)
    logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_prefill_logging_level(level: int) -> None:
    """Set the level of every logger created through setup_logger."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)
    for logger in _loggers.values():
        logger.setLevel(level)
