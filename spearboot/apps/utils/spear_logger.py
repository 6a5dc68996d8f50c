#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT logging utilities with colored console output support."""

import logging
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from spearboot import (
    SPEARBOOT_DEBUG,
    SPEARBOOT_DEBUG_LOG_FILE,
    SPEARBOOT_DEBUG_LOGGING_DISABLED,
    __version__,
)

colorama.just_fix_windows_console()


CONSOLE_FORMAT = logging.BASIC_FORMAT
DETAILED_FORMAT = CONSOLE_FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

# level: (color prefix, format)
LEVEL_STYLES = {
    logging.DEBUG: (colorama.Fore.BLUE, DETAILED_FORMAT),
    logging.INFO: (colorama.Fore.WHITE + colorama.Style.BRIGHT, CONSOLE_FORMAT),
    logging.WARNING: (colorama.Fore.YELLOW, DETAILED_FORMAT),
    logging.ERROR: (colorama.Fore.RED, DETAILED_FORMAT),
    logging.CRITICAL: (colorama.Fore.RED + colorama.Style.BRIGHT, DETAILED_FORMAT),
}

ANSI_ESCAPE = re.compile(r"\x1b\[\d{1,3}m")


class ColoredFormatter(logging.Formatter):
    """Formatter selecting format and color by the record level."""

    def __init__(self, colored: bool = True) -> None:
        """Initialize the formatter.

        :param colored: Wrap records in ANSI colors, strip colors from messages otherwise.
        """
        super().__init__()
        self.colored = colored
        self._formatters = {
            level: logging.Formatter(
                f"{color}{fmt}{colorama.Style.RESET_ALL}" if colored else fmt
            )
            for level, (color, fmt) in LEVEL_STYLES.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._formatters.get(record.levelno, self._formatters[logging.DEBUG])
        if not self.colored and isinstance(record.msg, str):
            record.msg = ANSI_ESCAPE.sub("", record.msg)
        return formatter.format(record)


def _has_debug_handler(target_logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == os.path.abspath(SPEARBOOT_DEBUG_LOG_FILE)
        for h in target_logger.handlers
    )


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install SPEARBOOT log handler for colored output.

    :param level: logging level, defaults to logging.WARNING (logging.DEBUG with SPEARBOOT_DEBUG)
    :param stream: stream to output logging, defaults to sys.stderr
    :param colored: colored output, always colored if true
    :param logger: defaults to "spearboot" logger
    :param create_debug_logger: create rotating debug log file
    """
    color = True
    if not level:
        level = logging.DEBUG if SPEARBOOT_DEBUG else logging.WARNING

    target_logger = logger or logging.getLogger("spearboot")
    target_logger.setLevel(logging.DEBUG)

    if "NO_COLOR" in os.environ:
        # For details see https://no-color.org/
        color = False
    if not hasattr(stream, "isatty") or not stream.isatty():
        color = False
    if colored is not None:
        color = colored

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)

    if not create_debug_logger or SPEARBOOT_DEBUG_LOGGING_DISABLED:
        return
    if _has_debug_handler(target_logger):
        return
    try:
        os.makedirs(os.path.dirname(SPEARBOOT_DEBUG_LOG_FILE), exist_ok=True)
        debug_handler = logging.handlers.RotatingFileHandler(
            SPEARBOOT_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
    except OSError as e:
        target_logger.warning(f"Failed to initialize debug logging: {str(e)}")
        return
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* SPEARBOOT DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* SPEARBOOT version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))
