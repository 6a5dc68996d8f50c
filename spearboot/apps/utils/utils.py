#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT application utilities: error handling of the command line tools."""

import logging
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click

from spearboot import SPEARBOOT_DEBUG_LOG_FILE, SPEARBOOT_DEBUG_LOGGING_DISABLED
from spearboot.exceptions import SPEARError

logger = logging.getLogger(__name__)


class SPEARAppError(SPEARError):
    """Invalid command line usage, reported without the library error prefix.

    :cvar fmt: Message is printed as given.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the error.

        :param desc: Message for the user, nothing is printed when None.
        :param error_code: Process exit code.
        """
        super().__init__(desc)
        self.error_code = error_code


def catch_spear_error(function: Callable) -> Callable:
    """Catch and handle SPEARError and other exceptions.

    Exit codes:

    * ``SPEARAppError``: its ``error_code`` (default 1), message printed if present
    * ``SPEARError`` and ``AssertionError``: 2
    * anything else (including ``KeyboardInterrupt``): 3

    :param function: Entry point of a command line tool.
    :return: Entry point translating exceptions into exit codes.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except SPEARAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, SPEARError) as spear_exc:
            click.echo(f"{spear_exc.__class__.__name__}: {spear_exc}", err=True)
            logger.debug(str(spear_exc), exc_info=True)
            if not SPEARBOOT_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {SPEARBOOT_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            sys.exit(3)

    return wrapper
