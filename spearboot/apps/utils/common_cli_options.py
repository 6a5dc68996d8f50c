#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
from typing import Any, Callable, TypeVar, Union

import click

from spearboot import __version__ as spearboot_version

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])


def spear_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(spearboot_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def spear_uimage_option(
    name: str, short: str, help: str  # pylint: disable=redefined-builtin
) -> Callable[[FC], FC]:
    """Click option for an existing uImage file.

    Provides: `<name>: str` path to the file, None if not given.

    :param name: Long option name without dashes, also the parameter name.
    :param short: Short option name without dash.
    :param help: Help message.
    :return: Click decorator
    """
    return click.option(
        f"-{short}",
        f"--{name}",
        name.replace("-", "_"),
        type=click.Path(exists=True, dir_okay=False, resolve_path=True),
        metavar="FILE",
        help=help,
    )
