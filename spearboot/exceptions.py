#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT exception classes.

This module defines the base of the exception hierarchy used throughout the
SPEARBOOT library for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # SPEAr boot loader Exceptions
#######################################################################


class SPEARError(Exception):
    """SPEARBOOT Base Exception.

    Base exception class for all SPEARBOOT related errors. All custom
    exceptions within the library inherit from it, so a caller can handle
    every failure of the boot flow with a single ``except`` clause.

    :cvar fmt: Default error message format template.
    """

    fmt = "SPEARBOOT: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base SPEARBOOT Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        If no description is provided, defaults to "Unknown Error".

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class SPEARValueError(SPEARError, ValueError):
    """SPEARBOOT standard value error."""


class SPEARKeyError(SPEARError, KeyError):
    """SPEARBOOT standard key error."""


class SPEARIOError(SPEARError, IOError):
    """SPEARBOOT standard IO error."""


class SPEARParsingError(SPEARError):
    """SPEARBOOT parsing error exception.

    Raised when binary data does not follow the expected layout.
    """


class SPEARConnectionError(SPEARError, ConnectionError):
    """SPEARBOOT Connection Error exception class.

    Raised when communication with the device fails at the bus level.
    """


class SPEARTimeoutError(SPEARConnectionError, TimeoutError):
    """SPEARBOOT timeout exception for transfers exceeding the time limit."""
