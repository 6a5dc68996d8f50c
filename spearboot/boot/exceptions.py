#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot protocol exception classes.

Every error is terminal for the running operation, nothing is retried.
"""

from spearboot.exceptions import SPEARConnectionError, SPEARError, SPEARIOError


########################################################################################################################
# SPEAr USB boot protocol Exceptions
########################################################################################################################
class SpearBootError(SPEARError):
    """Base exception class for SPEAr boot protocol operations."""

    fmt = "SPEAr boot: {description}"


class SpearDeviceNotFoundError(SpearBootError):
    """No enumerated USB device matches the list of supported devices."""


class SpearSessionError(SpearBootError):
    """Session used outside of its ready state (for example after it was closed)."""


class SpearUnsupportedPayloadTypeError(SpearBootError):
    """Boot command requested for an unknown payload role."""


class SpearTruncatedSourceError(SpearBootError):
    """Payload source ended before the size declared in its header was read."""


class SpearFileError(SPEARIOError, SpearBootError):
    """Payload file could not be opened."""

    fmt = "SPEAr boot: {description}"


class SpearTransportError(SPEARConnectionError, SpearBootError):
    """USB open, configuration, claim or write failure.

    :cvar fmt: Error message format template for connection issues.
    """

    fmt = "SPEAr boot: Connection issue -> {description}"


class SpearTimeoutError(SpearTransportError, TimeoutError):
    """Bulk write did not finish within the transport timeout."""


class SpearShortWriteError(SpearTransportError):
    """Physical write transferred fewer bytes than requested.

    :ivar requested: Number of bytes passed to the write.
    :ivar written: Number of bytes the device accepted.
    """

    def __init__(self, requested: int, written: int) -> None:
        """Initialize the exception.

        :param requested: Number of bytes passed to the write.
        :param written: Number of bytes the device accepted.
        """
        super().__init__(f"usb_bulk_write failed, {written} of {requested} bytes written")
        self.requested = requested
        self.written = written
