#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Image container exception classes."""

from typing import Optional

from spearboot.exceptions import SPEARParsingError


class SpearImageError(SPEARParsingError):
    """Base exception for image container decoding."""

    fmt = "Image: {description}"


class SpearTruncatedHeaderError(SpearImageError):
    """The container ended before the header was completely read.

    :ivar field: Name of the header field whose read came up short.
    """

    def __init__(self, field: str, expected: int, received: int) -> None:
        """Initialize the exception.

        :param field: Name of the header field being read.
        :param expected: Number of bytes the field occupies.
        :param received: Number of bytes actually read.
        """
        super().__init__(
            f"read header.{field} failed, expected {expected} bytes, got {received}"
        )
        self.field = field
        self.expected = expected
        self.received = received


class SpearUnsupportedFormatError(SpearImageError):
    """The header is structurally complete but its magic number is not recognized.

    :ivar magic: Magic number found in the header.
    """

    def __init__(self, magic: int, name: Optional[str] = None) -> None:
        """Initialize the exception.

        :param magic: The rejected magic number.
        :param name: Optional name of the source (file path) for the message.
        """
        source = f"unsupported file {name}" if name else "unsupported file"
        super().__init__(f"{source} (magic 0x{magic:08X})")
        self.magic = magic
