#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot chunked transfer engine.

Payloads are read from their source in chunks of at most ``MAX_CHUNK_SIZE``
bytes, each chunk is further split into physical bulk writes of at most
``WIRE_CHUNK_SIZE`` bytes. Every short read and every short write is fatal,
nothing is retried and the session is closed on the first failure.
"""

import logging
from typing import BinaryIO

from spearboot.boot.exceptions import (
    SpearFileError,
    SpearShortWriteError,
    SpearTimeoutError,
    SpearTransportError,
    SpearTruncatedSourceError,
)
from spearboot.boot.session import DeviceSession
from spearboot.exceptions import SPEARConnectionError, SPEARError, SPEARTimeoutError
from spearboot.utils.interfaces.device.base import DeviceBase
from spearboot.utils.misc import split_data

logger = logging.getLogger(__name__)

BULK_OUT_ENDPOINT = 0x02
MAX_CHUNK_SIZE = 1024
WIRE_CHUNK_SIZE = 1024


def write_buffer(device: DeviceBase, data: bytes) -> int:
    """Write a buffer to the bulk OUT endpoint in bounded physical writes.

    :param device: Opened device.
    :param data: Data to send.
    :raises SpearShortWriteError: A physical write transferred fewer bytes than requested.
    :raises SpearTimeoutError: A physical write timed out.
    :raises SpearTransportError: A physical write failed.
    :return: Number of bytes written, always ``len(data)``.
    """
    for chunk in split_data(data, WIRE_CHUNK_SIZE):
        try:
            written = device.write(BULK_OUT_ENDPOINT, chunk)
        except SPEARTimeoutError as exc:
            raise SpearTimeoutError(exc.description) from exc
        except SPEARConnectionError as exc:
            raise SpearTransportError(exc.description) from exc
        if written != len(chunk):
            raise SpearShortWriteError(requested=len(chunk), written=written)
    return len(data)


def send_command(session: DeviceSession, command: bytes) -> None:
    """Send a boot command in one bounded write.

    :param session: Ready device session.
    :param command: Encoded command.
    :raises SpearShortWriteError: Device accepted only part of the command.
    :raises SpearTransportError: Write failed, session is closed.
    """
    device = session.device
    try:
        logger.debug(f"TX-CMD: {command.hex()}")
        write_buffer(device, command)
    except SPEARError:
        logger.debug("command send failed.")
        session.abort()
        raise


def send_payload(session: DeviceSession, file: BinaryIO, total_size: int) -> int:
    """Stream ``total_size`` bytes from a file to the device.

    :param session: Ready device session.
    :param file: Binary stream positioned at the payload start.
    :param total_size: Number of bytes to transfer.
    :raises SpearTruncatedSourceError: Stream ended before ``total_size`` bytes were read.
    :raises SpearShortWriteError: Device accepted only part of a chunk.
    :raises SpearTransportError: Write failed.
    :return: Number of bytes transferred.
    """
    device = session.device
    left = total_size
    try:
        while left:
            size = min(left, MAX_CHUNK_SIZE)
            try:
                chunk = file.read(size)
            except OSError as exc:
                raise SpearFileError(f"fread failed: {exc}") from exc
            if len(chunk) != size:
                raise SpearTruncatedSourceError(
                    f"source ended after {total_size - left + len(chunk)} of {total_size} bytes"
                )
            write_buffer(device, chunk)
            left -= size
    except SPEARError:
        logger.debug(f"payload transfer failed, {total_size - left} of {total_size} bytes sent")
        session.abort()
        raise
    logger.debug(f"TX-DATA: {total_size} bytes")
    return total_size
