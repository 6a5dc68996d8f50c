#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT miscellaneous utilities.

Fixed-endianness integer codecs and small helpers for binary data processing.
The codecs never depend on the host byte order.
"""

from struct import error as struct_error
from struct import pack, unpack_from
from typing import Generator, Union

from spearboot.exceptions import SPEARValueError

UINT32_MASK = 0xFFFFFFFF


def encode_u32_be(value: int) -> bytes:
    """Encode integer as 4 big-endian bytes.

    The value is truncated to 32 bits, it is not checked for overflow.

    :param value: Integer to encode.
    :return: 4 bytes, most significant byte first.
    """
    return pack(">I", value & UINT32_MASK)


def encode_u32_le(value: int) -> bytes:
    """Encode integer as 4 little-endian bytes.

    The value is truncated to 32 bits, it is not checked for overflow.

    :param value: Integer to encode.
    :return: 4 bytes, least significant byte first.
    """
    return pack("<I", value & UINT32_MASK)


def decode_u32_be(data: Union[bytes, bytearray], offset: int = 0) -> int:
    """Decode 4 big-endian bytes into an integer.

    :param data: Buffer to decode from.
    :param offset: Offset of the first byte in the buffer.
    :raises SPEARValueError: Buffer holds less than 4 bytes at given offset.
    :return: Decoded unsigned integer.
    """
    try:
        return unpack_from(">I", data, offset)[0]
    except struct_error as exc:
        raise SPEARValueError(f"Not enough data to decode u32 at offset {offset}") from exc


def decode_u32_le(data: Union[bytes, bytearray], offset: int = 0) -> int:
    """Decode 4 little-endian bytes into an integer.

    :param data: Buffer to decode from.
    :param offset: Offset of the first byte in the buffer.
    :raises SPEARValueError: Buffer holds less than 4 bytes at given offset.
    :return: Decoded unsigned integer.
    """
    try:
        return unpack_from("<I", data, offset)[0]
    except struct_error as exc:
        raise SPEARValueError(f"Not enough data to decode u32 at offset {offset}") from exc


def split_data(data: Union[bytearray, bytes], size: int) -> Generator[bytes, None, None]:
    """Split data into chunks of specified size.

    The last chunk may be shorter.

    :param data: Array of bytes to be split into chunks.
    :param size: Size of each chunk in bytes.
    :raises SPEARValueError: Chunk size is not positive.
    :return: Generator yielding byte chunks of the specified size.
    """
    if size <= 0:
        raise SPEARValueError(f"Invalid chunk size: {size}")
    for i in range(0, len(data), size):
        yield data[i : i + size]


def size_fmt(num: Union[float, int], use_kibibyte: bool = True) -> str:
    """Size format.

    :param num: Number of bytes to format.
    :param use_kibibyte: Use 1024 based units.
    :return: Human readable size.
    """
    base, suffix = [(1000.0, "B"), (1024.0, "iB")][use_kibibyte]
    i = "B"
    for i in ["B"] + [i + suffix for i in list("kMGTP")]:
        if num < base:
            break
        num /= base

    return f"{int(num)} {i}" if i == "B" else f"{num:3.1f} {i}"


def bytes_to_hex(data: Union[bytes, bytearray]) -> str:
    """Format bytes as space separated upper case hex pairs, used in debug traces.

    :param data: Data to format.
    :return: String like "11, 00, 00".
    """
    return ", ".join(f"{b:02X}" for b in data)
