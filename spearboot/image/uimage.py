#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Legacy U-Boot image (uImage) container header.

Both payloads sent to the SPEAr boot ROM (DDR driver and firmware) are prefixed
by this 64 byte header. All multi-byte fields are big-endian::

    offset  size  field
         0     4  magic (0x27051956)
         4     4  header CRC          (not validated)
         8     4  creation timestamp
        12     4  data size           (payload length following the header)
        16     4  load address
        20     4  entry point
        24     4  data CRC            (not validated)
        28     1  os
        29     1  arch
        30     1  type
        31     1  compression
        32    32  name
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import BinaryIO, Callable, Optional, Union

from spearboot.image.exceptions import SpearTruncatedHeaderError, SpearUnsupportedFormatError
from spearboot.utils.misc import decode_u32_be, encode_u32_be, size_fmt
from spearboot.utils.spear_enum import SpearSoftEnum

logger = logging.getLogger(__name__)

IH_MAGIC = 0x27051956
IH_NMLEN = 32


class ImageOS(SpearSoftEnum):
    """Operating system field of the header (subset of U-Boot values)."""

    INVALID = (0, "invalid", "Invalid OS")
    LINUX = (5, "linux", "Linux")
    U_BOOT = (17, "u-boot", "Firmware")


class ImageArch(SpearSoftEnum):
    """CPU architecture field of the header (subset of U-Boot values)."""

    INVALID = (0, "invalid", "Invalid CPU")
    ARM = (2, "arm", "ARM")


class ImageType(SpearSoftEnum):
    """Image type field of the header (subset of U-Boot values)."""

    INVALID = (0, "invalid", "Invalid Image")
    STANDALONE = (1, "standalone", "Standalone Program")
    KERNEL = (2, "kernel", "Kernel Image")
    RAMDISK = (3, "ramdisk", "RAMDisk Image")
    MULTI = (4, "multi", "Multi-File Image")
    FIRMWARE = (5, "firmware", "Firmware")
    SCRIPT = (6, "script", "Script File")
    FILESYSTEM = (7, "filesystem", "Filesystem Image")


class ImageCompression(SpearSoftEnum):
    """Compression field of the header."""

    NONE = (0, "none", "uncompressed")
    GZIP = (1, "gzip", "gzip compressed")
    BZIP2 = (2, "bzip2", "bzip2 compressed")
    LZMA = (3, "lzma", "lzma compressed")
    LZO = (4, "lzo", "lzo compressed")


def _decode_u8(data: bytes) -> int:
    return data[0]


def _decode_raw(data: bytes) -> bytes:
    return bytes(data)


# header fields in wire order: attribute name, size in bytes, decoder
HEADER_FIELDS: tuple[tuple[str, int, Callable[[bytes], Union[int, bytes]]], ...] = (
    ("magic", 4, decode_u32_be),
    ("header_crc", 4, decode_u32_be),
    ("timestamp", 4, decode_u32_be),
    ("data_size", 4, decode_u32_be),
    ("load_address", 4, decode_u32_be),
    ("entry_point", 4, decode_u32_be),
    ("data_crc", 4, decode_u32_be),
    ("os", 1, _decode_u8),
    ("arch", 1, _decode_u8),
    ("image_type", 1, _decode_u8),
    ("compression", 1, _decode_u8),
    ("name", IH_NMLEN, _decode_raw),
)

HEADER_SIZE = sum(size for _, size, _ in HEADER_FIELDS)


@dataclass
class ImageHeader:
    """Decoded uImage header.

    Only ``data_size`` and ``load_address`` drive the boot transfer, the other
    fields are kept for information. Checksums are never validated.
    """

    data_size: int
    load_address: int
    magic: int = IH_MAGIC
    header_crc: int = 0
    timestamp: int = 0
    entry_point: int = 0
    data_crc: int = 0
    os: int = ImageOS.INVALID.tag
    arch: int = ImageArch.ARM.tag
    image_type: int = ImageType.FIRMWARE.tag
    compression: int = ImageCompression.NONE.tag
    name: bytes = field(default=bytes(IH_NMLEN))

    SIZE = HEADER_SIZE

    @property
    def image_name(self) -> str:
        """Name stored in the header, up to the first NUL byte."""
        return self.name.split(b"\x00", 1)[0].decode("ascii", errors="replace")

    def export(self) -> bytes:
        """Serialize the header into its 64 byte big-endian form.

        Integer fields are truncated to their width, the name is padded or cut
        to 32 bytes. No checksum is computed.

        :return: Binary representation of the header.
        """
        data = b"".join(
            encode_u32_be(value)
            for value in (
                self.magic,
                self.header_crc,
                self.timestamp,
                self.data_size,
                self.load_address,
                self.entry_point,
                self.data_crc,
            )
        )
        data += bytes(
            [self.os & 0xFF, self.arch & 0xFF, self.image_type & 0xFF, self.compression & 0xFF]
        )
        data += self.name[:IH_NMLEN].ljust(IH_NMLEN, b"\x00")
        return data

    @classmethod
    def parse(cls, data: bytes, name: Optional[str] = None) -> "ImageHeader":
        """Parse the header from the beginning of a buffer.

        :param data: Buffer holding at least the header.
        :param name: Optional source name used in error messages.
        :raises SpearTruncatedHeaderError: Buffer is shorter than the header.
        :raises SpearUnsupportedFormatError: Magic number does not match.
        :return: Decoded header.
        """
        return decode_header(io.BytesIO(data), name=name)

    def info(self) -> str:
        """Get text representation of the header.

        :return: Multi-line human readable description.
        """
        created = datetime.fromtimestamp(self.timestamp, tz=timezone.utc)
        lines = [
            f"Image Name:   {self.image_name}",
            f"Created:      {created:%Y-%m-%d %H:%M:%S} UTC",
            f"Image Type:   {ImageArch.get_description(self.arch)} "
            f"{ImageOS.get_description(self.os)} "
            f"{ImageType.get_description(self.image_type)} "
            f"({ImageCompression.get_description(self.compression)})",
            f"Data Size:    {self.data_size} Bytes = {size_fmt(self.data_size)}",
            f"Load Address: 0x{self.load_address:08X}",
            f"Entry Point:  0x{self.entry_point:08X}",
            f"Header CRC:   0x{self.header_crc:08X}",
            f"Data CRC:     0x{self.data_crc:08X}",
        ]
        return "\n".join(lines)

    def __str__(self) -> str:
        return (
            f"ImageHeader <size={self.data_size}, load=0x{self.load_address:08X}, "
            f"name='{self.image_name}'>"
        )


def decode_header(file: BinaryIO, name: Optional[str] = None) -> ImageHeader:
    """Read and decode the uImage header from a binary stream.

    The fields are read one by one in wire order, every read is checked on its
    own. On success the stream is positioned at the first payload byte.

    :param file: Binary stream positioned at the header start.
    :param name: Optional source name used in error messages.
    :raises SpearTruncatedHeaderError: Stream ended inside the header.
    :raises SpearUnsupportedFormatError: Header is complete but magic number does not match.
    :return: Decoded header.
    """
    values: dict[str, Union[int, bytes]] = {}
    for field_name, size, decoder in HEADER_FIELDS:
        raw = file.read(size)
        if len(raw) != size:
            raise SpearTruncatedHeaderError(field_name, size, len(raw))
        values[field_name] = decoder(raw)

    if values["magic"] != IH_MAGIC:
        raise SpearUnsupportedFormatError(int(values["magic"]), name)

    header = ImageHeader(**values)  # type: ignore[arg-type]
    logger.debug(f"Decoded {header}")
    return header
