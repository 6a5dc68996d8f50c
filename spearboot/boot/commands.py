#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot command.

Each payload transfer is announced by a 12 byte command::

    byte  0     payload type tag (0x11 DDR driver, 0x22 firmware)
    bytes 1-3   reserved, zero
    bytes 4-7   payload size, little-endian
    bytes 8-11  load address, little-endian
"""

from typing import Union

from spearboot.boot.exceptions import SpearUnsupportedPayloadTypeError
from spearboot.exceptions import SPEARKeyError
from spearboot.utils.interfaces.commands import CmdPacketBase
from spearboot.utils.misc import encode_u32_le
from spearboot.utils.spear_enum import SpearEnum


class PayloadType(SpearEnum):
    """Payload roles known to the SPEAr boot ROM."""

    DDR_DRIVER = (0x11, "ddr_driver", "DDR driver")
    FIRMWARE = (0x22, "firmware", "Firmware")


class BootCommand(CmdPacketBase):
    """SPEAr boot command packet.

    :cvar SIZE: Length of the exported command.
    """

    SIZE = 12

    def __init__(self, payload_type: PayloadType, size: int, load_address: int) -> None:
        """Initialize the boot command.

        Size and load address are truncated to 32 bits on export, they are not
        checked for overflow.

        :param payload_type: Role of the payload announced by the command.
        :param size: Payload size in bytes.
        :param load_address: Destination address in device memory.
        """
        self.payload_type = payload_type
        self.size = size
        self.load_address = load_address

    def __str__(self) -> str:
        return (
            f"BootCommand <{self.payload_type.label}, size={self.size}, "
            f"load=0x{self.load_address & 0xFFFFFFFF:08X}>"
        )

    def export(self) -> bytes:
        """Export command packet as bytes.

        :return: 12 bytes of the command.
        """
        return (
            bytes([self.payload_type.tag, 0, 0, 0])
            + encode_u32_le(self.size)
            + encode_u32_le(self.load_address)
        )


def get_payload_type(payload_type: Union[PayloadType, int, str]) -> PayloadType:
    """Resolve payload role given as enum member, tag or label.

    :param payload_type: Payload role.
    :raises SpearUnsupportedPayloadTypeError: Unknown payload role.
    :return: Payload type enum member.
    """
    if isinstance(payload_type, PayloadType):
        return payload_type
    try:
        if isinstance(payload_type, (int, str)):
            return PayloadType.from_attr(payload_type)
    except SPEARKeyError as exc:
        raise SpearUnsupportedPayloadTypeError(f"type {payload_type} unsupported.") from exc
    raise SpearUnsupportedPayloadTypeError(f"type {payload_type!r} unsupported.")


def encode_command(
    payload_type: Union[PayloadType, int, str], size: int, load_address: int
) -> bytes:
    """Build the 12 byte boot command.

    :param payload_type: Payload role (enum member, tag or label).
    :param size: Payload size in bytes.
    :param load_address: Destination address in device memory.
    :raises SpearUnsupportedPayloadTypeError: Unknown payload role.
    :return: Encoded command.
    """
    return BootCommand(get_payload_type(payload_type), size, load_address).export()
