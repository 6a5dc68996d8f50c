#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot protocol.

Device discovery, boot command framing and chunked payload transfer for the
USB boot ROM of SPEAr3xx/SPEAr600 SoCs.
"""

from spearboot.boot.commands import BootCommand, PayloadType, encode_command
from spearboot.boot.loader import SpearBoot
from spearboot.boot.session import SUPPORTED_DEVICES, DeviceSession, SupportedDevice
from spearboot.boot.transfer import send_command, send_payload

__all__ = [
    "SUPPORTED_DEVICES",
    "BootCommand",
    "DeviceSession",
    "PayloadType",
    "SpearBoot",
    "SupportedDevice",
    "encode_command",
    "send_command",
    "send_payload",
]
