#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Virtual USB device recording everything written to it."""

from typing import Optional

from spearboot.exceptions import SPEARConnectionError, SPEARTimeoutError
from spearboot.utils.interfaces.device.base import DeviceBase


class VirtualDevice(DeviceBase):
    """Virtual device implementation for testing purposes.

    Failures can be injected per operation: ``fail_on`` names the operation
    ("open", "set_configuration", "claim_interface", "write", "timeout") that raises,
    ``short_write_at`` makes the n-th physical write (0 based) report one byte less.
    """

    def __init__(
        self,
        vid: int = 0x0483,
        pid: int = 0x3801,
        fail_on: Optional[str] = None,
        fail_write_at: int = 0,
        short_write_at: Optional[int] = None,
    ) -> None:
        self.vid = vid
        self.pid = pid
        self.fail_on = fail_on
        self.fail_write_at = fail_write_at
        self.short_write_at = short_write_at
        self._is_opened = False
        self._timeout = 1000
        self.calls: list[str] = []
        self.writes: list[tuple[int, bytes]] = []
        self.configuration: Optional[int] = None
        self.claimed: list[int] = []
        self.close_count = 0

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_on == operation:
            raise SPEARConnectionError(f"{operation} failed")

    @property
    def is_opened(self) -> bool:
        return self._is_opened

    def open(self) -> None:
        self._check("open")
        self._is_opened = True

    def close(self) -> None:
        self.calls.append("close")
        if self._is_opened:
            self.close_count += 1
        self._is_opened = False

    def set_configuration(self, configuration: int) -> None:
        self._check("set_configuration")
        self.configuration = configuration

    def claim_interface(self, interface: int) -> None:
        self._check("claim_interface")
        self.claimed.append(interface)

    def write(self, endpoint: int, data: bytes, timeout: Optional[int] = None) -> int:
        assert self._is_opened
        index = len(self.writes)
        if index == self.fail_write_at and self.fail_on == "write":
            raise SPEARConnectionError("usb_bulk_write failed")
        if index == self.fail_write_at and self.fail_on == "timeout":
            raise SPEARTimeoutError("usb_bulk_write timed out")
        self.writes.append((endpoint, bytes(data)))
        if index == self.short_write_at:
            return len(data) - 1
        return len(data)

    @property
    def written(self) -> bytes:
        """All data written so far."""
        return b"".join(data for _, data in self.writes)

    @property
    def timeout(self) -> int:
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        self._timeout = value

    def __str__(self) -> str:
        return f"VirtualDevice (0x{self.vid:04X}, 0x{self.pid:04X})"
