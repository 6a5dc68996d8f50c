#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot device session.

A session is created by scanning the enumerated USB devices against a static
list of supported devices and is either returned fully established (opened,
configured, interface claimed) or not at all.
"""

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Iterable, Optional, Sequence, Type

from typing_extensions import Self

from spearboot.boot.exceptions import (
    SpearDeviceNotFoundError,
    SpearSessionError,
    SpearTransportError,
)
from spearboot.exceptions import SPEARConnectionError
from spearboot.utils.interfaces.device.base import DeviceBase
from spearboot.utils.interfaces.device.usb_device import UsbDevice
from spearboot.utils.spear_enum import SpearEnum

logger = logging.getLogger(__name__)

USB_CONFIGURATION = 1
USB_INTERFACE = 0


@dataclass(frozen=True)
class SupportedDevice:
    """Entry of the list of supported devices."""

    vid: int
    pid: int
    name: str

    def matches(self, device: DeviceBase) -> bool:
        """Check whether the device carries this vendor/product pair.

        :param device: Enumerated device.
        :return: True on match.
        """
        return self.vid == device.vid and self.pid == device.pid


# searched in order, first match wins
SUPPORTED_DEVICES: tuple[SupportedDevice, ...] = (SupportedDevice(0x0483, 0x3801, "SPEAr3xx"),)


class SessionState(SpearEnum):
    """Life cycle of a device session, states are never re-entered."""

    UNOPENED = (0, "unopened")
    DISCOVERED = (1, "discovered")
    OPENED = (2, "opened")
    CONFIGURED = (3, "configured")
    CLAIMED = (4, "claimed")
    READY = (5, "ready")
    CLOSED = (6, "closed")


def find_supported_device(
    devices: Iterable[DeviceBase],
    supported: Sequence[SupportedDevice] = SUPPORTED_DEVICES,
) -> Optional[tuple[DeviceBase, SupportedDevice]]:
    """Find the first enumerated device present in the list of supported devices.

    :param devices: Enumerated devices in bus order.
    :param supported: Supported devices in preference order.
    :return: Matching device with its entry, None if nothing matches.
    """
    for device in devices:
        for entry in supported:
            if entry.matches(device):
                return device, entry
    return None


class DeviceSession:
    """Established session with a SPEAr device in USB boot mode.

    Use :meth:`discover_and_open` to create a session. The session must be closed
    by the caller, it may also be used as a context manager.
    """

    def __init__(self, device: DeviceBase, entry: SupportedDevice) -> None:
        """Initialize the session object, no bus operation is performed.

        :param device: Matched device.
        :param entry: Entry of the supported devices list the device matched.
        """
        self._device = device
        self.entry = entry
        self.state = SessionState.DISCOVERED

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exception_type: Optional[Type[Exception]] = None,
        exception_value: Optional[Exception] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"{self.entry.name} (VID=0x{self.entry.vid:04X}, PID=0x{self.entry.pid:04X})"

    @classmethod
    def discover_and_open(
        cls,
        devices: Optional[Iterable[DeviceBase]] = None,
        supported: Sequence[SupportedDevice] = SUPPORTED_DEVICES,
        timeout: Optional[int] = None,
    ) -> Self:
        """Find a supported device and establish the session.

        :param devices: Devices to search, all USB devices on the bus when None.
        :param supported: Supported devices in preference order.
        :param timeout: Bulk write timeout in milliseconds for enumerated USB devices.
        :raises SpearDeviceNotFoundError: No supported device is connected.
        :raises SpearTransportError: Device could not be opened, configured or claimed.
        :return: Ready session.
        """
        if devices is None:
            try:
                devices = UsbDevice.enumerate(timeout=timeout)
            except SPEARConnectionError as exc:
                raise SpearTransportError(exc.description) from exc
        match = find_supported_device(devices, supported)
        if match is None:
            raise SpearDeviceNotFoundError("No USB SPEAr device found!")
        device, entry = match
        session = cls(device, entry)
        logger.debug(f"Matched {session}: {device}")
        session._establish()
        logger.info(f"Found {session}")
        return session

    def _establish(self) -> None:
        try:
            self._device.open()
            self.state = SessionState.OPENED
            self._device.set_configuration(USB_CONFIGURATION)
            self.state = SessionState.CONFIGURED
            self._device.claim_interface(USB_INTERFACE)
            self.state = SessionState.CLAIMED
        except SPEARConnectionError as exc:
            logger.debug(f"Session setup failed in state '{self.state.label}'")
            self.abort()
            raise SpearTransportError(exc.description) from exc
        self.state = SessionState.READY
        logger.debug(f"Session with {self} is ready")

    @property
    def is_ready(self) -> bool:
        """Session is established and can be used for transfers."""
        return self.state is SessionState.READY

    @property
    def device(self) -> DeviceBase:
        """Get the device of a ready session.

        :raises SpearSessionError: Session is not ready (e.g. already closed).
        :return: Device handle.
        """
        if not self.is_ready:
            raise SpearSessionError(f"Session is not ready (state: {self.state.label})")
        return self._device

    def close(self) -> None:
        """Release the device handle.

        Closing an already closed session does nothing.

        :raises SpearTransportError: Releasing the device failed.
        """
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED
        try:
            self._device.close()
        except SPEARConnectionError as exc:
            raise SpearTransportError(exc.description) from exc

    def abort(self) -> None:
        """Close the session after a fatal error.

        A failure of the release itself is only logged, the original error is the
        one reported to the caller.
        """
        try:
            self.close()
        except SpearTransportError as exc:
            logger.warning(f"Closing {self} after failure: {exc}")
