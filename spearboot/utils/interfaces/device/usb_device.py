#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT USB device interface implementation.

This module provides low-level USB bulk communication using the pyusb library.
"""

import logging
from typing import Any, Optional

import usb.core
import usb.util

from spearboot import SPEARBOOT_USB_TIMEOUT
from spearboot.exceptions import SPEARConnectionError, SPEARError, SPEARTimeoutError
from spearboot.utils.interfaces.device.base import DeviceBase
from spearboot.utils.misc import bytes_to_hex

logger = logging.getLogger(__name__)


class UsbDevice(DeviceBase):
    """USB bulk device interface.

    Wraps a ``usb.core.Device`` found on the bus. The handle is acquired by
    :meth:`open` and released by :meth:`close`.
    """

    def __init__(
        self,
        device: Any,
        interface_number: int = 0,
        timeout: Optional[int] = None,
    ) -> None:
        """Initialize the USB interface object.

        :param device: pyusb device object (``usb.core.Device``).
        :param interface_number: Interface whose kernel driver is detached on open.
        :param timeout: Bulk write timeout in milliseconds.
        """
        self._device = device
        self._opened = False
        self._claimed: list[int] = []
        self.vid: int = device.idVendor
        self.pid: int = device.idProduct
        self.interface_number = interface_number
        self._timeout = SPEARBOOT_USB_TIMEOUT if timeout is None else timeout

    @property
    def timeout(self) -> int:
        """Get timeout value for USB device communication.

        :return: Timeout value in milliseconds for USB operations.
        """
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        """Set timeout value for USB device communication.

        :param value: Timeout value in milliseconds for USB operations.
        """
        self._timeout = value

    @property
    def is_opened(self) -> bool:
        """Indicates whether device is open.

        :return: True if device is open, False otherwise.
        """
        return self._opened

    def _kernel_driver_active(self) -> bool:
        try:
            return bool(self._device.is_kernel_driver_active(self.interface_number))
        except NotImplementedError:
            # backends without kernel driver concept (Windows, macOS)
            return False

    def open(self) -> None:
        """Open the USB device.

        Querying the kernel driver state makes libusb open the device handle,
        an attached kernel driver is detached so the interface can be claimed.

        :raises SPEARError: If device is already opened.
        :raises SPEARConnectionError: If the device cannot be opened.
        """
        logger.debug(f"Opening the Interface: {str(self)}")
        if self.is_opened:
            raise SPEARError("Can't open already opened device")
        try:
            if self._kernel_driver_active():
                self._device.detach_kernel_driver(self.interface_number)
        except usb.core.USBError as error:
            raise SPEARConnectionError(f"Unable to open device '{str(self)}': {error}") from error
        self._opened = True

    def close(self) -> None:
        """Close the USB device.

        Releases claimed interfaces and all resources held by pyusb. The resources
        are disposed even when releasing an interface fails.
        If the device is not opened, the method does nothing.

        :raises SPEARConnectionError: If the device cannot be released.
        """
        if not self.is_opened:
            return
        logger.debug(f"Closing the Interface: {str(self)}")
        first_error: Optional[usb.core.USBError] = None
        try:
            for interface in self._claimed:
                try:
                    usb.util.release_interface(self._device, interface)
                except usb.core.USBError as error:
                    logger.debug(f"Releasing interface {interface} failed: {error}")
                    first_error = first_error or error
        finally:
            try:
                usb.util.dispose_resources(self._device)
            except usb.core.USBError as error:
                first_error = first_error or error
            self._claimed = []
            self._opened = False
        if first_error is not None:
            raise SPEARConnectionError(f"Unable to close device '{str(self)}'") from first_error

    def set_configuration(self, configuration: int) -> None:
        """Select the active configuration.

        :param configuration: Configuration value.
        :raises SPEARConnectionError: Device is not opened or the request failed.
        """
        if not self.is_opened:
            raise SPEARConnectionError("Device is not opened for configuration")
        try:
            self._device.set_configuration(configuration)
        except usb.core.USBError as error:
            raise SPEARConnectionError(
                f"usb_set_configuration({configuration}) failed: {error}"
            ) from error

    def claim_interface(self, interface: int) -> None:
        """Claim an interface of the active configuration.

        :param interface: Interface number.
        :raises SPEARConnectionError: Device is not opened or the interface is busy.
        """
        if not self.is_opened:
            raise SPEARConnectionError("Device is not opened for claiming interface")
        try:
            usb.util.claim_interface(self._device, interface)
        except usb.core.USBError as error:
            raise SPEARConnectionError(
                f"usb_claim_interface({interface}) failed: {error}"
            ) from error
        self._claimed.append(interface)

    def write(self, endpoint: int, data: bytes, timeout: Optional[int] = None) -> int:
        """Perform one bulk write to the given OUT endpoint.

        :param endpoint: Address of the OUT endpoint.
        :param data: Data bytes to send to the device.
        :param timeout: Timeout in milliseconds for the write operation, uses default if None.
        :raises SPEARConnectionError: Device is not opened or data transmission failed.
        :raises SPEARTimeoutError: Transfer timed out.
        :return: Number of bytes the device accepted.
        """
        timeout = self.timeout if timeout is None else timeout
        if not self.is_opened:
            raise SPEARConnectionError("Device is not opened for writing")
        logger.debug(f"OUT[{len(data)}]: {bytes_to_hex(data)}")
        try:
            return int(self._device.write(endpoint, data, timeout))
        except usb.core.USBTimeoutError as e:
            raise SPEARTimeoutError(f"usb_bulk_write timed out after {timeout} ms") from e
        except usb.core.USBError as e:
            raise SPEARConnectionError(f"usb_bulk_write failed: {e}") from e

    def __str__(self) -> str:
        """Return string representation of the USB device interface.

        :return: Formatted string with VID/PID and bus location.
        """
        return (
            f"(0x{self.vid:04X}, 0x{self.pid:04X}) "
            f"bus={getattr(self._device, 'bus', None)} "
            f"address={getattr(self._device, 'address', None)}"
        )

    @classmethod
    def enumerate(cls, timeout: Optional[int] = None) -> list["UsbDevice"]:
        """Enumerate all devices visible on the USB buses.

        No filtering is done here, device matching belongs to the caller.

        :param timeout: Optional timeout value in milliseconds to set for device operations.
        :raises SPEARConnectionError: No usable libusb backend is available.
        :return: List of USB device instances in bus order.
        """
        try:
            all_devices = list(usb.core.find(find_all=True))
        except usb.core.NoBackendError as error:
            raise SPEARConnectionError(f"No USB backend available: {error}") from error
        return [cls(device, timeout=timeout) for device in all_devices]
