#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT device interface base class.

This module provides the abstract base class of the transport capability consumed
by the boot protocol: open a handle, select a configuration, claim an interface,
perform a blocking bulk write and close the handle.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from typing_extensions import Self


class DeviceBase(ABC):
    """Transport used by the boot protocol to reach one USB device.

    Every method which talks to the bus blocks until the operation completes or fails.
    Failures are reported as ``SPEARConnectionError`` (``SPEARTimeoutError`` for timeouts).

    :ivar vid: USB vendor identifier of the device.
    :ivar pid: USB product identifier of the device.
    """

    vid: int
    pid: int

    def __enter__(self) -> Self:
        """Open the device for the duration of a with block.

        :return: Opened device.
        """
        self.open()
        return self

    def __exit__(
        self,
        exception_type: Optional[Type[Exception]] = None,
        exception_value: Optional[Exception] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        """Close the device at the end of a with block, also on error."""
        self.close()

    @property
    @abstractmethod
    def is_opened(self) -> bool:
        """Indicates whether a handle to the device is held.

        :return: True while the handle is held.
        """

    @abstractmethod
    def open(self) -> None:
        """Acquire a handle to the device.

        :raises SPEARConnectionError: If the device cannot be opened.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the handle to the device.

        Calling close on a device which is not opened does nothing.
        """

    @abstractmethod
    def set_configuration(self, configuration: int) -> None:
        """Select the active configuration of the device.

        :param configuration: Configuration value (bConfigurationValue).
        :raises SPEARConnectionError: If the configuration cannot be selected.
        """

    @abstractmethod
    def claim_interface(self, interface: int) -> None:
        """Claim an interface of the active configuration.

        :param interface: Interface number.
        :raises SPEARConnectionError: If the interface cannot be claimed.
        """

    @abstractmethod
    def write(self, endpoint: int, data: bytes, timeout: Optional[int] = None) -> int:
        """Perform one blocking bulk write.

        :param endpoint: Address of the OUT endpoint.
        :param data: Bytes to transfer.
        :param timeout: Write timeout in milliseconds, None for default timeout.
        :raises SPEARConnectionError: Transfer failed.
        :raises SPEARTimeoutError: Transfer did not finish in time.
        :return: Number of bytes actually transferred.
        """

    @property
    @abstractmethod
    def timeout(self) -> int:
        """Timeout of a single bulk write.

        :return: Milliseconds.
        """

    @timeout.setter
    @abstractmethod
    def timeout(self, value: int) -> None:
        """Change the timeout of a single bulk write.

        :param value: Milliseconds.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Return string containing information about the interface."""
