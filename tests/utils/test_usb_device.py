#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the pyusb based USB device interface."""

from unittest.mock import MagicMock, patch

import pytest
import usb.core

from spearboot.exceptions import SPEARConnectionError, SPEARError, SPEARTimeoutError
from spearboot.utils.interfaces.device.usb_device import UsbDevice


def _pyusb_device(vid: int = 0x0483, pid: int = 0x3801) -> MagicMock:
    device = MagicMock()
    device.idVendor = vid
    device.idProduct = pid
    device.bus = 1
    device.address = 5
    device.is_kernel_driver_active.return_value = False
    return device


@pytest.fixture
def usb_util():
    with patch("spearboot.utils.interfaces.device.usb_device.usb.util") as util:
        yield util


def test_attributes() -> None:
    device = UsbDevice(_pyusb_device(), timeout=500)
    assert device.vid == 0x0483
    assert device.pid == 0x3801
    assert device.timeout == 500
    assert not device.is_opened
    assert str(device) == "(0x0483, 0x3801) bus=1 address=5"


def test_open_detaches_kernel_driver(usb_util) -> None:
    raw = _pyusb_device()
    raw.is_kernel_driver_active.return_value = True
    device = UsbDevice(raw)
    device.open()
    raw.detach_kernel_driver.assert_called_once_with(0)
    assert device.is_opened
    with pytest.raises(SPEARError):
        device.open()


def test_open_without_kernel_driver_support(usb_util) -> None:
    raw = _pyusb_device()
    raw.is_kernel_driver_active.side_effect = NotImplementedError
    device = UsbDevice(raw)
    device.open()
    raw.detach_kernel_driver.assert_not_called()
    assert device.is_opened


def test_open_failure(usb_util) -> None:
    raw = _pyusb_device()
    raw.is_kernel_driver_active.side_effect = usb.core.USBError("Access denied")
    device = UsbDevice(raw)
    with pytest.raises(SPEARConnectionError, match="Unable to open device"):
        device.open()
    assert not device.is_opened


def test_configure_claim_and_close(usb_util) -> None:
    raw = _pyusb_device()
    device = UsbDevice(raw)
    device.open()
    device.set_configuration(1)
    device.claim_interface(0)
    raw.set_configuration.assert_called_once_with(1)
    usb_util.claim_interface.assert_called_once_with(raw, 0)

    device.close()
    usb_util.release_interface.assert_called_once_with(raw, 0)
    usb_util.dispose_resources.assert_called_once_with(raw)
    assert not device.is_opened
    device.close()
    usb_util.dispose_resources.assert_called_once_with(raw)


def test_operations_require_open_device(usb_util) -> None:
    device = UsbDevice(_pyusb_device())
    with pytest.raises(SPEARConnectionError):
        device.set_configuration(1)
    with pytest.raises(SPEARConnectionError):
        device.claim_interface(0)
    with pytest.raises(SPEARConnectionError):
        device.write(0x02, b"\x00")


def test_configuration_failure(usb_util) -> None:
    raw = _pyusb_device()
    raw.set_configuration.side_effect = usb.core.USBError("Resource busy")
    device = UsbDevice(raw)
    device.open()
    with pytest.raises(SPEARConnectionError, match="usb_set_configuration"):
        device.set_configuration(1)


def test_claim_failure(usb_util) -> None:
    usb_util.claim_interface.side_effect = usb.core.USBError("Resource busy")
    device = UsbDevice(_pyusb_device())
    device.open()
    with pytest.raises(SPEARConnectionError, match="usb_claim_interface"):
        device.claim_interface(0)


def test_write(usb_util) -> None:
    raw = _pyusb_device()
    raw.write.return_value = 12
    device = UsbDevice(raw, timeout=250)
    device.open()
    assert device.write(0x02, bytes(12)) == 12
    raw.write.assert_called_once_with(0x02, bytes(12), 250)


def test_write_timeout(usb_util) -> None:
    raw = _pyusb_device()
    raw.write.side_effect = usb.core.USBTimeoutError("Operation timed out")
    device = UsbDevice(raw)
    device.open()
    with pytest.raises(SPEARTimeoutError):
        device.write(0x02, bytes(12))


def test_write_failure(usb_util) -> None:
    raw = _pyusb_device()
    raw.write.side_effect = usb.core.USBError("Pipe error")
    device = UsbDevice(raw)
    device.open()
    with pytest.raises(SPEARConnectionError, match="usb_bulk_write failed"):
        device.write(0x02, bytes(12))


def test_enumerate() -> None:
    raw_devices = [_pyusb_device(0x1234, 0x5678), _pyusb_device()]
    with patch(
        "spearboot.utils.interfaces.device.usb_device.usb.core.find",
        return_value=iter(raw_devices),
    ):
        devices = UsbDevice.enumerate(timeout=100)
    assert [(d.vid, d.pid) for d in devices] == [(0x1234, 0x5678), (0x0483, 0x3801)]
    assert all(d.timeout == 100 for d in devices)


def test_enumerate_without_backend() -> None:
    with patch(
        "spearboot.utils.interfaces.device.usb_device.usb.core.find",
        side_effect=usb.core.NoBackendError("No backend available"),
    ):
        with pytest.raises(SPEARConnectionError, match="No USB backend available"):
            UsbDevice.enumerate()


def test_close_disposes_resources_when_release_fails(usb_util) -> None:
    raw = _pyusb_device()
    usb_util.release_interface.side_effect = usb.core.USBError("No such device")
    device = UsbDevice(raw)
    device.open()
    device.claim_interface(0)
    device.claim_interface(1)
    with pytest.raises(SPEARConnectionError, match="Unable to close device"):
        device.close()
    assert usb_util.release_interface.call_count == 2
    usb_util.dispose_resources.assert_called_once_with(raw)
    assert not device.is_opened


def test_close_dispose_failure(usb_util) -> None:
    usb_util.dispose_resources.side_effect = usb.core.USBError("No such device")
    device = UsbDevice(_pyusb_device())
    device.open()
    with pytest.raises(SPEARConnectionError):
        device.close()
    assert not device.is_opened


def test_zero_timeout_is_kept(usb_util) -> None:
    raw = _pyusb_device()
    raw.write.return_value = 4
    device = UsbDevice(raw, timeout=0)
    assert device.timeout == 0
    device.open()
    device.write(0x02, bytes(4))
    raw.write.assert_called_once_with(0x02, bytes(4), 0)

    device.timeout = 250
    device.write(0x02, bytes(4), timeout=0)
    assert raw.write.call_args.args == (0x02, bytes(4), 0)
