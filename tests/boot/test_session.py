#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of the SPEAr device discovery and session life cycle."""

import logging

import pytest

from spearboot.boot.exceptions import (
    SpearDeviceNotFoundError,
    SpearSessionError,
    SpearTransportError,
)
from spearboot.boot.session import (
    SUPPORTED_DEVICES,
    DeviceSession,
    SessionState,
    SupportedDevice,
    find_supported_device,
)
from spearboot.exceptions import SPEARConnectionError
from tests.virtual_device import VirtualDevice


def test_find_device_regardless_of_position() -> None:
    spear = VirtualDevice()
    devices = [
        VirtualDevice(vid=0x1234, pid=0x5678),
        spear,
        VirtualDevice(vid=0x0483, pid=0x3802),
    ]
    match = find_supported_device(devices)
    assert match is not None
    device, entry = match
    assert device is spear
    assert entry is SUPPORTED_DEVICES[0]


def test_find_first_of_several_matching_devices() -> None:
    first, second = VirtualDevice(), VirtualDevice()
    match = find_supported_device([first, second])
    assert match is not None
    assert match[0] is first


def test_find_no_device() -> None:
    assert find_supported_device([VirtualDevice(vid=0x0483, pid=0x0000)]) is None
    assert find_supported_device([]) is None


def test_custom_supported_list() -> None:
    entry = SupportedDevice(0x0483, 0x3802, "SPEAr600")
    device = VirtualDevice(pid=0x3802)
    assert find_supported_device([device], supported=(entry,)) == (device, entry)


def test_discover_and_open() -> None:
    device = VirtualDevice()
    session = DeviceSession.discover_and_open(devices=[device])
    assert session.is_ready
    assert session.state is SessionState.READY
    assert session.device is device
    assert device.calls == ["open", "set_configuration", "claim_interface"]
    assert device.configuration == 1
    assert device.claimed == [0]
    assert str(session) == "SPEAr3xx (VID=0x0483, PID=0x3801)"
    session.close()


def test_no_device_found_holds_no_handle() -> None:
    devices = [VirtualDevice(vid=0x1234, pid=0x5678), VirtualDevice(vid=0x0483, pid=0x1)]
    with pytest.raises(SpearDeviceNotFoundError, match="No USB SPEAr device found!"):
        DeviceSession.discover_and_open(devices=devices)
    for device in devices:
        assert device.calls == []


@pytest.mark.parametrize(
    "fail_on, calls",
    [
        ("open", ["open", "close"]),
        ("set_configuration", ["open", "set_configuration", "close"]),
        ("claim_interface", ["open", "set_configuration", "claim_interface", "close"]),
    ],
)
def test_setup_failure_releases_device(fail_on, calls) -> None:
    device = VirtualDevice(fail_on=fail_on)
    with pytest.raises(SpearTransportError, match=f"{fail_on} failed"):
        DeviceSession.discover_and_open(devices=[device])
    assert device.calls == calls
    assert not device.is_opened


def test_enumeration_failure(monkeypatch) -> None:
    def _enumerate(timeout=None):
        raise SPEARConnectionError("No USB backend available")

    monkeypatch.setattr("spearboot.boot.session.UsbDevice.enumerate", _enumerate)
    with pytest.raises(SpearTransportError, match="No USB backend available"):
        DeviceSession.discover_and_open()


def test_enumerate_usb_devices_by_default(monkeypatch) -> None:
    device = VirtualDevice()
    monkeypatch.setattr(
        "spearboot.boot.session.UsbDevice.enumerate", lambda timeout=None: [device]
    )
    with DeviceSession.discover_and_open() as session:
        assert session.device is device


def test_close_is_idempotent() -> None:
    device = VirtualDevice()
    session = DeviceSession.discover_and_open(devices=[device])
    session.close()
    session.close()
    assert session.state is SessionState.CLOSED
    assert device.close_count == 1
    assert not device.is_opened


def test_closed_session_is_unusable() -> None:
    session = DeviceSession.discover_and_open(devices=[VirtualDevice()])
    session.close()
    assert not session.is_ready
    with pytest.raises(SpearSessionError):
        session.device  # pylint: disable=pointless-statement


def test_context_manager_closes_session() -> None:
    device = VirtualDevice()
    with DeviceSession.discover_and_open(devices=[device]) as session:
        assert device.is_opened
    assert session.state is SessionState.CLOSED
    assert not device.is_opened


def test_abort_logs_release_failure(caplog) -> None:
    class FailingCloseDevice(VirtualDevice):
        def close(self) -> None:
            super().close()
            raise SPEARConnectionError("release failed")

    session = DeviceSession.discover_and_open(devices=[FailingCloseDevice()])
    session.abort()
    assert session.state is SessionState.CLOSED
    assert "release failed" in caplog.text


def test_close_failure_raises_transport_error() -> None:
    class FailingCloseDevice(VirtualDevice):
        def close(self) -> None:
            raise SPEARConnectionError("release failed")

    session = DeviceSession.discover_and_open(devices=[FailingCloseDevice()])
    with pytest.raises(SpearTransportError):
        session.close()
    assert session.state is SessionState.CLOSED


def test_found_logged_only_for_ready_session(caplog) -> None:
    caplog.set_level(logging.DEBUG)
    with pytest.raises(SpearTransportError):
        DeviceSession.discover_and_open(devices=[VirtualDevice(fail_on="claim_interface")])
    assert not [r for r in caplog.records if r.levelno == logging.INFO]

    with DeviceSession.discover_and_open(devices=[VirtualDevice()]):
        pass
    infos = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert infos == ["Found SPEAr3xx (VID=0x0483, PID=0x3801)"]
