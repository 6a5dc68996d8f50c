#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT generic command interface definitions."""

from abc import ABC, abstractmethod


class CmdPacketBase(ABC):
    """Abstract base class for command protocol packets.

    A command packet is a fixed-size control message sent to the device ahead of
    the data it announces.
    """

    SIZE: int

    @abstractmethod
    def export(self) -> bytes:
        """Export CmdPacket into bytes.

        :return: Exported object into bytes, always ``SIZE`` long.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Get string representation of the packet."""
