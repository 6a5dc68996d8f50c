#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT - USB boot loader client for ST SPEAr3xx/SPEAr600 SoCs.

The package discovers a SPEAr device waiting in its USB boot ROM, transfers
a DDR driver and a firmware image (both wrapped in a legacy U-Boot image
header) into device memory and lets the ROM jump into them.

Behavior of the package can be tweaked by environment variables, which are
read once at import time.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_spearboot_version() -> Version:
    """Get SPEARBOOT version information.

    :return: Parsed version object containing SPEARBOOT version information.
    """
    from .__version__ import __version__ as spearboot_version

    return parse(spearboot_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


def value_to_int(value: Optional[str], default: int) -> int:
    """Convert an environment value to integer, falling back to default.

    :param value: String value (decimal or prefixed like 0x) or None.
    :param default: Value returned when input is not set.
    :return: Integer representation of the input value.
    """
    if value is None or value == "":
        return default
    return int(value, 0)


version = get_spearboot_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)

SPEARBOOT_VERSION_BASE = version.base_version
SPEARBOOT_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="spearboot",
    version=SPEARBOOT_VERSION_BASE,
)

SPEARBOOT_DEBUG = value_to_bool(os.environ.get("SPEARBOOT_DEBUG"))

SPEARBOOT_DEBUG_LOGGING_DISABLED = value_to_bool(
    os.environ.get("SPEARBOOT_DEBUG_LOGGING_DISABLED")
)
SPEARBOOT_DEBUG_LOG_FILE = os.environ.get(
    "SPEARBOOT_DEBUG_LOG_FILE", os.path.join(SPEARBOOT_PLATFORM_DIRS.user_log_dir, "debug.log")
)

# timeout applied by the transport on every single bulk write, in milliseconds
SPEARBOOT_USB_TIMEOUT = value_to_int(os.environ.get("SPEARBOOT_USB_TIMEOUT"), 1000)
