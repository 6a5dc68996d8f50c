#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Image container formats accepted by the SPEAr boot loader."""

from spearboot.image.exceptions import (
    SpearImageError,
    SpearTruncatedHeaderError,
    SpearUnsupportedFormatError,
)
from spearboot.image.uimage import IH_MAGIC, ImageHeader, decode_header

__all__ = [
    "IH_MAGIC",
    "ImageHeader",
    "SpearImageError",
    "SpearTruncatedHeaderError",
    "SpearUnsupportedFormatError",
    "decode_header",
]
