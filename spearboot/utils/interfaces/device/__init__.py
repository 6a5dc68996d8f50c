#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT low-level device interface abstractions.

Abstract transport capability and its USB bulk implementation.
"""
