#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEARBOOT pytest configuration and shared test fixtures."""

import os
from typing import Any, Callable

import pytest

from tests.cli_runner import CliRunner

os.environ["SPEARBOOT_DEBUG_LOGGING_DISABLED"] = "True"

# pylint: disable=wrong-import-position
from tests.misc import build_uimage  # noqa: E402


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def uimage_file(tmpdir: Any) -> Callable[..., str]:
    """Get factory writing uImage files into a temporary directory.

    :param tmpdir: Pytest temporary directory.
    :return: Factory taking file name, payload and ``build_uimage`` keyword arguments.
    """

    def _factory(file_name: str, payload: bytes, **kwargs: Any) -> str:
        path = os.path.join(str(tmpdir), file_name)
        with open(path, "wb") as f:
            f.write(build_uimage(payload, **kwargs))
        return path

    return _factory
