#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

import itertools

from setuptools import find_packages, setup  # type: ignore

with open("requirements.txt") as req_file:
    requirements = req_file.read().splitlines()

with open("README.md", "r") as f:
    long_description = f.read()

version: dict = {}
with open("spearboot/__version__.py") as version_file:
    exec(version_file.read(), version)  # pylint: disable=exec-used

extras_require = {
    "test": ["pytest>=7"],
}
# specify all option that contains all extras
extras_require["all"] = list(itertools.chain.from_iterable(extras_require.values()))

setup(
    name="spearboot",
    version=version["__version__"],
    description="USB boot loader client for SPEAr3xx/SPEAr600 SoCs",
    author="NXP",
    license="BSD-3-Clause",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms="Windows, Linux, Mac OSX",
    python_requires=">=3.9",
    install_requires=requirements,
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS :: MacOS X",
        "License :: OSI Approved :: BSD License",
        "Topic :: Software Development :: Embedded Systems",
        "Topic :: System :: Hardware",
        "Topic :: Utilities",
    ],
    packages=find_packages(exclude=["tests.*", "tests"]),
    entry_points={
        "console_scripts": [
            "spearboot=spearboot.apps.spearboot:safe_main",
        ],
    },
    extras_require=extras_require,
)
