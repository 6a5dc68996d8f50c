#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console script for the SPEAr USB boot loader aka spearboot."""

import sys
from typing import Optional, cast

import click

from spearboot.apps.utils import spear_logger
from spearboot.apps.utils.common_cli_options import spear_apps_common_options, spear_uimage_option
from spearboot.apps.utils.utils import SPEARAppError, catch_spear_error
from spearboot.boot.commands import PayloadType
from spearboot.boot.exceptions import SpearFileError
from spearboot.boot.loader import SpearBoot
from spearboot.boot.session import DeviceSession
from spearboot.exceptions import SPEARError
from spearboot.image.uimage import decode_header


def print_image_info(path: str, payload_type: PayloadType) -> None:
    """Print the uImage header of a file.

    :param path: Path to the uImage file.
    :param payload_type: Role the file would be sent as.
    :raises SpearFileError: File can't be opened.
    """
    try:
        file = open(path, "rb")  # pylint: disable=consider-using-with
    except OSError as exc:
        raise SpearFileError(f"open {path} failed ({exc.errno})") from exc
    with file:
        header = decode_header(file, name=path)
    click.echo(f"{payload_type.description}: {path}")
    click.echo(header.info())


@click.command(name="spearboot", no_args_is_help=False)
@click.option("-s", "--scan", "scan_only", is_flag=True, help="Scan only (do not load images).")
@spear_uimage_option("ddr", "d", help="Use given file as DDR driver.")
@spear_uimage_option("firmware", "f", help="Use given file as firmware.")
@click.option(
    "-i",
    "--info",
    "info_only",
    is_flag=True,
    help="Print uImage headers of the given files and exit, the device is not accessed.",
)
@spear_apps_common_options
def main(
    scan_only: bool,
    ddr: Optional[str],
    firmware: Optional[str],
    info_only: bool,
    log_level: int,
) -> int:
    """USB loader for SPEAr3xx and SPEAr600 SoCs.

    Finds a SPEAr device in USB boot mode and loads the DDR driver and the
    firmware (both uImage files) into it.
    """
    spear_logger.install(level=log_level)

    if info_only:
        if not ddr and not firmware:
            raise SPEARAppError("No file given, use --ddr and/or --firmware.")
        if ddr:
            print_image_info(ddr, PayloadType.DDR_DRIVER)
        if firmware:
            print_image_info(firmware, PayloadType.FIRMWARE)
        return 0

    if not scan_only:
        if not ddr:
            raise SPEARAppError("ddr driver file is not given.")
        if not firmware:
            raise SPEARAppError("firmware file is not given.")

    with DeviceSession.discover_and_open() as session:
        click.echo(f"Found {session}")
        if scan_only:
            return 0

        loader = SpearBoot(session)
        # both paths were checked above
        for payload_type, path, step in (
            (PayloadType.DDR_DRIVER, cast(str, ddr), "ddr driver"),
            (PayloadType.FIRMWARE, cast(str, firmware), "firmware"),
        ):
            click.echo(f"Send {payload_type.label} {path}")
            try:
                loader.send_file(payload_type, path)
            except SPEARError:
                click.echo(f"failed to send {step} file {path}", err=True)
                raise

    click.echo("Boot images loaded.")
    return 0


@catch_spear_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
