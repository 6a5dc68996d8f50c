#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SPEAr USB boot loader.

Loads the DDR driver and the firmware into a SPEAr device. For each payload the
uImage header is decoded, the boot command is sent and the payload follows.
"""

import logging
import os
from typing import Union

from spearboot.boot.commands import PayloadType, encode_command, get_payload_type
from spearboot.boot.exceptions import SpearFileError
from spearboot.boot.session import DeviceSession
from spearboot.boot.transfer import send_command, send_payload
from spearboot.image.uimage import ImageHeader, decode_header

logger = logging.getLogger(__name__)


class SpearBoot:
    """SPEAr USB boot loader over an established device session.

    The session is owned by the caller, the loader never opens it. A transfer
    failure closes the session, a rejected payload file leaves it open.
    """

    def __init__(self, session: DeviceSession) -> None:
        """Initialize the loader.

        :param session: Ready device session.
        """
        self.session = session

    def send_file(
        self, payload_type: Union[PayloadType, int, str], path: Union[str, os.PathLike]
    ) -> ImageHeader:
        """Send one uImage file to the device.

        :param payload_type: Role of the payload.
        :param path: Path to the uImage file.
        :raises SpearFileError: File can't be opened.
        :raises SpearImageError: File is not a valid uImage container.
        :raises SpearBootError: Command or payload transfer failed.
        :return: Header of the transferred image.
        """
        role = get_payload_type(payload_type)
        logger.info(f"Send {role.label} {path}")
        try:
            file = open(path, "rb")  # pylint: disable=consider-using-with
        except OSError as exc:
            raise SpearFileError(f"open {path} failed ({exc.errno})") from exc
        with file:
            header = decode_header(file, name=str(path))
            logger.debug(f"{role.description}: {header}")
            send_command(self.session, encode_command(role, header.data_size, header.load_address))
            send_payload(self.session, file, header.data_size)
        logger.info(
            f"{role.description} sent: {header.data_size} bytes to 0x{header.load_address:08X}"
        )
        return header

    def boot(
        self, ddr_driver: Union[str, os.PathLike], firmware: Union[str, os.PathLike]
    ) -> tuple[ImageHeader, ImageHeader]:
        """Send the DDR driver and then the firmware.

        :param ddr_driver: Path to the DDR driver uImage.
        :param firmware: Path to the firmware uImage.
        :return: Headers of both images.
        """
        driver_header = self.send_file(PayloadType.DDR_DRIVER, ddr_driver)
        firmware_header = self.send_file(PayloadType.FIRMWARE, firmware)
        return driver_header, firmware_header
