from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from uvrlink.core.binary import hex_dump
from uvrlink.parsing.commands import (
    Command,
    build_current_data_read,
    build_firmware_request,
    build_header_read,
    build_mode_request,
    build_version_request,
)
from uvrlink.parsing.header import DeviceHeader, HeaderFrame
from uvrlink.parsing.record import SensorRecord, decode_record
from uvrlink.transports.base import DeviceTransport
from uvrlink.transports.retry import DEFAULT_MAX_ATTEMPTS, fetch_with_retry

logger = logging.getLogger(__name__)


class BlNetDevice:
    """
    A BL-NET or D-LOGG logger reached over the binary stream protocol.

    ``initialize`` reads the module id, the header frame, the firmware
    version and the transmission mode; ``read_frame`` reads one
    current-data frame and decodes it with the layout of the device type
    the header announced for that frame.
    """

    def __init__(
        self,
        transport: DeviceTransport,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        command_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.transport = transport
        self.max_attempts = max_attempts
        self.command_delay = command_delay
        self._sleep = sleep

    async def _fetch(self, command: Command, min_length: int = 2, decode=None) -> Any:
        return await fetch_with_retry(
            self.transport,
            command,
            max_attempts=self.max_attempts,
            delay=self.command_delay,
            min_length=min_length,
            decode=decode,
            sleep=self._sleep,
        )

    async def initialize(self) -> DeviceHeader:
        version = await self._fetch(build_version_request(), min_length=1)
        header_raw = await self._fetch(build_header_read())
        logger.debug("header_received", extra={"details": {"dump": hex_dump(header_raw)}})
        header_frame = HeaderFrame.from_bytes(header_raw)
        firmware = await self._fetch(build_firmware_request(), min_length=1)
        mode = await self._fetch(build_mode_request(), min_length=1)
        header = DeviceHeader.from_replies(header_frame, version=version, firmware=firmware, mode=mode)
        logger.info("device_identified", extra={"details": header.as_dict()})
        return header

    async def read_frame(self, info: DeviceHeader, frame_index: int) -> SensorRecord:
        device_type = info.device_type_for_frame(frame_index)
        return await self._fetch(
            build_current_data_read(frame_index),
            decode=lambda raw: decode_record(raw, device_type=device_type, frame_index=frame_index),
        )

    async def close(self) -> None:
        await self.transport.close()
