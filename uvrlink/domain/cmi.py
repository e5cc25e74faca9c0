from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from uvrlink.parsing.cmi import CmiHeader, decode_document, parse_header
from uvrlink.parsing.commands import build_cmi_request
from uvrlink.parsing.record import SensorRecord
from uvrlink.transports.base import DeviceTransport
from uvrlink.transports.retry import DEFAULT_MAX_ATTEMPTS, fetch_with_retry

logger = logging.getLogger(__name__)

# The CMI rate-limits its JSON API to about one request per minute.
CMI_COMMAND_DELAY = 61.0


@dataclass(frozen=True)
class CmiDeviceInfo:
    header: CmiHeader
    can_nodes: tuple[int, ...]

    @property
    def frame_count(self) -> int:
        return len(self.can_nodes)

    def node_for_frame(self, frame_index: int) -> int:
        if frame_index < 1 or frame_index > len(self.can_nodes):
            raise ValueError(f"frame_index {frame_index} outside 1..{len(self.can_nodes)}")
        return self.can_nodes[frame_index - 1]

    def as_dict(self) -> dict[str, Any]:
        return {**self.header.as_dict(), "can_nodes": list(self.can_nodes), "frame_count": self.frame_count}


class CmiDevice:
    """A CMI gateway polled through its JSON API, one CAN node per frame."""

    def __init__(
        self,
        transport: DeviceTransport,
        can_nodes: Sequence[int] = (1,),
        params: Sequence[str] = ("I", "O", "D"),
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        command_delay: float = CMI_COMMAND_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if not can_nodes:
            raise ValueError("at least one CAN node is required")
        self.transport = transport
        self.can_nodes = tuple(can_nodes)
        self.params = tuple(params)
        self.max_attempts = max_attempts
        self.command_delay = command_delay
        self._sleep = sleep

    async def _fetch(self, node: int, decode=None) -> Any:
        return await fetch_with_retry(
            self.transport,
            build_cmi_request(node, self.params),
            max_attempts=self.max_attempts,
            delay=self.command_delay,
            min_length=1,
            decode=decode,
            sleep=self._sleep,
        )

    async def initialize(self) -> CmiDeviceInfo:
        header = await self._fetch(self.can_nodes[0], decode=parse_header)
        info = CmiDeviceInfo(header=header, can_nodes=self.can_nodes)
        logger.info("device_identified", extra={"details": info.as_dict()})
        return info

    async def read_frame(self, info: CmiDeviceInfo, frame_index: int) -> SensorRecord:
        node = info.node_for_frame(frame_index)
        return await self._fetch(node, decode=lambda document: decode_document(document, frame_index=frame_index))

    async def close(self) -> None:
        await self.transport.close()
