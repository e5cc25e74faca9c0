from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from uvrlink.parsing.record import SensorRecord


@runtime_checkable
class DeviceInfo(Protocol):
    @property
    def frame_count(self) -> int: ...

    def as_dict(self) -> dict[str, Any]: ...


@runtime_checkable
class LoggerDevice(Protocol):
    """
    What the poller needs from a logger: identify it once, then read frames.

    Implementations raise ``UvrLinkError`` subclasses on failure.
    """

    async def initialize(self) -> DeviceInfo: ...

    async def read_frame(self, info: DeviceInfo, frame_index: int) -> SensorRecord: ...

    async def close(self) -> None: ...
