from __future__ import annotations

import threading
from typing import Optional, Protocol

from uvrlink.domain.device import DeviceInfo
from uvrlink.parsing.record import SensorRecord


class RecordSink(Protocol):
    """Receiver for everything the poller produces."""

    def publish(self, record: SensorRecord) -> None: ...

    def publish_device_info(self, info: DeviceInfo) -> None: ...


class MemorySink:
    """Keeps the latest record per frame and the current device info."""

    def __init__(self) -> None:
        self._records: dict[int, SensorRecord] = {}
        self._device_info: Optional[DeviceInfo] = None
        self._lock = threading.Lock()

    def publish(self, record: SensorRecord) -> None:
        with self._lock:
            self._records[record.frame_index] = record

    def publish_device_info(self, info: DeviceInfo) -> None:
        with self._lock:
            self._device_info = info

    @property
    def device_info(self) -> Optional[DeviceInfo]:
        with self._lock:
            return self._device_info

    def latest(self, frame_index: int) -> Optional[SensorRecord]:
        with self._lock:
            return self._records.get(frame_index)

    def records(self) -> list[SensorRecord]:
        with self._lock:
            return [self._records[index] for index in sorted(self._records)]
