"""
Polling state machine.

The first tick identifies the logger and reads every frame once; only when
all of that succeeds does the poller become ``READY``. Failed steady-state
reads mark it ``FAULTED`` and clear the connection flag but keep the device
info, so the next tick simply reads again.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from uvrlink.core.errors import UvrLinkError
from uvrlink.domain.device import DeviceInfo, LoggerDevice
from uvrlink.parsing.record import SensorRecord
from uvrlink.poller_app.logging import redact
from uvrlink.poller_app.sinks import RecordSink


class PollerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAULTED = "faulted"


class Poller:
    def __init__(self, device: LoggerDevice, sink: RecordSink, logger: Optional[logging.Logger] = None):
        self.device = device
        self.sink = sink
        self.logger = logger or logging.getLogger(__name__)
        self.state = PollerState.UNINITIALIZED
        self.device_info: Optional[DeviceInfo] = None
        self.connected = False
        self.last_error: Optional[str] = None

    def log(self, event: str, details: Optional[dict[str, Any]] = None, level: int = logging.INFO) -> None:
        self.logger.log(level, event, extra={"details": redact(details)})

    @property
    def frame_indices(self) -> range:
        count = self.device_info.frame_count if self.device_info else 0
        return range(1, count + 1)

    async def tick(self) -> list[SensorRecord]:
        if self.state is PollerState.UNINITIALIZED or self.device_info is None:
            return await self._initialize()
        return await self._poll()

    async def _initialize(self) -> list[SensorRecord]:
        self.state = PollerState.INITIALIZING
        try:
            info = await self.device.initialize()
            records = [await self.device.read_frame(info, index) for index in range(1, info.frame_count + 1)]
        except UvrLinkError as exc:
            self.reset()
            self.last_error = str(exc)
            self.log("initialization_failed", {"error": str(exc)}, logging.ERROR)
            return []
        except Exception as exc:
            self.reset()
            self.last_error = repr(exc)
            raise

        self.device_info = info
        self.sink.publish_device_info(info)
        for record in records:
            self.sink.publish(record)
        self.state = PollerState.READY
        self.connected = True
        self.last_error = None
        self.log("initialization_succeeded", {"frame_count": info.frame_count})
        return records

    async def _poll(self) -> list[SensorRecord]:
        records: list[SensorRecord] = []
        failed: list[int] = []
        for index in self.frame_indices:
            try:
                record = await self.device.read_frame(self.device_info, index)
            except UvrLinkError as exc:
                failed.append(index)
                self.last_error = f"frame {index}: {exc}"
                self.log("poll_failed", {"frame_index": index, "error": str(exc)}, logging.ERROR)
                continue
            except Exception as exc:
                self.state = PollerState.FAULTED
                self.connected = False
                self.last_error = f"frame {index}: {exc!r}"
                raise
            self.sink.publish(record)
            records.append(record)

        if failed:
            self.state = PollerState.FAULTED
            self.connected = False
        else:
            self.state = PollerState.READY
            self.connected = True
            self.last_error = None
            self.log("poll_succeeded", {"frames": len(records)}, logging.DEBUG)
        return records

    def reset(self) -> None:
        """Forget the device info so the next tick re-initialises."""
        self.state = PollerState.UNINITIALIZED
        self.device_info = None
        self.connected = False

    def status(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "connected": self.connected,
            "last_error": self.last_error,
            "frame_count": self.device_info.frame_count if self.device_info else 0,
        }
