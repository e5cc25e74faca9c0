from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from uvrlink.core.errors import DecodeError, TruncatedFrameError, UnknownModeError
from uvrlink.core.units import blnet_device_name

MODE_OFFSET = 1
DEVICE_TYPE_OFFSET = 5
SECOND_DEVICE_TYPE_OFFSET = 6
CAN_FRAME_COUNT_OFFSET = 5
CAN_DEVICE_TYPE_OFFSET = 6
MAX_CAN_FRAMES = 8


class LoggerMode(str, Enum):
    """Transmission modes announced in byte 1 of the header frame."""
    SINGLE_LOGGER = "1DL"
    DUAL_LOGGER = "2DL"
    CAN_MULTI = "CAN"


MODE_CODES: dict[int, LoggerMode] = {
    0xA8: LoggerMode.SINGLE_LOGGER,
    0xD1: LoggerMode.DUAL_LOGGER,
    0xDC: LoggerMode.CAN_MULTI,
}


@dataclass(frozen=True)
class HeaderFrame:
    mode_code: int
    mode: LoggerMode
    frame_count: int
    device_type_codes: tuple[int, ...]
    raw: bytes

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HeaderFrame":
        if len(raw) <= MODE_OFFSET:
            raise TruncatedFrameError(len(raw), MODE_OFFSET + 1, "header frame")
        mode_code = raw[MODE_OFFSET]
        mode = MODE_CODES.get(mode_code)
        if mode is None:
            raise UnknownModeError(mode_code)

        if mode is LoggerMode.SINGLE_LOGGER:
            _require(raw, DEVICE_TYPE_OFFSET + 1)
            codes = (raw[DEVICE_TYPE_OFFSET],)
            frame_count = 1
        elif mode is LoggerMode.DUAL_LOGGER:
            _require(raw, SECOND_DEVICE_TYPE_OFFSET + 1)
            codes = (raw[DEVICE_TYPE_OFFSET], raw[SECOND_DEVICE_TYPE_OFFSET])
            # Both devices come back in one combined current-data read.
            frame_count = 1
        else:
            _require(raw, CAN_FRAME_COUNT_OFFSET + 1)
            frame_count = raw[CAN_FRAME_COUNT_OFFSET]
            if frame_count < 1 or frame_count > MAX_CAN_FRAMES:
                raise DecodeError(f"CAN frame count must be between 1 and {MAX_CAN_FRAMES}, got {frame_count}")
            _require(raw, CAN_DEVICE_TYPE_OFFSET + frame_count)
            codes = tuple(raw[CAN_DEVICE_TYPE_OFFSET: CAN_DEVICE_TYPE_OFFSET + frame_count])

        return cls(
            mode_code=mode_code,
            mode=mode,
            frame_count=frame_count,
            device_type_codes=codes,
            raw=bytes(raw),
        )

    @property
    def device_types(self) -> tuple[str, ...]:
        return tuple(blnet_device_name(code) for code in self.device_type_codes)

    @property
    def mode_label(self) -> str:
        if self.mode is LoggerMode.CAN_MULTI:
            return f"{self.frame_count}{self.mode.value}"
        return self.mode.value


def _require(raw: bytes, length: int) -> None:
    if len(raw) < length:
        raise TruncatedFrameError(len(raw), length, "header frame")
