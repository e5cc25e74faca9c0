from __future__ import annotations

from dataclasses import dataclass

from uvrlink.core.errors import TruncatedFrameError
from uvrlink.parsing.header.frame import HeaderFrame, LoggerMode


@dataclass(frozen=True)
class DeviceHeader:
    """
    Identification of a BL-NET / D-LOGG logger, built once per initialisation.

    Attributes:
        mode: The transmission mode announced by the header frame.
        frame_count: How many current-data frames a full poll cycle reads.
        device_type_codes: Raw device-type byte per frame.
        device_types: Device model names resolved from ``device_type_codes``.
        module_id: Module id as ``0x``-prefixed upper-case hex.
        firmware_version: Firmware version as a decimal string.
        transmission_mode: Transmission mode byte as upper-case hex.
    """
    mode: LoggerMode
    frame_count: int
    device_type_codes: tuple[int, ...]
    device_types: tuple[str, ...]
    module_id: str
    firmware_version: str
    transmission_mode: str

    @classmethod
    def from_replies(cls, header: HeaderFrame, version: bytes, firmware: bytes, mode: bytes) -> "DeviceHeader":
        return cls(
            mode=header.mode,
            frame_count=header.frame_count,
            device_type_codes=header.device_type_codes,
            device_types=header.device_types,
            module_id=parse_module_id(version),
            firmware_version=parse_firmware_version(firmware),
            transmission_mode=parse_transmission_mode(mode),
        )

    def device_type_for_frame(self, frame_index: int) -> str:
        """Device model for a 1-based frame index; DL modes share the first device."""
        if self.mode is LoggerMode.CAN_MULTI and 1 <= frame_index <= len(self.device_types):
            return self.device_types[frame_index - 1]
        return self.device_types[0] if self.device_types else "Unknown"

    def as_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "frame_count": self.frame_count,
            "device_type_codes": [f"0x{code:02X}" for code in self.device_type_codes],
            "device_types": list(self.device_types),
            "module_id": self.module_id,
            "firmware_version": self.firmware_version,
            "transmission_mode": self.transmission_mode,
        }


def parse_module_id(data: bytes) -> str:
    if not data:
        raise TruncatedFrameError(0, 1, "version reply")
    return "0x" + data.hex().upper()


def parse_firmware_version(data: bytes) -> str:
    if not data:
        raise TruncatedFrameError(0, 1, "firmware reply")
    return str(data[0] / 100)


def parse_transmission_mode(data: bytes) -> str:
    if not data:
        raise TruncatedFrameError(0, 1, "mode reply")
    return f"{data[0]:X}"
