from uvrlink.parsing.header.frame import HeaderFrame, LoggerMode, MODE_CODES
from uvrlink.parsing.header.model import (
    DeviceHeader,
    parse_firmware_version,
    parse_module_id,
    parse_transmission_mode,
)

__all__ = [
    "DeviceHeader",
    "HeaderFrame",
    "LoggerMode",
    "MODE_CODES",
    "parse_firmware_version",
    "parse_module_id",
    "parse_transmission_mode",
]
