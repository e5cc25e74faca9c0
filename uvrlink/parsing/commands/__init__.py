"""
Request commands for the BL-NET binary protocol and CMI JSON queries.

This sub-package defines the ``Command`` value object together with builders
for every opcode the logger understands, plus the CMI ``CmiRequest``.
"""
from uvrlink.parsing.commands.builder import (
    build_cmi_request,
    build_current_data_read,
    build_firmware_request,
    build_header_read,
    build_mode_request,
    build_version_request,
    CmiRequest,
    Command,
    FIRMWARE_REQUEST,
    HEADER_READ,
    MODE_REQUEST,
    READ_CURRENT_DATA,
    VERSION_REQUEST,
)

__all__ = [
    "build_cmi_request",
    "build_current_data_read",
    "build_firmware_request",
    "build_header_read",
    "build_mode_request",
    "build_version_request",
    "CmiRequest",
    "Command",
    "FIRMWARE_REQUEST",
    "HEADER_READ",
    "MODE_REQUEST",
    "READ_CURRENT_DATA",
    "VERSION_REQUEST",
]
