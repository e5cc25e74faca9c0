"""
This package defines the logger-level domain objects of uvrlink: the
BL-NET and CMI device façades the poller drives and the factory functions
that create them.
"""
from uvrlink.domain.blnet import BlNetDevice
from uvrlink.domain.cmi import CmiDevice, CmiDeviceInfo
from uvrlink.domain.device import DeviceInfo, LoggerDevice
from uvrlink.domain.factory import create_blnet_device, create_cmi_device, create_device

__all__ = [
    "BlNetDevice",
    "CmiDevice",
    "CmiDeviceInfo",
    "create_blnet_device",
    "create_cmi_device",
    "create_device",
    "DeviceInfo",
    "LoggerDevice",
]
