from uvrlink.domain import BlNetDevice, CmiDevice, create_blnet_device, create_cmi_device, create_device
from uvrlink.parsing.header import DeviceHeader, LoggerMode
from uvrlink.parsing.record import Measurement, SensorRecord, decode_record
from uvrlink.parsing.cmi import decode_document
from uvrlink.transports.retry import fetch_with_retry
from uvrlink.poller_app import create_app, Poller, PollerSettings, PollerState
from uvrlink.server import LocalServer
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "BlNetDevice",
    "CmiDevice",
    "create_app",
    "create_blnet_device",
    "create_cmi_device",
    "create_device",
    "decode_document",
    "decode_record",
    "DeviceHeader",
    "fetch_with_retry",
    "LocalServer",
    "LoggerMode",
    "Measurement",
    "Poller",
    "PollerSettings",
    "PollerState",
    "SensorRecord",
]

try:
    __version__ = version("uvrlink")
except PackageNotFoundError:
    __version__ = "0.0.0"
