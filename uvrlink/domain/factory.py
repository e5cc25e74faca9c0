from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from uvrlink.domain.blnet import BlNetDevice
from uvrlink.domain.cmi import CMI_COMMAND_DELAY, CmiDevice
from uvrlink.transports.blnet.transport import DEFAULT_PORT, BlNetTransport
from uvrlink.transports.cmi.transport import CmiTransport

if TYPE_CHECKING:
    from uvrlink.poller_app.config import PollerSettings


def create_blnet_device(
    address: str,
    port: int = DEFAULT_PORT,
    timeout: float = 10.0,
    max_attempts: int = 5,
    command_delay: float = 2.0,
) -> BlNetDevice:
    transport = BlNetTransport(host=address, port=port, timeout=timeout)
    return BlNetDevice(transport=transport, max_attempts=max_attempts, command_delay=command_delay)


def create_cmi_device(
    address: str,
    username: str,
    password: str,
    can_nodes: Sequence[int] = (1,),
    params: Sequence[str] = ("I", "O", "D"),
    timeout: float = 10.0,
    max_attempts: int = 5,
    command_delay: float = CMI_COMMAND_DELAY,
    scheme: str = "http",
) -> CmiDevice:
    transport = CmiTransport(host=address, username=username, password=password, timeout=timeout, scheme=scheme)
    return CmiDevice(
        transport=transport,
        can_nodes=can_nodes,
        params=params,
        max_attempts=max_attempts,
        command_delay=command_delay,
    )


def create_device(settings: "PollerSettings", password: Optional[str] = None):
    if settings.logger_type == "cmi":
        return create_cmi_device(
            address=settings.device_address,
            username=settings.username,
            password=password if password is not None else settings.password.get_secret_value(),
            can_nodes=settings.can_node_list,
            params=settings.cmi_param_list,
            timeout=settings.request_timeout,
            max_attempts=settings.max_attempts,
            command_delay=settings.cmi_command_delay,
        )
    return create_blnet_device(
        address=settings.device_address,
        port=settings.device_port,
        timeout=settings.request_timeout,
        max_attempts=settings.max_attempts,
        command_delay=settings.command_delay,
    )
