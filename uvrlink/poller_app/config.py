from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import SettingsConfigDict, BaseSettings

from uvrlink.parsing.cmi import SECTION_CODES


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class PollerSettings(BaseSettings):
    logger_type: Literal["blnet", "cmi"] = Field("blnet", validation_alias="LOGGER_TYPE")
    device_address: str = Field("192.168.0.10", validation_alias="DEVICE_ADDRESS")
    device_port: int = Field(40000, validation_alias="DEVICE_PORT")
    username: str = Field("admin", validation_alias="DEVICE_USERNAME")
    password: SecretStr = Field(SecretStr(""), validation_alias="DEVICE_PASSWORD")

    poll_interval: float = Field(60.0, validation_alias="POLL_INTERVAL")
    can_nodes: str = Field("1", validation_alias="CAN_NODES")
    cmi_params: str = Field("I,O,D", validation_alias="CMI_PARAMS")

    max_attempts: int = Field(5, validation_alias="MAX_ATTEMPTS", ge=1)
    command_delay: float = Field(2.0, validation_alias="COMMAND_DELAY", ge=0)
    cmi_command_delay: float = Field(61.0, validation_alias="CMI_COMMAND_DELAY", ge=0)
    request_timeout: float = Field(10.0, validation_alias="REQUEST_TIMEOUT", gt=0)

    server_ip: str = Field("127.0.0.1", validation_alias="SERVER_IP")
    server_port: int = Field(10380, validation_alias="SERVER_PORT")
    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE")
    enable_poll_job: bool = Field(True, validation_alias="ENABLE_POLL_JOB")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")

    @field_validator("can_nodes")
    @classmethod
    def _check_can_nodes(cls, value: str) -> str:
        nodes = _split(value)
        if not nodes:
            raise ValueError("at least one CAN node is required")
        for node in nodes:
            if not node.isdigit():
                raise ValueError(f"CAN node must be a non-negative integer, got {node!r}")
        return value

    @field_validator("cmi_params")
    @classmethod
    def _check_cmi_params(cls, value: str) -> str:
        params = _split(value)
        unknown = [code for code in params if code not in SECTION_CODES]
        if not params or unknown:
            raise ValueError(f"unsupported jsonparam codes: {unknown or value!r}")
        return value

    @property
    def can_node_list(self) -> list[int]:
        return [int(node) for node in _split(self.can_nodes)]

    @property
    def cmi_param_list(self) -> list[str]:
        return _split(self.cmi_params)


@lru_cache
def get_settings() -> PollerSettings:
    return PollerSettings()
