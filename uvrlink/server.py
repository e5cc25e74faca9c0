import argparse
import sys
from typing import Optional, Sequence

import uvicorn

from uvrlink.poller_app import create_app, PollerSettings

# Command-line option -> settings field.
CLI_OVERRIDES = {
    "ip": "server_ip",
    "port": "server_port",
    "logger_type": "logger_type",
    "address": "device_address",
    "interval": "poll_interval",
}


class LocalServer:
    """Runs the polling service for one logger under uvicorn."""

    def __init__(self, settings: PollerSettings) -> None:
        self.settings = settings
        self.app = create_app(settings=self.settings)

    def start(self) -> None:
        uvicorn.run(self.app, host=self.settings.server_ip, port=self.settings.server_port, log_level="info")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Poll a BL-NET or CMI logger and serve the decoded records.")
    parser.add_argument("--ip", type=str, help="IP address to bind the status server to.")
    parser.add_argument("--port", type=int, help="Port to run the status server on.")
    parser.add_argument("--logger-type", choices=("blnet", "cmi"), help="Which logger protocol to speak.")
    parser.add_argument("--address", type=str, help="Host name or IP address of the logger.")
    parser.add_argument("--interval", type=float, help="Seconds between poll cycles.")
    return parser


def settings_from_args(args: argparse.Namespace) -> PollerSettings:
    """Settings from the environment, with any given command-line options on top."""
    overrides = {
        field: getattr(args, option)
        for option, field in CLI_OVERRIDES.items()
        if getattr(args, option) is not None
    }
    return PollerSettings(**overrides)


def main(argv: Optional[Sequence[str]] = None):
    args = build_parser().parse_args(argv)
    LocalServer(settings_from_args(args)).start()


if __name__ == "__main__":
    sys.exit(main())
