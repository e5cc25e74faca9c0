"""
Polling service around a single logger.

``create_app`` builds a FastAPI application whose lifespan runs the poll
job and which serves the poller status, device info, latest records and
recent log events. ``POST /reinitialize`` makes the next tick identify the
logger again, for instance after it was swapped or reconfigured.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException

from uvrlink.domain.device import LoggerDevice
from uvrlink.domain.factory import create_device
from uvrlink.poller_app.config import PollerSettings, get_settings
from uvrlink.poller_app.jobs import JobManager, poll_job
from uvrlink.poller_app.logging import create_logger, ring_buffer
from uvrlink.poller_app.models import DeviceResponse, HealthResponse, LogsResponse, RecordsResponse
from uvrlink.poller_app.sinks import MemorySink
from uvrlink.poller_app.state import Poller, PollerState

LOGGER_NAME = "uvrlink"


def create_app(
    settings: Optional[PollerSettings] = None,
    device: Optional[LoggerDevice] = None,
    sink: Optional[MemorySink] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logger = create_logger(LOGGER_NAME, settings.log_ring_size)
    sink = sink or MemorySink()
    device = device or create_device(settings)
    poller = Poller(device=device, sink=sink, logger=logger.getChild("poller"))
    jobs = JobManager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stop_event = asyncio.Event()
        if settings.enable_poll_job:
            jobs.start(poll_job(poller, settings, stop_event), name="poll")
        poller.log("service_started", {"logger_type": settings.logger_type, "address": settings.device_address})
        try:
            yield
        finally:
            stop_event.set()
            await jobs.stop()
            await device.close()
            poller.log("service_stopped")

    app = FastAPI(title="uvrlink", lifespan=lifespan)
    app.state.settings = settings
    app.state.poller = poller
    app.state.sink = sink
    app.state.jobs = jobs

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(**poller.status(), jobs=jobs.running())

    @app.post("/reinitialize", response_model=HealthResponse)
    async def reinitialize() -> HealthResponse:
        poller.reset()
        poller.log("reinitialize_requested")
        return HealthResponse(**poller.status(), jobs=jobs.running())

    @app.get("/device", response_model=DeviceResponse)
    async def device_info() -> DeviceResponse:
        info = sink.device_info
        return DeviceResponse(logger_type=settings.logger_type, device=info.as_dict() if info else None)

    @app.get("/records", response_model=RecordsResponse)
    async def records() -> RecordsResponse:
        return RecordsResponse(records=[record.as_dict() for record in sink.records()])

    @app.get("/records/{frame_index}")
    async def record(frame_index: int) -> dict:
        latest = sink.latest(frame_index)
        if latest is None:
            raise HTTPException(status_code=404, detail=f"No record for frame {frame_index}")
        return latest.as_dict()

    @app.get("/logs", response_model=LogsResponse)
    async def logs() -> LogsResponse:
        handler = ring_buffer(logger)
        return LogsResponse(events=handler.get_events() if handler else [])

    return app


__all__ = ["create_app", "MemorySink", "Poller", "PollerSettings", "PollerState"]
