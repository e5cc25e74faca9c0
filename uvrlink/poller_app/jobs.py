import asyncio
import logging
from typing import Dict, List

from uvrlink.poller_app.config import PollerSettings
from uvrlink.poller_app.state import Poller


class JobManager:
    """Background tasks owned by the app lifespan, keyed by name."""

    def __init__(self):
        self.tasks: Dict[str, asyncio.Task] = {}

    def start(self, coro, name: str) -> asyncio.Task:
        current = self.tasks.get(name)
        if current is not None and not current.done():
            coro.close()
            raise RuntimeError(f"job {name!r} is already running")
        task = asyncio.create_task(coro, name=name)
        self.tasks[name] = task
        return task

    def running(self) -> List[str]:
        return [name for name, task in self.tasks.items() if not task.done()]

    async def stop(self):
        tasks = list(self.tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.tasks.clear()


async def poll_job(poller: Poller, settings: PollerSettings, stop_event: asyncio.Event):
    interval = settings.poll_interval
    while not stop_event.is_set():
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            pass
        try:
            await poller.tick()
        except Exception as exc:
            poller.connected = False
            poller.log("poll_cycle_failed", {"error": repr(exc), "state": poller.state.value}, logging.ERROR)
