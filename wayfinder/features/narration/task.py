from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import suppress
from typing import Any, Awaitable, Callable, Iterable, Optional

from wayfinder.app.events import ArrivalAnnounced, NarrationStep

from . import settings

logger = logging.getLogger(__name__)

Emit = Callable[[Any], Optional[Awaitable[None]]]


class NarrationTask:
    """Paced delivery of one route's narration, followed by the arrival notice."""

    def __init__(
        self,
        route_id: str,
        steps: Iterable[NarrationStep],
        arrival: ArrivalAnnounced,
        emit: Emit,
        interval: float = settings.STEP_INTERVAL_S,
    ) -> None:
        self.route_id = route_id
        self._steps = steps
        self._arrival = arrival
        self._emit = emit
        self.interval = max(0.0, float(interval))
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name=f"narration-{self.route_id}")

    def cancel(self) -> None:
        if self.active:
            logger.info("Narration %s cancelled", self.route_id)
            self._task.cancel()

    async def wait(self) -> None:
        if self._task is None:
            return
        with suppress(asyncio.CancelledError):
            await self._task

    async def _run(self) -> None:
        for step in self._steps:
            await asyncio.sleep(self.interval)
            await self._deliver(step)
        await asyncio.sleep(self.interval)
        await self._deliver(self._arrival)
        logger.info("Narration %s finished", self.route_id)

    async def _deliver(self, event: Any) -> None:
        result = self._emit(event)
        if inspect.isawaitable(result):
            await result


class NarrationScheduler:
    """Keeps at most one narration running; a new route replaces the old one."""

    def __init__(self, emit: Emit, interval: float = settings.STEP_INTERVAL_S) -> None:
        self._emit = emit
        self.interval = interval
        self._active: Optional[NarrationTask] = None

    @property
    def active(self) -> Optional[NarrationTask]:
        if self._active is not None and self._active.active:
            return self._active
        return None

    def start(self, route_id: str, steps: Iterable[NarrationStep], arrival: ArrivalAnnounced) -> NarrationTask:
        self.cancel()
        task = NarrationTask(route_id, steps, arrival, self._emit, self.interval)
        task.start()
        self._active = task
        return task

    def cancel(self) -> None:
        if self._active is not None:
            self._active.cancel()

    async def shutdown(self) -> None:
        task = self._active
        self.cancel()
        if task is not None:
            await task.wait()
        self._active = None
