from __future__ import annotations

import inspect
import logging
from typing import Any, Optional

from wayfinder.app.events import InboundEvent
from wayfinder.features.narration import NarrationScheduler, narration_settings

from .announcer import Announcer
from .engine import SessionState, Transition, WayfindingEngine

logger = logging.getLogger(__name__)


class NavigationSession:
    """One pedestrian's session: holds the state value and the narration slot."""

    def __init__(
        self,
        engine: WayfindingEngine,
        announcer: Announcer,
        *,
        step_interval_s: float = narration_settings.STEP_INTERVAL_S,
        state: Optional[SessionState] = None,
    ) -> None:
        self.engine = engine
        self.announcer = announcer
        self.state = state or SessionState()
        self.narration = NarrationScheduler(self._announce, interval=step_interval_s)

    async def dispatch(self, event: InboundEvent) -> Transition:
        transition = self.engine.handle(self.state, event)
        self.state = transition.state
        if transition.route is not None or transition.cancel_narration:
            self.narration.cancel()
        for outbound in transition.events:
            await self._announce(outbound)
        if transition.route is not None:
            steps, arrival = self.engine.narration(transition.route)
            self.narration.start(transition.route.route_id, steps, arrival)
        return transition

    async def _announce(self, event: Any) -> None:
        result = self.announcer.announce(event)
        if inspect.isawaitable(result):
            await result

    async def close(self) -> None:
        await self.narration.shutdown()
        logger.info("Session closed at position %s", self.state.position)
