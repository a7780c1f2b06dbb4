from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional, Tuple

from wayfinder.app.events import (
    ArrivalAnnounced,
    Destination,
    InboundEvent,
    LocationFix,
    NarrationStep,
    OutboundEvent,
    PositionUpdated,
    ResolutionFailed,
    ResolvedDestination,
    RouteComputed,
    RouteUnavailable,
    UnknownLocation,
    Utterance,
)
from wayfinder.features.narration import RouteNarrator, narration_settings
from wayfinder.features.resolver import MatchMode, Normalizer, SynonymTable, UtteranceResolver
from wayfinder.features.routing import (
    AmbiguousPositionRequired,
    GraphBuilder,
    InvalidDataset,
    LocationGraph,
    NoPathFound,
    ShortestPathSolver,
    SolverStrategy,
    UnresolvedUtterance,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    position: Optional[str] = None
    destination: Optional[str] = None
    last_marker: Optional[str] = None
    last_marker_at: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Route:
    route_id: str
    path: Tuple[str, ...]
    distance: float


@dataclass(slots=True)
class Transition:
    state: SessionState
    events: List[OutboundEvent] = field(default_factory=list)
    route: Optional[Route] = None
    # the route being narrated no longer applies
    cancel_narration: bool = False


class WayfindingEngine:
    """Event handlers that turn a session state plus one event into a transition.

    The engine owns the routing graph for the loaded dataset and nothing
    session-specific; callers keep the ``SessionState`` and pass it back in.
    """

    def __init__(
        self,
        location_graph: LocationGraph,
        *,
        synonyms: Optional[SynonymTable] = None,
        normalizer: Optional[Normalizer] = None,
        match_mode: MatchMode = MatchMode.TOKEN,
        solver_strategy: SolverStrategy = SolverStrategy.LINEAR,
        turn_threshold_deg: float = narration_settings.TURN_THRESHOLD_DEG,
        marker_debounce_s: float = 3.0,
    ) -> None:
        self.builder = GraphBuilder()
        self.match_mode = MatchMode(match_mode)
        self.solver_strategy = SolverStrategy(solver_strategy)
        self.turn_threshold_deg = turn_threshold_deg
        self.marker_debounce_s = marker_debounce_s
        self.load(location_graph, synonyms=synonyms, normalizer=normalizer)

    def load(
        self,
        location_graph: LocationGraph,
        *,
        synonyms: Optional[SynonymTable] = None,
        normalizer: Optional[Normalizer] = None,
    ) -> None:
        """Swap in a new dataset. The routing graph is rebuilt only here."""
        build = self.builder.build_for(location_graph)
        if location_graph.edges and build.graph.number_of_edges() == 0:
            raise InvalidDataset("Every edge references an undefined node")
        self.location_graph = location_graph
        self.graph = build.graph
        self.rejected_edges = build.rejected
        self.solver = ShortestPathSolver(build.graph, self.solver_strategy)
        self.resolver = UtteranceResolver(
            location_graph,
            self.solver,
            synonyms=synonyms,
            normalizer=normalizer,
            match_mode=self.match_mode,
        )
        self.narrator = RouteNarrator(location_graph, threshold_deg=self.turn_threshold_deg)

    def handle(self, state: SessionState, event: InboundEvent) -> Transition:
        if isinstance(event, LocationFix):
            return self.on_location_fix(state, event)
        if isinstance(event, (Utterance, Destination)):
            return self.on_request(state, event.text)
        raise TypeError(f"Unsupported event: {type(event).__name__}")

    def on_location_fix(self, state: SessionState, event: LocationFix) -> Transition:
        marker = (event.node_id or "").strip()
        node = self.location_graph.get(marker)
        if node is None:
            logger.warning("Unknown location marker: %r", marker)
            return Transition(state, [UnknownLocation(marker=marker, text=f"Unknown location {marker}")])

        if (
            state.last_marker == node.id
            and state.last_marker_at is not None
            and event.timestamp - state.last_marker_at < self.marker_debounce_s
        ):
            return Transition(state)

        state = replace(state, position=node.id, last_marker=node.id, last_marker_at=event.timestamp)
        logger.info("Position fixed at %s", node.id)
        events: List[OutboundEvent] = [PositionUpdated(node_id=node.id, text=f"You are at {node.display_name}")]
        if state.destination is None:
            return Transition(state, events)
        if state.destination == node.id:
            events.append(self._arrival(node.id))
            return Transition(replace(state, destination=None), events, cancel_narration=True)
        return self._plan_route(state, events)

    def on_request(self, state: SessionState, text: str) -> Transition:
        try:
            resolution = self.resolver.resolve(text, state.position)
        except (UnresolvedUtterance, AmbiguousPositionRequired) as exc:
            logger.info("Resolution failed (%s): %r", exc.reason, text)
            return Transition(state, [ResolutionFailed(reason=exc.reason, utterance=text, text=str(exc))])
        except NoPathFound as exc:
            logger.info("No reachable %s from %s", exc.destination, exc.source)
            return Transition(
                state,
                [RouteUnavailable(origin=exc.source or "", destination=exc.destination)],
            )

        node = self.location_graph.node(resolution.node_id)
        state = replace(state, destination=node.id)
        events: List[OutboundEvent] = [
            ResolvedDestination(
                node_id=node.id,
                text=f"Navigating to {node.display_name}",
                source=resolution.source,
                category=resolution.category,
            )
        ]
        if state.position is None:
            return Transition(state, events, cancel_narration=True)
        if state.position == node.id:
            events.append(self._arrival(node.id, already_there=True))
            return Transition(replace(state, destination=None), events, cancel_narration=True)
        return self._plan_route(state, events)

    def _plan_route(self, state: SessionState, events: List[OutboundEvent]) -> Transition:
        path = self.solver.shortest_path(state.position, state.destination)
        if not path:
            logger.info("No path from %s to %s", state.position, state.destination)
            events.append(RouteUnavailable(origin=state.position, destination=state.destination))
            return Transition(state, events, cancel_narration=True)

        route = Route(route_id=uuid.uuid4().hex[:8], path=tuple(path), distance=self.solver.path_distance(path))
        spoken = [node.display_name for node in map(self.location_graph.node, path) if node.addressable]
        logger.info("Route %s: %s (%.2f)", route.route_id, " -> ".join(path), route.distance)
        events.append(
            RouteComputed(
                route_id=route.route_id,
                path=list(path),
                distance=route.distance,
                text="Shortest path: " + " → ".join(spoken),
            )
        )
        return Transition(state, events, route=route)

    def _arrival(self, node_id: str, *, already_there: bool = False) -> ArrivalAnnounced:
        node = self.location_graph.node(node_id)
        if already_there:
            return ArrivalAnnounced(route_id=None, node_id=node.id, text=f"You are already at {node.display_name}")
        return ArrivalAnnounced(
            route_id=None,
            node_id=node.id,
            text=narration_settings.ARRIVAL_TEMPLATE.format(name=node.display_name),
        )

    def narration(self, route: Route) -> Tuple[Iterator[NarrationStep], ArrivalAnnounced]:
        steps = self.narrator.plan(route.path, route_id=route.route_id)
        return steps, self.narrator.arrival(route.path, route_id=route.route_id)
