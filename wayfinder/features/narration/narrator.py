from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from wayfinder.app.events import ArrivalAnnounced, NarrationStep
from wayfinder.features.routing import LocationGraph, Node

from . import settings
from .directions import Direction, classify_turn

logger = logging.getLogger(__name__)


class RouteNarrator:
    """Builds turn-by-turn announcements for a node path.

    Every node after the start is considered. Interior nodes get a direction
    from the bend between their incoming and outgoing edges; the destination
    is always announced. Other nodes are only announced when they bend the
    route or belong to an important category family.
    """

    def __init__(
        self,
        location_graph: LocationGraph,
        *,
        threshold_deg: float = settings.TURN_THRESHOLD_DEG,
        important_families: Sequence[str] = settings.IMPORTANT_CATEGORY_FAMILIES,
    ) -> None:
        self.location_graph = location_graph
        self.threshold_deg = float(threshold_deg)
        self.important_families = tuple(important_families)

    def is_important(self, node: Node) -> bool:
        if not node.category:
            return False
        family = node.category.split("-", 1)[0]
        return family in self.important_families

    def plan(self, path: Sequence[str], route_id: str = "") -> Iterator[NarrationStep]:
        """Lazily yield the qualifying steps of ``path``."""
        index = 0
        last = len(path) - 1
        for position in range(1, len(path)):
            node = self.location_graph.node(path[position])
            if position == last:
                direction = Direction.STRAIGHT
            else:
                direction = classify_turn(
                    self.location_graph.node(path[position - 1]).position,
                    node.position,
                    self.location_graph.node(path[position + 1]).position,
                    self.threshold_deg,
                )
                if direction is Direction.STRAIGHT and not self.is_important(node):
                    continue
            step = NarrationStep(
                route_id=route_id,
                index=index,
                target_id=node.id,
                direction=direction.value,
                text=self._describe(node, direction, is_destination=position == last),
            )
            index += 1
            logger.debug("Narration step %s/%d: %s", route_id, step.index, step.text)
            yield step

    def arrival(self, path: Sequence[str], route_id: Optional[str] = None) -> ArrivalAnnounced:
        node = self.location_graph.node(path[-1])
        return ArrivalAnnounced(
            route_id=route_id,
            node_id=node.id,
            text=settings.ARRIVAL_TEMPLATE.format(name=node.display_name),
        )

    @staticmethod
    def _describe(node: Node, direction: Direction, *, is_destination: bool) -> str:
        verb = direction.value.capitalize()
        if is_destination:
            return f"{verb} to {node.display_name}"
        if not node.addressable:
            return verb
        if direction is Direction.STRAIGHT:
            return f"{verb} past {node.display_name}"
        return f"{verb} at {node.display_name}"
