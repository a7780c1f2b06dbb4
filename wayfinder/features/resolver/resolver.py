from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..routing import (
    AmbiguousPositionRequired,
    LocationGraph,
    NoPathFound,
    ShortestPathSolver,
    UnresolvedUtterance,
)
from .normalizer import Normalizer, contains_on_boundary
from .synonyms import SynonymTable

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    TOKEN = "token"
    SUBSTRING = "substring"


@dataclass(frozen=True, slots=True)
class Resolution:
    node_id: str
    source: str
    category: Optional[str] = None
    distance: Optional[float] = None


@dataclass(frozen=True, slots=True)
class _AliasGroup:
    target: str
    is_category: bool
    keys: Tuple[str, ...]


class UtteranceResolver:
    """Maps a raw utterance onto exactly one canonical node id.

    Resolution order is direct id match, then alias match in synonym table
    order. An alias that names a category resolves to the instance nearest to
    the caller's position, measured along the routing graph.
    """

    def __init__(
        self,
        location_graph: LocationGraph,
        solver: ShortestPathSolver,
        synonyms: Optional[SynonymTable] = None,
        normalizer: Optional[Normalizer] = None,
        match_mode: MatchMode = MatchMode.TOKEN,
    ) -> None:
        self.location_graph = location_graph
        self.solver = solver
        self.normalizer = normalizer or Normalizer()
        self.match_mode = MatchMode(match_mode)
        self._direct = self._index_locations()
        self._groups = self._index_synonyms(synonyms if synonyms is not None else SynonymTable.default())

    def _index_locations(self) -> Dict[str, str]:
        index: Dict[str, str] = {}
        for node in self.location_graph.locations:
            key = self.normalizer.key(node.id)
            if not key:
                continue
            if key in index:
                logger.warning("Location ids %s and %s normalize to the same key %r", index[key], node.id, key)
                continue
            index[key] = node.id
        return index

    def _index_synonyms(self, synonyms: SynonymTable) -> List[_AliasGroup]:
        categories = self.location_graph.categories
        groups: List[_AliasGroup] = []
        seen_categories = set()
        for entry in synonyms:
            node = self.location_graph.get(entry.target)
            if node is not None and node.addressable:
                groups.append(_AliasGroup(entry.target, False, self._alias_keys(entry.aliases)))
            elif entry.target in categories:
                seen_categories.add(entry.target)
                groups.append(_AliasGroup(entry.target, True, self._alias_keys((*entry.aliases, entry.target))))
            else:
                logger.warning("Dropping synonyms for unknown location or category: %s", entry.target)
        for category in categories:
            if category not in seen_categories:
                groups.append(_AliasGroup(category, True, self._alias_keys((category,))))
        return groups

    def _alias_keys(self, aliases: Sequence[str]) -> Tuple[str, ...]:
        keys = []
        for alias in aliases:
            key = self.normalizer.key(alias)
            if key and key not in keys:
                keys.append(key)
        return tuple(keys)

    def resolve(self, utterance: str, position: Optional[str] = None) -> Resolution:
        tokens = self.normalizer.tokens(utterance)
        key = "".join(tokens)
        if not key:
            raise UnresolvedUtterance(utterance)

        direct = self._direct.get(key)
        if direct is not None:
            logger.info("Resolved %r directly to %s", utterance, direct)
            return Resolution(node_id=direct, source="direct")

        group = self._match_alias(tokens, key)
        if group is None:
            raise UnresolvedUtterance(utterance)
        if not group.is_category:
            logger.info("Resolved %r by alias to %s", utterance, group.target)
            return Resolution(node_id=group.target, source="synonym")
        if position is None:
            raise AmbiguousPositionRequired(utterance, group.target)
        return self.nearest(group.target, position)

    def _match_alias(self, tokens: List[str], key: str) -> Optional[_AliasGroup]:
        for group in self._groups:
            for alias_key in group.keys:
                if self.match_mode is MatchMode.SUBSTRING:
                    matched = alias_key in key
                else:
                    matched = contains_on_boundary(tokens, alias_key)
                if matched:
                    return group
        return None

    def nearest(self, category: str, position: str) -> Resolution:
        """Instance of ``category`` with the shortest route from ``position``."""
        best: Optional[str] = None
        best_distance = math.inf
        for instance in self.location_graph.instances(category):
            distance = self.solver.distance(position, instance)
            if distance < best_distance:
                best, best_distance = instance, distance
        if best is None:
            raise NoPathFound(position, category)
        logger.info("Nearest %s from %s is %s (%.2f)", category, position, best, best_distance)
        return Resolution(node_id=best, source="category", category=category, distance=best_distance)
