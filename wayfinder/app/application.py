from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from wayfinder.app.config import AppConfig, load_config
from wayfinder.dataset import MapDataset, load_map_data
from wayfinder.features.resolver import Normalizer
from wayfinder.session import Announcer, NavigationSession, WayfindingEngine

logger = logging.getLogger(__name__)


class Application:
    """Loads the dataset once and hands out per-client navigation sessions."""

    def __init__(self, config: Optional[AppConfig] = None, dataset: Optional[MapDataset] = None) -> None:
        self.config = config or load_config()
        self._dataset = dataset
        self._engine: Optional[WayfindingEngine] = None

    @property
    def engine(self) -> WayfindingEngine:
        if self._engine is None:
            raise RuntimeError("Application.startup() has not been called")
        return self._engine

    def startup(self) -> None:
        dataset = self._dataset or load_map_data(self.config.map_path)
        self._dataset = dataset
        self._engine = self._create_engine(dataset)
        if self._engine.rejected_edges:
            logger.warning("%d edge(s) were skipped while building the graph", len(self._engine.rejected_edges))

    def reload(self, map_path: Optional[Path] = None) -> None:
        """Re-read the dataset and rebuild the routing graph."""
        dataset = load_map_data(map_path or self.config.map_path)
        engine = self.engine
        engine.load(
            dataset.graph,
            synonyms=dataset.synonyms,
            normalizer=self._create_normalizer(dataset),
        )
        self._dataset = dataset
        logger.info("Map reloaded from %s", dataset.source)

    def shutdown(self) -> None:
        self._engine = None
        logger.info("Application shut down")

    def create_session(self, announcer: Announcer) -> NavigationSession:
        return NavigationSession(
            self.engine,
            announcer,
            step_interval_s=self.config.narration.step_interval_s,
        )

    def _create_engine(self, dataset: MapDataset) -> WayfindingEngine:
        return WayfindingEngine(
            dataset.graph,
            synonyms=dataset.synonyms,
            normalizer=self._create_normalizer(dataset),
            match_mode=self.config.resolver.alias_match,
            solver_strategy=self.config.routing.solver,
            turn_threshold_deg=self.config.narration.turn_threshold_deg,
            marker_debounce_s=self.config.session.marker_debounce_s,
        )

    @staticmethod
    def _create_normalizer(dataset: MapDataset) -> Optional[Normalizer]:
        if dataset.normalizer_config is None:
            return None
        return Normalizer(dataset.normalizer_config)
