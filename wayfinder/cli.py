from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from wayfinder.app.config import DEFAULT_MAP_PATH
from wayfinder.app.events import LocationFix, ResolutionFailed, RouteComputed, RouteUnavailable, Utterance
from wayfinder.dataset import load_map_data
from wayfinder.features.resolver import MatchMode, Normalizer
from wayfinder.features.routing import InvalidDataset, SolverStrategy
from wayfinder.session import SessionState, WayfindingEngine

logger = logging.getLogger(__name__)

EXAMPLE_PHRASE = "take me to the nearest male toilet"


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a destination phrase and print the route")
    parser.add_argument("phrase", help=f'Destination phrase, e.g. "{EXAMPLE_PHRASE}"')
    parser.add_argument("--from", dest="start", default=None, help="Start node id (scanned marker)")
    parser.add_argument("--map", default=str(DEFAULT_MAP_PATH), help="Path to map-data.json")
    parser.add_argument(
        "--alias-match",
        choices=[mode.value for mode in MatchMode],
        default=MatchMode.TOKEN.value,
        help="Alias matching rule",
    )
    parser.add_argument(
        "--solver",
        choices=[strategy.value for strategy in SolverStrategy],
        default=SolverStrategy.LINEAR.value,
        help="Shortest path implementation",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(message)s",
    )

    try:
        dataset = load_map_data(Path(args.map))
    except InvalidDataset as exc:
        print(f"Could not load map: {exc}", file=sys.stderr)
        return 2

    engine = WayfindingEngine(
        dataset.graph,
        synonyms=dataset.synonyms,
        normalizer=Normalizer(dataset.normalizer_config) if dataset.normalizer_config else None,
        match_mode=MatchMode(args.alias_match),
        solver_strategy=SolverStrategy(args.solver),
    )

    state = SessionState()
    if args.start:
        transition = engine.on_location_fix(state, LocationFix(node_id=args.start))
        for event in transition.events:
            print(event.text)
        if transition.state.position is None:
            return 1
        state = transition.state

    transition = engine.handle(state, Utterance(text=args.phrase))
    for event in transition.events:
        print(event.text)
        if isinstance(event, RouteComputed):
            print(f"Distance: {event.distance:.2f}")

    if transition.route is None:
        failed = any(isinstance(event, (ResolutionFailed, RouteUnavailable)) for event in transition.events)
        return 1 if failed else 0

    steps, arrival = engine.narration(transition.route)
    print("")
    print("Narration:")
    for step in steps:
        print(f"  {step.index + 1}. {step.text}")
    print(f"  {arrival.text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
