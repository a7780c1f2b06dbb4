from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple


# Concrete locations come first so that "staircase 2" reaches Staircase2
# before the Staircase category alias "staircase" is tried.
DEFAULT_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "MainGateway": ("main gateway", "main entrance", "main exit"),
    "Staircase1": ("staircase 1", "stairs 1", "near olive cafe stairs"),
    "Staircase2": ("staircase 2", "stairs 2", "middle stairs"),
    "Staircase3": ("staircase 3", "stairs 3", "far stairs"),
    "Staircase4": ("staircase 4", "stairs 4", "near gateway a stairs"),
    "MaleToilet1": ("male toilet 1", "mens toilet 1", "men's toilet 1", "toilet male 1", "mail toilet 1"),
    "MaleToilet2": ("male toilet 2", "mens toilet 2", "men's toilet 2", "toilet male 2", "mail toilet 2"),
    "FemaleToilet1": ("female toilet 1", "ladies toilet 1", "women toilet 1", "toilet female 1"),
    "FemaleToilet2": ("female toilet 2", "ladies toilet 2", "women toilet 2", "toilet female 2"),
    "OliveCafe": ("olive cafe", "olive cafeteria", "olive"),
    "PanasExpress": ("panas express", "panas", "express cafe"),
    "GatewayA": ("gateway a", "entrance a", "exit a"),
    "GatewayA1": ("gateway a1", "entrance a1", "exit a1"),
    "GatewayB": ("gateway b", "entrance b", "exit b"),
    "GatewayB1": ("gateway b1", "entrance b1", "exit b1"),
    "GatewayB2": ("gateway b2", "entrance b2", "exit b2"),
    "GatewayC": ("gateway c", "entrance c", "exit c"),
    # Toilet-Female precedes Toilet-Male: in substring mode "femaletoilet" contains "maletoilet".
    "Toilet-Female": ("female toilet", "ladies toilet", "women toilet", "womens toilet", "toilet female", "ladies"),
    "Toilet-Male": ("male toilet", "mens toilet", "men toilet", "toilet male", "mail toilet", "gents"),
    "Staircase": ("staircase", "stairs", "stair", "stairway"),
    "Gateway": ("gateway", "entrance", "exit"),
}


@dataclass(frozen=True, slots=True)
class SynonymEntry:
    target: str
    aliases: Tuple[str, ...]


class SynonymTable:
    """Ordered alias table. Matching walks the entries in declaration order."""

    def __init__(self, entries: Iterable[SynonymEntry]) -> None:
        self._entries: List[SynonymEntry] = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "SynonymTable":
        return cls(SynonymEntry(target=str(target), aliases=tuple(str(a) for a in aliases)) for target, aliases in mapping.items())

    @classmethod
    def default(cls) -> "SynonymTable":
        return cls.from_mapping(DEFAULT_SYNONYMS)

    def __iter__(self) -> Iterator[SynonymEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def targets(self) -> List[str]:
        return [entry.target for entry in self._entries]
