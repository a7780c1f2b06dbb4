from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PointPayload(BaseModel):
    """Coordinate entry for a location or a turn point."""

    x: float = Field(..., description="X coordinate in map units")
    y: float = Field(..., description="Y coordinate in map units")
    category: Optional[str] = Field(
        default=None,
        description="Interchangeable group tag, e.g. Staircase or Toilet-Male",
    )
    label: Optional[str] = Field(default=None, description="Spoken name; defaults to the id")


class EdgePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from", min_length=1)
    target: str = Field(..., alias="to", min_length=1)


class MapDataPayload(BaseModel):
    """Logical schema of ``map-data.json``."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: Dict[str, PointPayload] = Field(..., description="User-facing locations")
    turn_points: Dict[str, PointPayload] = Field(
        default_factory=dict,
        alias="turnPoints",
        description="Geometry-only waypoints, not addressable by voice",
    )
    edges: List[EdgePayload] = Field(default_factory=list)
    synonyms: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Alias phrases per location id or category tag, in match order",
    )
    filler_phrases: Optional[List[str]] = Field(default=None, alias="fillerPhrases")
    homophones: Optional[Dict[str, str]] = None

    @field_validator("edges", mode="before")
    @classmethod
    def _coerce_pairs(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        coerced = []
        for item in value:
            if isinstance(item, (list, tuple)) and len(item) == 2:
                coerced.append({"from": item[0], "to": item[1]})
            else:
                coerced.append(item)
        return coerced

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "MapDataPayload":
        overlap = sorted(set(self.nodes) & set(self.turn_points))
        if overlap:
            raise ValueError(f"ids defined both as location and turn point: {', '.join(overlap)}")
        return self
