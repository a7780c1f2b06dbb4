from .loader import MapDataset, load_map_data, parse_map_data
from .schemas import EdgePayload, MapDataPayload, PointPayload

__all__ = [
    "MapDataset",
    "load_map_data",
    "parse_map_data",
    "EdgePayload",
    "MapDataPayload",
    "PointPayload",
]
