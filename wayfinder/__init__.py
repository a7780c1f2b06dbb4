"""Indoor wayfinding: marker fixes, spoken destinations, narrated routes."""

__version__ = "0.3.0"
