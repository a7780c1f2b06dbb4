"""Application layer: configuration, events and the runtime container."""
