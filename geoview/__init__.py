"""Geographic map model: coordinates, tiles, tile layers, items, camera, telemetry and flight helpers."""

__version__ = "0.1.0"
__all__ = ["camera", "drawitem", "flight", "geo", "item", "layers", "telemetry"]