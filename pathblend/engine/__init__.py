"""Geometry engine boundary (skia-pathops)."""

from pathblend.engine.skia import path_from_buffer, path_to_buffer

__all__ = ["path_from_buffer", "path_to_buffer"]
