"""Option models and enums shared by the path wrapper."""

from pathblend.models.path_options import FillType, PathOp, StrokeCap, StrokeJoin, StrokeOptions

__all__ = ["FillType", "PathOp", "StrokeCap", "StrokeJoin", "StrokeOptions"]
