"""Enums and option models for pass-through engine operations."""

from __future__ import annotations

import enum

import pathops
from pydantic import BaseModel, Field


class FillType(str, enum.Enum):
    WINDING = "winding"
    EVEN_ODD = "even_odd"
    INVERSE_WINDING = "inverse_winding"
    INVERSE_EVEN_ODD = "inverse_even_odd"

    def to_engine(self) -> pathops.FillType:
        return getattr(pathops.FillType, self.name)

    @classmethod
    def from_engine(cls, fill_type: pathops.FillType) -> "FillType":
        return cls[fill_type.name]

    @property
    def is_inverse(self) -> bool:
        return self in (FillType.INVERSE_WINDING, FillType.INVERSE_EVEN_ODD)

    @property
    def is_even_odd(self) -> bool:
        return self in (FillType.EVEN_ODD, FillType.INVERSE_EVEN_ODD)


class PathOp(str, enum.Enum):
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"
    UNION = "union"
    XOR = "xor"
    REVERSE_DIFFERENCE = "reverse_difference"

    def to_engine(self) -> pathops.PathOp:
        return getattr(pathops.PathOp, self.name)


class StrokeCap(str, enum.Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"

    def to_engine(self) -> pathops.LineCap:
        return getattr(pathops.LineCap, f"{self.name}_CAP")


class StrokeJoin(str, enum.Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"

    def to_engine(self) -> pathops.LineJoin:
        return getattr(pathops.LineJoin, f"{self.name}_JOIN")


class StrokeOptions(BaseModel):
    """Stroke parameters handed to the engine's stroker."""

    width: float = Field(default=1.0, ge=0.0)
    miter_limit: float = Field(default=4.0, ge=0.0)
    cap: StrokeCap = StrokeCap.BUTT
    join: StrokeJoin = StrokeJoin.MITER
    dash_array: list[float] | None = None  # on/off lengths, even count
    dash_offset: float = 0.0
