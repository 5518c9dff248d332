"""pathblend — flat path command buffers, segmentation and path interpolation."""

from pathblend.commands import (
    COMMAND_COUNT,
    PathCommand,
    PathVerb,
    are_cmds_interpolatable,
    flatten_cmds,
    interpolate_cmds,
    to_cmds,
)
from pathblend.models import FillType, PathOp, StrokeCap, StrokeJoin, StrokeOptions
from pathblend.outcome import Failure, FailureReason, Outcome, OutcomeError, Success
from pathblend.path import VectorPath

__all__ = [
    "COMMAND_COUNT",
    "Failure",
    "FailureReason",
    "FillType",
    "Outcome",
    "OutcomeError",
    "PathCommand",
    "PathOp",
    "PathVerb",
    "StrokeCap",
    "StrokeJoin",
    "StrokeOptions",
    "Success",
    "VectorPath",
    "are_cmds_interpolatable",
    "flatten_cmds",
    "interpolate_cmds",
    "to_cmds",
]
