"""Path command buffers: segmentation, flattening and interpolation."""

from pathblend.commands.interpolate import are_cmds_interpolatable, interpolate_cmds
from pathblend.commands.segmenter import flatten_cmds, to_cmds, verbs_of
from pathblend.commands.verbs import COMMAND_COUNT, CONIC_WEIGHT_INDEX, PathCommand, PathVerb

__all__ = [
    "COMMAND_COUNT",
    "CONIC_WEIGHT_INDEX",
    "PathCommand",
    "PathVerb",
    "are_cmds_interpolatable",
    "flatten_cmds",
    "interpolate_cmds",
    "to_cmds",
    "verbs_of",
]
