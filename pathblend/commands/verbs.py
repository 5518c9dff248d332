"""Path verbs and the fixed operand-count table used by flat command buffers."""

from __future__ import annotations

import enum
from typing import Sequence, Tuple


class PathVerb(enum.IntEnum):
    # Codes match Skia's SkPath::Verb
    MOVE = 0
    LINE = 1
    QUAD = 2
    CONIC = 3
    CUBIC = 4
    CLOSE = 5


# Total tokens per command, verb tag included.
COMMAND_COUNT: dict[PathVerb, int] = {
    PathVerb.MOVE: 3,
    PathVerb.LINE: 3,
    PathVerb.QUAD: 5,
    PathVerb.CONIC: 6,
    PathVerb.CUBIC: 7,
    PathVerb.CLOSE: 1,
}

# Position of the weight operand inside a Conic command.
CONIC_WEIGHT_INDEX = 5

# (verb, operands...) e.g. (PathVerb.LINE, 10.0, 0.0)
PathCommand = Tuple[float, ...]

FlatCommandBuffer = Sequence[float]


def command_length(verb: float) -> int:
    return COMMAND_COUNT[PathVerb(int(verb))]
