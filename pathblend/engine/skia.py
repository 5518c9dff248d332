"""Adapter over skia-pathops, the external geometry engine.

Two entry points cross the boundary:
  path_to_buffer   engine path -> flat command buffer
  path_from_buffer flat command buffer -> engine path, or None when rejected
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
import pathops

from pathblend.commands.verbs import COMMAND_COUNT, PathVerb
from pathblend.config import settings

logger = logging.getLogger(__name__)

# Skia stores points as 32-bit floats
_FLOAT32_MAX = float(np.finfo(np.float32).max)


def path_to_buffer(path: pathops.Path) -> list[float]:
    """Flatten an engine path into verb-tagged tokens.

    Verbs and points come from the raw arrays so a trailing Move survives;
    iterating a ``pathops.Path`` skips it. Iteration is only used for the
    conic weights, which the raw arrays do not carry.
    """
    weights = iter([pts[-1] for verb, pts in path if verb == pathops.PathVerb.CONIC])
    points = iter(path.points)
    buffer: list[float] = []
    for verb in path.verbs:
        code = PathVerb(int(verb))
        buffer.append(code)
        for _ in range((COMMAND_COUNT[code] - 1) // 2):
            x, y = next(points)
            buffer.extend((x, y))
        if code == PathVerb.CONIC:
            buffer.append(next(weights))
    return buffer


def _validate(buffer: Sequence[float]) -> str | None:
    """Return why the engine would refuse this buffer, or None."""
    i = 0
    has_move = False
    while i < len(buffer):
        token = buffer[i]
        try:
            verb = PathVerb(int(token))
        except (ValueError, OverflowError):
            return f"unknown verb {token!r} at {i}"
        if verb != token:
            return f"unknown verb {token!r} at {i}"
        n = COMMAND_COUNT[verb]
        if i + n > len(buffer):
            return f"{verb.name} at {i} ended early"
        operands = buffer[i + 1 : i + n]
        if settings.reject_non_finite and not all(math.isfinite(v) and abs(v) <= _FLOAT32_MAX for v in operands):
            return f"operand out of range in {verb.name} at {i}"
        if verb == PathVerb.MOVE:
            has_move = True
        elif verb != PathVerb.CLOSE and not has_move:
            return f"{verb.name} at {i} has no preceding MOVE"
        i += n
    return None


def _command_args(verb: PathVerb, operands: Sequence[float]) -> tuple:
    """Operands regrouped the way ``pathops.Path.add`` takes them: points, then the conic weight."""
    if verb == PathVerb.CONIC:
        x1, y1, x2, y2, weight = operands
        return ((x1, y1), (x2, y2), weight)
    return tuple((operands[j], operands[j + 1]) for j in range(0, len(operands), 2))


def path_from_buffer(
    buffer: Sequence[float],
    fill_type: pathops.FillType | None = None,
) -> pathops.Path | None:
    """Build an engine path from a flat buffer. None if the buffer is rejected."""
    problem = _validate(buffer)
    if problem is not None:
        logger.warning("Rejected command buffer: %s", problem)
        return None

    path = pathops.Path()
    if fill_type is not None:
        path.fillType = fill_type

    i = 0
    while i < len(buffer):
        verb = PathVerb(int(buffer[i]))
        n = COMMAND_COUNT[verb]
        # Path.add, not conicTo: conicTo in pathops 0.9 builds the control point from (x1, y2)
        path.add(pathops.PathVerb(verb.value), *_command_args(verb, buffer[i + 1 : i + n]))
        i += n
    return path
