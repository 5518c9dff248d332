"""Blend two structurally identical command sequences.

Sequences are interpolation-compatible when they have the same verbs in the
same order and equal conic weights. Blending runs from ``b`` toward ``a``:
``t=0`` gives ``b`` and ``t=1`` gives ``a``. ``t`` is never clamped.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from pathblend.commands.segmenter import flatten_cmds
from pathblend.commands.verbs import CONIC_WEIGHT_INDEX, PathCommand, PathVerb
from pathblend.outcome import Failure, FailureReason, Outcome, Success

logger = logging.getLogger(__name__)


def _first_mismatch(a: Sequence[PathCommand], b: Sequence[PathCommand]) -> str | None:
    """Describe why two sequences cannot be blended, or None if they can."""
    if len(a) != len(b):
        return f"length {len(a)} != {len(b)}"
    for i, (cmd_a, cmd_b) in enumerate(zip(a, b)):
        if cmd_a[0] != cmd_b[0]:
            return f"verb mismatch at {i}: {PathVerb(int(cmd_a[0])).name} != {PathVerb(int(cmd_b[0])).name}"
        if cmd_a[0] == PathVerb.CONIC and cmd_a[CONIC_WEIGHT_INDEX] != cmd_b[CONIC_WEIGHT_INDEX]:
            return f"conic weight mismatch at {i}"
    return None


def are_cmds_interpolatable(a: Sequence[PathCommand], b: Sequence[PathCommand]) -> bool:
    return _first_mismatch(a, b) is None


def _blend_mask(cmds: Sequence[PathCommand]) -> NDArray[np.bool_]:
    """True for every flat position that is blended (not a verb, not a conic weight)."""
    mask: list[bool] = []
    for cmd in cmds:
        flags = [False] + [True] * (len(cmd) - 1)
        if cmd[0] == PathVerb.CONIC:
            flags[CONIC_WEIGHT_INDEX] = False
        mask.extend(flags)
    return np.array(mask, dtype=bool)


def interpolate_cmds(
    a: Sequence[PathCommand],
    b: Sequence[PathCommand],
    t: float,
) -> Outcome[list[PathCommand]]:
    """Blend ``a`` and ``b`` operand by operand: ``b + (a - b) * t``.

    Verbs come from ``a``. Conic weights are copied from ``a`` untouched
    (they are equal in both by the compatibility check).
    """
    mismatch = _first_mismatch(a, b)
    if mismatch is not None:
        logger.debug("Cannot interpolate: %s", mismatch)
        return Failure(FailureReason.INCOMPATIBLE, mismatch)

    flat_a = np.asarray(flatten_cmds(a), dtype=np.float64)
    flat_b = np.asarray(flatten_cmds(b), dtype=np.float64)
    blended = np.where(_blend_mask(a), flat_b + (flat_a - flat_b) * t, flat_a).tolist()

    result: list[PathCommand] = []
    pos = 0
    for cmd in a:
        n = len(cmd)
        result.append((cmd[0], *blended[pos + 1 : pos + n]))
        pos += n
    return Success(result)
