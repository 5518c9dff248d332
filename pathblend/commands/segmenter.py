"""Flat command buffer <-> discrete path commands.

The engine hands out a path as one flat list of numbers: a verb code followed
by that verb's operands, repeated. The operand count is not encoded; it comes
from ``COMMAND_COUNT``.

Precondition: the buffer is well formed (it was produced by the geometry
engine). A truncated buffer or an unknown verb code is undefined behavior here,
nothing is padded or dropped to hide it.
"""

from __future__ import annotations

from typing import Iterable

from pathblend.commands.verbs import FlatCommandBuffer, PathCommand, PathVerb, command_length


def to_cmds(buffer: FlatCommandBuffer) -> list[PathCommand]:
    """Split a flat buffer into per-verb commands."""
    tokens = list(buffer)
    if not tokens:
        return []

    commands: list[list[float]] = [[]]
    last = len(tokens) - 1
    required = 0

    for i, token in enumerate(tokens):
        current = commands[-1]
        if not current:
            current.append(PathVerb(int(token)))
            required = command_length(token)
        elif len(current) < required:
            current.append(token)
        # The final command stays active so no empty trailing command appears
        if len(current) == required and i != last:
            commands.append([])

    return [tuple(cmd) for cmd in commands]


def flatten_cmds(cmds: Iterable[PathCommand]) -> list[float]:
    """Concatenate commands back into a flat buffer."""
    flat: list[float] = []
    for cmd in cmds:
        flat.extend(cmd)
    return flat


def verbs_of(cmds: Iterable[PathCommand]) -> list[PathVerb]:
    return [PathVerb(int(cmd[0])) for cmd in cmds]
