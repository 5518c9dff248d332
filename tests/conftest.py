"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pathblend.commands.verbs import PathVerb

M, L, Q, K, C, Z = (
    PathVerb.MOVE,
    PathVerb.LINE,
    PathVerb.QUAD,
    PathVerb.CONIC,
    PathVerb.CUBIC,
    PathVerb.CLOSE,
)

# Flat buffers in the engine's layout: verb code then operands
OPEN_LINE_BUFFER = [M, 0, 0, L, 10, 0]

TRIANGLE_BUFFER = [M, 0, 0, L, 10, 0, L, 5, 8, Z]

EVERY_VERB_BUFFER = [
    M, 0, 0,
    L, 10, 0,
    Q, 15, 0, 15, 5,
    K, 15, 12, 10, 10, 0.5,
    C, 8, 10, 2, 10, 0, 8,
    Z,
]

TWO_CONTOUR_BUFFER = [M, 0, 0, L, 4, 0, L, 4, 4, Z, M, 10, 10, L, 12, 10, L, 12, 12, Z]

GENERAL_CONIC_BUFFER = [M, 0, 0, K, 10, 0, 20, 10, 0.5]

# Skia keeps a Move that starts no segments
TRAILING_MOVE_BUFFER = [M, 0, 0, L, 4, 0, Z, M, 7, 7]

# SVG path data
SQUARE_D = "M0 0 L20 0 L20 20 L0 20 Z"
WAVE_D = "M0 10 Q5 0 10 10 C12 14 18 14 20 10"
ARC_D = "M0 0 A10 10 0 0 1 20 0"


@pytest.fixture
def strict_settings():
    """Restore mutable settings after a test changes them."""
    from pathblend.config import settings

    saved = settings.model_dump()
    yield settings
    for key, value in saved.items():
        setattr(settings, key, value)
