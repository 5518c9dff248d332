"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def as_matrix(matrix: Sequence[float] | Sequence[Sequence[float]]) -> NDArray[np.float64]:
    """Accept a flat 9-element or nested 3x3 row-major matrix."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape == (9,):
        m = m.reshape(3, 3)
    if m.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {m.shape}")
    return m


def transform_points(points: NDArray[np.float64], matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply a 3x3 row-major matrix to Nx2 points with perspective divide."""
    if len(points) == 0:
        return points
    homogeneous = np.hstack([points, np.ones((len(points), 1))])
    mapped = homogeneous @ matrix.T
    return mapped[:, :2] / mapped[:, 2:3]
