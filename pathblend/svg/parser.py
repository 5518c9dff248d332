"""SVG path data -> flat command buffer, via svgpathtools."""

from __future__ import annotations

import logging

import numpy as np
from svgpathtools import Arc, CubicBezier, Line, Path, QuadraticBezier, parse_path

from pathblend.commands.verbs import PathVerb
from pathblend.config import settings
from pathblend.outcome import Failure, FailureReason, Outcome, Success

logger = logging.getLogger(__name__)


def parse_path_data(d: str) -> Outcome[list[float]]:
    """Parse an SVG ``d`` attribute into a flat command buffer."""
    try:
        path = parse_path(d)
    except (ValueError, IndexError, TypeError) as e:
        logger.warning("Failed to parse path data: %s", e)
        return Failure(FailureReason.REJECTED, str(e))

    buffer: list[float] = []
    for subpath in path.continuous_subpaths():
        buffer.extend(_subpath_buffer(subpath))

    logger.debug("Parsed path data: %d segments -> %d tokens", len(path), len(buffer))
    return Success(buffer)


def _subpath_buffer(subpath: Path) -> list[float]:
    if not subpath:
        return []

    closed = subpath.isclosed()
    segments = list(subpath)
    # "L start Z" and "Z" parse the same; keep only the Close
    if closed and len(segments) > 1 and isinstance(segments[-1], Line):
        segments.pop()

    start = segments[0].start
    buffer: list[float] = [PathVerb.MOVE, start.real, start.imag]
    for seg in segments:
        buffer.extend(_segment_tokens(seg))
    if closed:
        buffer.append(PathVerb.CLOSE)
    return buffer


def _segment_tokens(seg: Line | QuadraticBezier | CubicBezier | Arc) -> list[float]:
    if isinstance(seg, Line):
        return [PathVerb.LINE, seg.end.real, seg.end.imag]
    if isinstance(seg, QuadraticBezier):
        return [PathVerb.QUAD, seg.control.real, seg.control.imag, seg.end.real, seg.end.imag]
    if isinstance(seg, CubicBezier):
        return [
            PathVerb.CUBIC,
            seg.control1.real,
            seg.control1.imag,
            seg.control2.real,
            seg.control2.imag,
            seg.end.real,
            seg.end.imag,
        ]
    if isinstance(seg, Arc):
        return _arc_tokens(seg)
    raise TypeError(f"Unsupported segment type: {type(seg).__name__}")


def _arc_tokens(arc: Arc) -> list[float]:
    """Approximate an elliptical arc with line segments."""
    tokens: list[float] = []
    for t in np.linspace(0, 1, settings.arc_samples + 1)[1:]:
        pt = arc.point(t)
        tokens.extend((PathVerb.LINE, pt.real, pt.imag))
    return tokens
