"""VectorPath — the caller-facing path object.

Wraps one ``pathops.Path``. Construction calls go straight to the engine and
return ``self`` for chaining. Anything the engine can refuse returns an
``Outcome`` instead of ``None``-or-self.

The command view (``to_cmds``) is recomputed from the engine path on every
call; nothing is cached.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Sequence

import numpy as np
import pathops
from numpy.typing import NDArray

from pathblend.commands.interpolate import are_cmds_interpolatable, interpolate_cmds
from pathblend.commands.segmenter import flatten_cmds, to_cmds
from pathblend.commands.verbs import CONIC_WEIGHT_INDEX, PathCommand, PathVerb
from pathblend.config import settings
from pathblend.engine.skia import path_from_buffer, path_to_buffer
from pathblend.models.path_options import FillType, PathOp, StrokeOptions
from pathblend.outcome import Failure, FailureReason, Outcome, Success
from pathblend.svg.parser import parse_path_data
from pathblend.svg.serializer import serialize_path_data
from pathblend.utils.geometry import as_matrix, bbox, transform_points

logger = logging.getLogger(__name__)

Rect = tuple[float, float, float, float]  # (left, top, right, bottom)

# Conic weight of a quarter ellipse
_QUARTER_WEIGHT = math.sqrt(2) / 2

# Below this the turn at an arc_to_tangent corner counts as a straight line
_NEARLY_ZERO = 1.0 / (1 << 12)

# pathops.ArcSize / pathops.Direction values
_SMALL_ARC, _LARGE_ARC = 0, 1
_CW, _CCW = 0, 1


def _cmd_points(cmd: PathCommand) -> list[tuple[float, float]]:
    """Points carried by one command (conic weight excluded)."""
    coords = cmd[1:CONIC_WEIGHT_INDEX] if cmd[0] == PathVerb.CONIC else cmd[1:]
    return [(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)]


def _map_cmd(cmd: PathCommand, fn: Callable[[NDArray[np.float64]], NDArray[np.float64]]) -> PathCommand:
    pts = _cmd_points(cmd)
    if not pts:
        return cmd
    mapped = fn(np.array(pts, dtype=np.float64)).ravel().tolist()
    if cmd[0] == PathVerb.CONIC:
        return (cmd[0], *mapped, cmd[CONIC_WEIGHT_INDEX])
    return (cmd[0], *mapped)


def _unit(dx: float, dy: float) -> tuple[float, float] | None:
    length = math.hypot(dx, dy)
    if length == 0 or not math.isfinite(length):
        return None
    return dx / length, dy / length


class VectorPath:
    def __init__(self, ref: pathops.Path | None = None) -> None:
        self.ref = ref if ref is not None else pathops.Path()

    # ------------------------------------------------------------------
    # Buffer boundary
    # ------------------------------------------------------------------

    @classmethod
    def from_buffer(cls, buffer: Sequence[float], fill_type: FillType | None = None) -> Outcome[VectorPath]:
        ref = path_from_buffer(buffer, fill_type.to_engine() if fill_type is not None else None)
        if ref is None:
            return Failure(FailureReason.REJECTED, "engine rejected command buffer")
        return Success(cls(ref))

    @classmethod
    def from_cmds(cls, cmds: Iterable[PathCommand], fill_type: FillType | None = None) -> Outcome[VectorPath]:
        return cls.from_buffer(flatten_cmds(cmds), fill_type)

    @classmethod
    def from_svg_string(cls, d: str) -> Outcome[VectorPath]:
        parsed = parse_path_data(d)
        if not parsed.ok:
            return parsed
        return cls.from_buffer(parsed.value)

    def to_buffer(self) -> list[float]:
        return path_to_buffer(self.ref)

    def to_cmds(self) -> list[PathCommand]:
        return to_cmds(self.to_buffer())

    def _replace_cmds(self, cmds: Iterable[PathCommand]) -> Outcome[VectorPath]:
        """Swap the engine path for one built from ``cmds``, keeping the fill type.

        On rejection the receiver is left as it was.
        """
        rebuilt = VectorPath.from_cmds(cmds, self.fill_type)
        if not rebuilt.ok:
            return rebuilt
        self.ref = rebuilt.value.ref
        return Success(self)

    # ------------------------------------------------------------------
    # Construction (pass-through)
    # ------------------------------------------------------------------

    def move_to(self, x: float, y: float) -> VectorPath:
        self.ref.moveTo(x, y)
        return self

    def line_to(self, x: float, y: float) -> VectorPath:
        self.ref.lineTo(x, y)
        return self

    def quad_to(self, x1: float, y1: float, x2: float, y2: float) -> VectorPath:
        self.ref.quadTo(x1, y1, x2, y2)
        return self

    def conic_to(self, x1: float, y1: float, x2: float, y2: float, w: float) -> VectorPath:
        # Path.conicTo in pathops 0.9 drops y1; Path.add keeps both control coordinates
        self.ref.add(pathops.PathVerb.CONIC, (x1, y1), (x2, y2), w)
        return self

    def cubic_to(self, cpx1: float, cpy1: float, cpx2: float, cpy2: float, x: float, y: float) -> VectorPath:
        self.ref.cubicTo(cpx1, cpy1, cpx2, cpy2, x, y)
        return self

    def close(self) -> VectorPath:
        self.ref.close()
        return self

    def _current_point(self) -> tuple[float, float]:
        """Pen position: end of the last command, or the contour start after a Close."""
        start = last = (0.0, 0.0)
        for cmd in self.to_cmds():
            if cmd[0] == PathVerb.CLOSE:
                last = start
                continue
            last = _cmd_points(cmd)[-1]
            if cmd[0] == PathVerb.MOVE:
                start = last
        return last

    def r_move_to(self, dx: float, dy: float) -> VectorPath:
        x, y = self._current_point()
        return self.move_to(x + dx, y + dy)

    def r_line_to(self, dx: float, dy: float) -> VectorPath:
        x, y = self._current_point()
        return self.line_to(x + dx, y + dy)

    def r_quad_to(self, dx1: float, dy1: float, dx2: float, dy2: float) -> VectorPath:
        x, y = self._current_point()
        return self.quad_to(x + dx1, y + dy1, x + dx2, y + dy2)

    def r_conic_to(self, dx1: float, dy1: float, dx2: float, dy2: float, w: float) -> VectorPath:
        x, y = self._current_point()
        return self.conic_to(x + dx1, y + dy1, x + dx2, y + dy2, w)

    def r_cubic_to(
        self, dx1: float, dy1: float, dx2: float, dy2: float, dx: float, dy: float
    ) -> VectorPath:
        x, y = self._current_point()
        return self.cubic_to(x + dx1, y + dy1, x + dx2, y + dy2, x + dx, y + dy)

    def arc_to_rotated(
        self,
        rx: float,
        ry: float,
        x_axis_rotate: float,
        use_small_arc: bool,
        is_ccw: bool,
        x: float,
        y: float,
    ) -> VectorPath:
        """SVG-style elliptical arc to (x, y). ``x_axis_rotate`` is in degrees."""
        self.ref.arcTo(
            rx,
            ry,
            x_axis_rotate,
            pathops.ArcSize(_SMALL_ARC if use_small_arc else _LARGE_ARC),
            pathops.Direction(_CCW if is_ccw else _CW),
            x,
            y,
        )
        return self

    def r_arc_to(
        self,
        rx: float,
        ry: float,
        x_axis_rotate: float,
        use_small_arc: bool,
        is_ccw: bool,
        dx: float,
        dy: float,
    ) -> VectorPath:
        x, y = self._current_point()
        return self.arc_to_rotated(rx, ry, x_axis_rotate, use_small_arc, is_ccw, x + dx, y + dy)

    def arc_to_oval(self, oval: Rect, start_angle: float, sweep_angle: float, force_move_to: bool) -> VectorPath:
        """Append part of the ellipse inscribed in ``oval``.

        Angles are in degrees, measured clockwise from the positive x axis
        (y points down). The arc is joined to the current contour with a line
        unless ``force_move_to`` is set or the path is empty. It is emitted as
        conics spanning at most a quarter turn each.
        """
        left, top, right, bottom = oval
        cx, cy = (left + right) / 2, (top + bottom) / 2
        rx, ry = (right - left) / 2, (bottom - top) / 2

        def _on_oval(theta: float, scale: float = 1.0) -> tuple[float, float]:
            return cx + rx * scale * math.cos(theta), cy + ry * scale * math.sin(theta)

        start = math.radians(start_angle)
        sweep = math.radians(sweep_angle)
        first = _on_oval(start)
        if force_move_to or self.is_empty():
            self.move_to(*first)
        elif self._current_point() != first:
            self.line_to(*first)
        if sweep == 0:
            return self

        count = max(1, math.ceil(abs(sweep) / (math.pi / 2) - 1e-9))
        step = sweep / count
        weight = math.cos(step / 2)
        for k in range(count):
            theta = start + k * step
            self.conic_to(*_on_oval(theta + step / 2, 1 / weight), *_on_oval(theta + step), weight)
        return self

    def arc_to_tangent(self, x1: float, y1: float, x2: float, y2: float, radius: float) -> VectorPath:
        """Round the corner at (x1, y1) between the pen and (x2, y2) with a circular arc."""
        x0, y0 = self._current_point()
        before = _unit(x1 - x0, y1 - y0)
        after = _unit(x2 - x1, y2 - y1)
        if radius == 0 or before is None or after is None:
            return self.line_to(x1, y1)

        cosh = before[0] * after[0] + before[1] * after[1]
        sinh = before[0] * after[1] - before[1] * after[0]
        if abs(sinh) <= _NEARLY_ZERO:
            return self.line_to(x1, y1)

        dist = abs(radius * (1 - cosh) / sinh)
        self.line_to(x1 - dist * before[0], y1 - dist * before[1])
        return self.conic_to(x1, y1, x1 + dist * after[0], y1 + dist * after[1], math.sqrt(0.5 + cosh * 0.5))

    def add_poly(self, points: Sequence[tuple[float, float]], close: bool) -> VectorPath:
        if not points:
            return self
        self.move_to(*points[0])
        for pt in points[1:]:
            self.line_to(*pt)
        if close:
            self.close()
        return self

    def add_rect(self, rect: Rect, ccw: bool = False) -> VectorPath:
        left, top, right, bottom = rect
        if ccw:
            corners = [(left, top), (left, bottom), (right, bottom), (right, top)]
        else:
            corners = [(left, top), (right, top), (right, bottom), (left, bottom)]
        return self.add_poly(corners, close=True)

    def add_oval(self, rect: Rect, ccw: bool = False) -> VectorPath:
        """Four conic quarter arcs starting at the right-middle point."""
        left, top, right, bottom = rect
        cx, cy = (left + right) / 2, (top + bottom) / 2
        if ccw:
            quarters = [((right, top), (cx, top)), ((left, top), (left, cy)),
                        ((left, bottom), (cx, bottom)), ((right, bottom), (right, cy))]
        else:
            quarters = [((right, bottom), (cx, bottom)), ((left, bottom), (left, cy)),
                        ((left, top), (cx, top)), ((right, top), (right, cy))]
        self.move_to(right, cy)
        for (x1, y1), (x2, y2) in quarters:
            self.conic_to(x1, y1, x2, y2, _QUARTER_WEIGHT)
        return self.close()

    def add_circle(self, x: float, y: float, r: float) -> VectorPath:
        return self.add_oval((x - r, y - r, x + r, y + r))

    def add_arc(self, oval: Rect, start_angle: float, sweep_angle: float) -> VectorPath:
        """Start a new contour with an arc of the oval. A full turn adds the whole oval."""
        if abs(sweep_angle) >= 360:
            return self.add_oval(oval, ccw=sweep_angle < 0)
        return self.arc_to_oval(oval, start_angle, sweep_angle, True)

    def add_rrect(self, rect: Rect, rx: float, ry: float, ccw: bool = False) -> VectorPath:
        """Rounded rectangle starting on the top edge. Radii are clamped to half the size."""
        left, top, right, bottom = rect
        rx = min(max(rx, 0.0), (right - left) / 2)
        ry = min(max(ry, 0.0), (bottom - top) / 2)
        if rx == 0 or ry == 0:
            return self.add_rect(rect, ccw)
        if rx * 2 == right - left and ry * 2 == bottom - top:
            return self.add_oval(rect, ccw)

        # (line end, corner, arc end) per side
        if ccw:
            self.move_to(right - rx, top)
            sides = [
                ((left + rx, top), (left, top), (left, top + ry)),
                ((left, bottom - ry), (left, bottom), (left + rx, bottom)),
                ((right - rx, bottom), (right, bottom), (right, bottom - ry)),
                ((right, top + ry), (right, top), (right - rx, top)),
            ]
        else:
            self.move_to(left + rx, top)
            sides = [
                ((right - rx, top), (right, top), (right, top + ry)),
                ((right, bottom - ry), (right, bottom), (right - rx, bottom)),
                ((left + rx, bottom), (left, bottom), (left, bottom - ry)),
                ((left, top + ry), (left, top), (left + rx, top)),
            ]
        for line_end, corner, arc_end in sides:
            self.line_to(*line_end)
            self.conic_to(*corner, *arc_end, _QUARTER_WEIGHT)
        return self.close()

    def reset(self) -> VectorPath:
        """Empty the path. The engine also restores the default fill type."""
        self.ref.reset()
        return self

    rewind = reset

    def offset(self, dx: float, dy: float) -> Outcome[VectorPath]:
        shift = np.array([dx, dy], dtype=np.float64)
        return self._replace_cmds(_map_cmd(cmd, lambda pts: pts + shift) for cmd in self.to_cmds())

    def transform(self, matrix: Sequence[float] | Sequence[Sequence[float]]) -> Outcome[VectorPath]:
        """Map every point through a 3x3 row-major matrix. Conic weights are kept."""
        m = as_matrix(matrix)
        return self._replace_cmds(_map_cmd(cmd, lambda pts: transform_points(pts, m)) for cmd in self.to_cmds())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def fill_type(self) -> FillType:
        return FillType.from_engine(self.ref.fillType)

    @fill_type.setter
    def fill_type(self, fill: FillType) -> None:
        self.ref.fillType = FillType(fill).to_engine()

    def points(self) -> list[tuple[float, float]]:
        pts: list[tuple[float, float]] = []
        for cmd in self.to_cmds():
            pts.extend(_cmd_points(cmd))
        return pts

    def count_points(self) -> int:
        return len(self.points())

    def get_point(self, index: int) -> tuple[float, float]:
        return self.points()[index]

    def get_last_point(self) -> tuple[float, float]:
        pts = self.points()
        return pts[-1] if pts else (0.0, 0.0)

    def is_empty(self) -> bool:
        return not self.to_buffer()

    def get_bounds(self) -> Rect:
        """Bounds of all points, control points included."""
        return bbox(np.array(self.points(), dtype=np.float64).reshape(-1, 2))

    def compute_tight_bounds(self) -> Rect:
        """Bounds of the curves themselves, from the engine."""
        if self.is_empty():
            return (0.0, 0.0, 0.0, 0.0)
        return tuple(float(v) for v in self.ref.bounds)

    def copy(self) -> VectorPath:
        # identity transform hands back an independent engine path
        clone = self.ref.transform()
        clone.fillType = self.ref.fillType
        return VectorPath(clone)

    def _without_conics(self) -> list[PathCommand]:
        cmds = self.to_cmds()
        if not any(cmd[0] == PathVerb.CONIC for cmd in cmds):
            return cmds
        quads = self.copy()
        quads.ref.convertConicsToQuads(settings.conic_tolerance)
        return quads.to_cmds()

    def contains(self, x: float, y: float) -> bool:
        """Point-in-path test by the engine, honoring the fill type (inverse fills included)."""
        return bool(self.ref.contains((x, y)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorPath):
            return NotImplemented
        return self.fill_type == other.fill_type and self.to_cmds() == other.to_cmds()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"VectorPath({len(self.to_cmds())} commands, {self.fill_type.value})"

    # ------------------------------------------------------------------
    # Engine operations
    # ------------------------------------------------------------------

    def _engine_call(self, name: str, fn: Callable[[], pathops.Path]) -> Outcome[VectorPath]:
        try:
            result = fn()
        except pathops.PathOpsError as e:
            logger.warning("%s failed: %s", name, e)
            return Failure(FailureReason.REJECTED, f"{name}: {e}")
        self.ref = result
        return Success(self)

    def op(self, other: VectorPath, operation: PathOp) -> Outcome[VectorPath]:
        """Boolean-combine ``other`` into this path."""
        return self._engine_call(
            "op", lambda: pathops.op(self.ref, other.ref, PathOp(operation).to_engine())
        )

    def simplify(self) -> Outcome[VectorPath]:
        return self._engine_call("simplify", lambda: pathops.simplify(self.ref))

    def make_as_winding(self) -> Outcome[VectorPath]:
        """Rewrite the contours so the nonzero-winding fill covers the same area."""
        fill = self.fill_type
        if not fill.is_even_odd:
            return Success(self)

        def _as_winding() -> pathops.Path:
            result = pathops.simplify(self.ref, fix_winding=True)
            target = FillType.INVERSE_WINDING if fill.is_inverse else FillType.WINDING
            result.fillType = target.to_engine()
            return result

        return self._engine_call("make_as_winding", _as_winding)

    def stroke(self, opts: StrokeOptions | None = None) -> Outcome[VectorPath]:
        """Replace this path with the outline of its stroke."""
        opts = opts or StrokeOptions()

        def _stroked() -> pathops.Path:
            outline = self.copy().ref
            outline.stroke(
                opts.width,
                opts.cap.to_engine(),
                opts.join.to_engine(),
                opts.miter_limit,
                opts.dash_array,
                opts.dash_offset,
            )
            return outline

        return self._engine_call("stroke", _stroked)

    def is_interpolatable(self, other: VectorPath) -> bool:
        return are_cmds_interpolatable(self.to_cmds(), other.to_cmds())

    def interpolate(self, end: VectorPath, t: float) -> Outcome[VectorPath]:
        """Blend toward this path from ``end``: t=0 gives ``end``, t=1 gives ``self``."""
        blended = interpolate_cmds(self.to_cmds(), end.to_cmds(), t)
        if not blended.ok:
            return blended
        return VectorPath.from_cmds(blended.value, self.fill_type)

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def to_svg_string(self) -> str:
        return serialize_path_data(self._without_conics())
