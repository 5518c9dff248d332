"""Write SVG path data and standalone SVG documents from path commands."""

from __future__ import annotations

from typing import Any, Iterable

from pathblend.commands.verbs import PathCommand, PathVerb

_SVG_LETTERS = {
    PathVerb.MOVE: "M",
    PathVerb.LINE: "L",
    PathVerb.QUAD: "Q",
    PathVerb.CUBIC: "C",
    PathVerb.CLOSE: "Z",
}


def _fmt(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def serialize_path_data(cmds: Iterable[PathCommand]) -> str:
    """Commands -> ``d`` attribute. Conics must already be converted to quads."""
    parts: list[str] = []
    for cmd in cmds:
        verb = PathVerb(int(cmd[0]))
        if verb == PathVerb.CONIC:
            raise ValueError("Conic commands have no SVG form; convert them to quads first")
        parts.append(_SVG_LETTERS[verb] + " ".join(_fmt(v) for v in cmd[1:]))
    return " ".join(parts)


def serialize_svg(
    paths: list[dict[str, Any]],
    canvas_w: float = 24.0,
    canvas_h: float = 24.0,
    title: str = "",
    description: str = "",
) -> str:
    """Generate SVG markup with one <path> per entry. Each entry needs a ``d`` key."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {_fmt(canvas_w)} {_fmt(canvas_h)}" xmlns="http://www.w3.org/2000/svg"'
        f' role="img">',
    ]

    if title:
        lines.append(f"  <title>{title}</title>")
    if description:
        lines.append(f"  <desc>{description}</desc>")

    for entry in paths:
        attrs = {"d": entry["d"], **{k: v for k, v in entry.items() if k != "d"}}
        attr_str = " ".join(f'{k}="{v}"' for k, v in attrs.items())
        lines.append(f"  <path {attr_str} />")

    lines.append("</svg>")
    return "\n".join(lines)
