"""SVG path data parsing and serialization."""

from pathblend.svg.parser import parse_path_data
from pathblend.svg.serializer import serialize_path_data, serialize_svg

__all__ = ["parse_path_data", "serialize_path_data", "serialize_svg"]
