"""Host adapter: numpy point arrays to and from core types, plus SVG previews."""

from .convert import as_point_array, to_core, from_core
from .svg import SvgLayer, make_svg_transform, render_svg, W, H
