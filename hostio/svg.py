"""SVG preview of polylines and loops, for eyeballing offset results."""
from typing import Callable, NamedTuple, Optional

from geom.tolerance import is_negligible_length
from geom.types import BBox, Coord
from polyline.model import Polyline, bounding_box

# US Letter landscape at 72 dpi (11" x 8.5")
W, H = 792, 612
MARGIN = 36.0


class SvgLayer(NamedTuple):
    polyline: Polyline
    stroke: str = "#333"
    fill: str = "none"
    stroke_width: float = 1.0
    dash: Optional[str] = None   # stroke-dasharray, e.g. "4,4"


def make_svg_transform(bbox: BBox, width: float = W, height: float = H,
                       margin: float = MARGIN) -> Callable[[float, float], Coord]:
    """Create to_svg closure fitting *bbox* into the page with y pointing up."""
    span_x = bbox.xmax - bbox.xmin; span_y = bbox.ymax - bbox.ymin
    sx = (width - 2 * margin) / span_x if not is_negligible_length(span_x) else None
    sy = (height - 2 * margin) / span_y if not is_negligible_length(span_y) else None
    scales = [v for v in (sx, sy) if v is not None]
    s = min(scales) if scales else 1.0  # a single point
    # Centre the drawing on the page
    px = width / 2 - (bbox.xmin + bbox.xmax) / 2 * s
    py = height / 2 + (bbox.ymin + bbox.ymax) / 2 * s
    def to_svg(x: float, y: float) -> Coord:
        return (px + x * s, py - y * s)
    return to_svg


def _union(boxes: list[BBox]) -> BBox:
    return BBox(min(b.xmin for b in boxes), min(b.ymin for b in boxes),
                max(b.xmax for b in boxes), max(b.ymax for b in boxes))


def _svg_shape(out: list[str], layer: SvgLayer, to_svg):
    coords = [to_svg(p.x, p.y) for p in layer.polyline.points]
    svg = " ".join(f"{x:.2f},{y:.2f}" for x, y in coords)
    tag = "polygon" if layer.polyline.closed else "polyline"
    dash = f' stroke-dasharray="{layer.dash}"' if layer.dash else ""
    out.append(f'<{tag} points="{svg}" fill="{layer.fill}" stroke="{layer.stroke}"'
               f' stroke-width="{layer.stroke_width}"{dash}/>')


def render_svg(layers: list[SvgLayer], width: float = W, height: float = H, *,
               title: Optional[str] = None, margin: float = MARGIN) -> str:
    """Render the layers, in order, into one SVG document. Returns SVG string."""
    drawn = [layer for layer in layers if layer.polyline.points]
    out = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"'
           f' viewBox="0 0 {width} {height}">',
           f'<rect x="0" y="0" width="{width}" height="{height}" fill="white"/>']
    if title:
        out.append(f'<text x="{width / 2:.1f}" y="{margin / 2 + 7:.1f}" text-anchor="middle"'
                   f' font-family="Arial" font-size="14" font-weight="bold">{title}</text>')
    if drawn:
        to_svg = make_svg_transform(_union([bounding_box(l.polyline) for l in drawn]),
                                    width, height, margin)
        for layer in drawn:
            _svg_shape(out, layer, to_svg)
    out.append('</svg>')
    return "\n".join(out)
