"""Offset a few demo shapes with different joint policies and write offset_demo.svg.

Run with -v for DEBUG output from the geometry packages.
"""
import logging
import os
import sys

import numpy as np

from geom.logging_config import setup_logging
from hostio import SvgLayer, from_core, render_svg, to_core
from offset import ParallelHandling, UTurnBehavior, offset, offset_variable
from polyline import area, is_simple

logger = logging.getLogger("hostio.demo")

# ============================================================
# Demo Shapes
# ============================================================
# L-shaped room, CCW
L_SHAPE = np.array([(0, 0), (12, 0), (12, 5), (5, 5), (5, 12), (0, 12)], dtype=float)
# Square with a zero-width spike hanging off the bottom edge
SPIKE = np.array([(16, 0), (21, 0), (21, -4), (21, 0), (26, 0), (26, 10), (16, 10)], dtype=float)
# Open hairpin path with a near 180 degree turn
HAIRPIN = np.array([(30, 0), (40, 0), (30, 0.6)], dtype=float)
# Straight open path offset by a different distance per segment
STEP = np.array([(0, -8), (8, -8), (16, -8)], dtype=float)

OFFSET_STROKES = ["#c0392b", "#2471a3", "#229954"]


def build_layers() -> list[SvgLayer]:
    layers = []
    loop = to_core(L_SHAPE, closed=True)
    layers.append(SvgLayer(loop, stroke="#000", fill="rgba(180,180,180,0.5)"))
    for d, stroke in zip((1.0, 2.0, -1.0), OFFSET_STROKES):
        res = offset(loop, d, UTurnBehavior.CHAMFER, ParallelHandling.PROPORTIONAL)
        if not res.ok:
            logger.warning("L-shape offset %g failed: %s", d, res.error)
            continue
        logger.info("L-shape offset %+g: area %.2f -> %.2f, simple=%s",
                    d, area(loop), area(res.polyline), is_simple(res.polyline))
        layers.append(SvgLayer(res.polyline, stroke=stroke))

    spike = to_core(SPIKE, closed=True)
    layers.append(SvgLayer(spike, stroke="#000", fill="rgba(180,180,180,0.5)"))
    for behavior, stroke in zip((UTurnBehavior.CHAMFER, UTurnBehavior.SKIP), OFFSET_STROKES):
        res = offset(spike, 1.0, behavior)
        if res.ok:
            layers.append(SvgLayer(res.polyline, stroke=stroke, dash="4,4"))
        else:
            logger.warning("spike offset with %s failed: %s", behavior.value, res.error)
    logger.info("spike with FAIL policy: %s", offset(spike, 1.0, UTurnBehavior.FAIL).error)

    hairpin = to_core(HAIRPIN)
    layers.append(SvgLayer(hairpin, stroke="#000"))
    for d, stroke in zip((0.5, -0.5), OFFSET_STROKES):
        res = offset(hairpin, d, UTurnBehavior.CHAMFER)
        if res.ok:
            layers.append(SvgLayer(res.polyline, stroke=stroke))

    step = to_core(STEP, keep_collinear=True)
    layers.append(SvgLayer(step, stroke="#000"))
    for handling, stroke in zip((ParallelHandling.PROPORTIONAL, ParallelHandling.PROJECT),
                                OFFSET_STROKES):
        res = offset_variable(step, [1.0, 2.0], parallel=handling)
        if res.ok:
            logger.info("step offset with %s: %s", handling.value,
                        from_core(res.polyline).round(3).tolist())
            layers.append(SvgLayer(res.polyline, stroke=stroke))
    return layers


if __name__ == "__main__":
    setup_logging(logging.DEBUG if "-v" in sys.argv[1:] else logging.INFO)
    _dir = os.path.dirname(os.path.abspath(__file__))

    svg_content = render_svg(build_layers(), title="Polyline Offsets")
    svg_path = os.path.join(_dir, "offset_demo.svg")
    with open(svg_path, "w", encoding="utf-8") as f:
        f.write(svg_content)
    print(f"Offset demo written to {svg_path}")
