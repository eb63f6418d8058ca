"""
Edge routing geometry.

Connectors are drawn along the line joining two node centers. Each end
attaches where that line leaves its node's rectangle, and the side of the
rectangle it leaves through decides the connector's handle orientation.
"""

import math
from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Geometry:
    """Absolute top-left corner plus size of a laid-out node."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class RouterResult:
    source_point: Point
    source_side: Side
    target_point: Point
    target_side: Side


def _round(value: float) -> int:
    # Half-up rounding; round() would send 0.5 to the even neighbour.
    return math.floor(value + 0.5)


def node_intersection(node: Geometry, other: Geometry) -> Point:
    """
    Point where the line from ``node``'s center to ``other``'s center
    crosses ``node``'s boundary.

    The direction is rotated into a frame where the rectangle becomes a
    unit diamond, so ``1 / (|u| + |v|)`` scales it exactly onto the edge.
    Coincident centers and zero-sized rectangles return the center itself.
    """
    w = node.width / 2
    h = node.height / 2
    center = node.center
    target = other.center

    if w == 0 or h == 0:
        return center

    dx = (target.x - center.x) / (2 * w)
    dy = (target.y - center.y) / (2 * h)
    u = dx - dy
    v = dx + dy

    norm = abs(u) + abs(v)
    if norm == 0 or not math.isfinite(norm):
        return center

    a = 1 / norm
    au = a * u
    av = a * v
    x = w * (au + av) + center.x
    y = h * (-au + av) + center.y
    if not (math.isfinite(x) and math.isfinite(y)):
        return center
    return Point(x, y)


def edge_side(node: Geometry, point: Point) -> Side:
    """
    Side of ``node`` that ``point`` lies on, tested left, right, top,
    bottom in that order with one unit of slack. Falls back to top, which
    is also the answer for zero-sized rectangles.
    """
    values = (node.x, node.y, node.width, node.height, point.x, point.y)
    if not all(math.isfinite(v) for v in values):
        return Side.TOP
    if node.width <= 0 or node.height <= 0:
        return Side.TOP

    nx = _round(node.x)
    ny = _round(node.y)
    px = _round(point.x)
    py = _round(point.y)

    if px <= nx + 1:
        return Side.LEFT
    if px >= nx + node.width - 1:
        return Side.RIGHT
    if py <= ny + 1:
        return Side.TOP
    if py >= ny + node.height - 1:
        return Side.BOTTOM
    return Side.TOP


def route(source: Geometry, target: Geometry) -> RouterResult:
    source_point = node_intersection(source, target)
    target_point = node_intersection(target, source)

    return RouterResult(
        source_point=source_point,
        source_side=edge_side(source, source_point),
        target_point=target_point,
        target_side=edge_side(target, target_point),
    )
