from __future__ import annotations
from typing import Iterable, List, NamedTuple, Optional
import math

# =====================================================
# TYPES
# =====================================================

class Point2D(NamedTuple):
    x: float
    y: float


ORIGIN = Point2D(0.0, 0.0)


class BoundingBox(NamedTuple):
    """Axis-aligned box. Always built through from_points/from_corners so min <= max."""
    min: Point2D
    max: Point2D

    @classmethod
    def from_points(cls, points: Iterable[Point2D]) -> Optional["BoundingBox"]:
        pts = list(points)
        if not pts:
            return None
        xs = [p[0] for p in pts]; ys = [p[1] for p in pts]
        return cls(Point2D(min(xs), min(ys)), Point2D(max(xs), max(ys)))

    @classmethod
    def from_corners(cls, a: Point2D, b: Point2D) -> "BoundingBox":
        return cls(
            Point2D(min(a[0], b[0]), min(a[1], b[1])),
            Point2D(max(a[0], b[0]), max(a[1], b[1])),
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox.from_points([self.min, self.max, other.min, other.max])

    def contains(self, box: "BoundingBox") -> bool:
        """box lies fully inside self (edges included)."""
        return (box.min.x >= self.min.x and box.max.x <= self.max.x and
                box.min.y >= self.min.y and box.max.y <= self.max.y)

    def overlaps(self, box: "BoundingBox") -> bool:
        separated = (box.max.x < self.min.x or box.min.x > self.max.x or
                     box.max.y < self.min.y or box.min.y > self.max.y)
        return not separated

    def translated(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(translate_point(self.min, dx, dy), translate_point(self.max, dx, dy))

# =====================================================
# POINT MATH
# =====================================================

def dist(p: Point2D, q: Point2D) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])

def translate_point(p: Point2D, dx: float, dy: float) -> Point2D:
    return Point2D(p[0] + dx, p[1] + dy)

def rotate_point(p: Point2D, center: Point2D, angle_rad: float) -> Point2D:
    """Rotate p about center, counter-clockwise for positive angles."""
    cos = math.cos(angle_rad)
    sin = math.sin(angle_rad)
    dx = p[0] - center[0]
    dy = p[1] - center[1]
    return Point2D(center[0] + dx * cos - dy * sin,
                   center[1] + dx * sin + dy * cos)

def scale_point(p: Point2D, center: Point2D, factor: float) -> Point2D:
    return Point2D(center[0] + (p[0] - center[0]) * factor,
                   center[1] + (p[1] - center[1]) * factor)

# =====================================================
# SHAPE CONSTRUCTION
# =====================================================

def rectangle_vertices(base: Point2D, width: float, height: float,
                       rotation_rad: float = 0.0) -> List[Point2D]:
    corners = [
        Point2D(base[0], base[1]),
        Point2D(base[0] + width, base[1]),
        Point2D(base[0] + width, base[1] + height),
        Point2D(base[0], base[1] + height),
    ]
    if rotation_rad == 0.0:
        return corners
    return [rotate_point(p, base, rotation_rad) for p in corners]

def polygon_vertices(center: Point2D, radius: float, sides: int,
                     rotation_rad: float = 0.0) -> List[Point2D]:
    """Vertices of a regular polygon inscribed in the circle (center, radius)."""
    pts = []
    for i in range(sides):
        angle = 2 * math.pi * i / sides + rotation_rad
        pts.append(Point2D(center[0] + radius * math.cos(angle),
                           center[1] + radius * math.sin(angle)))
    return pts

# =====================================================
# ENTITY TRANSFORMS (in place)
# =====================================================

def bounding_box_of(entity) -> Optional[BoundingBox]:
    """Extents of an entity's geometry, or None when they can't be computed."""
    geometry = getattr(entity, "geometry", None)
    if geometry is None:
        return None
    return geometry.bounding_box()

def translate(entity, dx: float, dy: float) -> None:
    entity.geometry.transform(lambda p: translate_point(p, dx, dy))

def rotate_entity(entity, center: Point2D, angle_rad: float) -> None:
    entity.geometry.transform(lambda p: rotate_point(p, center, angle_rad),
                              rotation=angle_rad)

def scale_entity(entity, center: Point2D, factor: float) -> None:
    entity.geometry.transform(lambda p: scale_point(p, center, factor),
                              factor=factor)
