"""Drawing objects held by a Space.

Every geometry class owns its coordinates and knows how to push them through a
point transform (``transform``) and how to report its extents (``bounding_box``).
The kernel in ``geometry.py`` only composes point functions and hands them over.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .geometry import ORIGIN, BoundingBox, Point2D, rotate_point, scale_point

PointFn = Callable[[Point2D], Point2D]


class EntityKind(str, Enum):
    LINE = "Line"
    POLYLINE = "Polyline"
    CIRCLE = "Circle"
    BLOCK_REFERENCE = "BlockReference"

# =====================================================
# GEOMETRY
# =====================================================

@dataclass
class LineGeometry:
    start: Point2D
    end: Point2D
    kind = EntityKind.LINE

    def bounding_box(self) -> Optional[BoundingBox]:
        return BoundingBox.from_points([self.start, self.end])

    def transform(self, fn: PointFn, rotation: float = 0.0, factor: float = 1.0) -> None:
        self.start = fn(self.start)
        self.end = fn(self.end)


@dataclass
class PolylineGeometry:
    vertices: List[Point2D] = field(default_factory=list)
    closed: bool = False
    kind = EntityKind.POLYLINE

    def bounding_box(self) -> Optional[BoundingBox]:
        return BoundingBox.from_points(self.vertices)

    def transform(self, fn: PointFn, rotation: float = 0.0, factor: float = 1.0) -> None:
        self.vertices = [fn(p) for p in self.vertices]


@dataclass
class CircleGeometry:
    center: Point2D
    radius: float
    kind = EntityKind.CIRCLE

    def bounding_box(self) -> Optional[BoundingBox]:
        cx, cy = self.center
        r = abs(self.radius)
        return BoundingBox(Point2D(cx - r, cy - r), Point2D(cx + r, cy + r))

    def transform(self, fn: PointFn, rotation: float = 0.0, factor: float = 1.0) -> None:
        self.center = fn(self.center)
        self.radius = self.radius * abs(factor)

# =====================================================
# BLOCKS
# =====================================================

@dataclass(frozen=True)
class AttributeDefinition:
    tag: str
    default: str = ""
    position: Point2D = ORIGIN
    prompt: str = ""
    constant: bool = False


@dataclass
class AttributeReference:
    tag: str
    value: str
    position: Point2D = ORIGIN


@dataclass
class BlockDefinition:
    """Read-only symbol definition, owned by the host drawing."""
    name: str
    base_point: Point2D = ORIGIN
    geometry: List[object] = field(default_factory=list)
    attributes: List[AttributeDefinition] = field(default_factory=list)

    @property
    def has_attribute_definitions(self) -> bool:
        return bool(self.attributes)


@dataclass
class BlockReferenceGeometry:
    name: str
    insertion: Point2D = ORIGIN
    scale: float = 1.0
    rotation: float = 0.0
    attributes: List[AttributeReference] = field(default_factory=list)
    definition: Optional[BlockDefinition] = field(default=None, repr=False, compare=False)
    kind = EntityKind.BLOCK_REFERENCE

    def block_transform(self) -> PointFn:
        """Maps definition coordinates into drawing coordinates."""
        base = self.definition.base_point if self.definition is not None else ORIGIN

        def fn(p: Point2D) -> Point2D:
            local = Point2D(p[0] - base[0], p[1] - base[1])
            local = rotate_point(scale_point(local, ORIGIN, self.scale), ORIGIN, self.rotation)
            return Point2D(local[0] + self.insertion[0], local[1] + self.insertion[1])

        return fn

    def bounding_box(self) -> Optional[BoundingBox]:
        if self.definition is None or not self.definition.geometry:
            return None
        fn = self.block_transform()
        box = None
        for item in self.definition.geometry:
            placed = copy.deepcopy(item)
            placed.transform(fn, rotation=self.rotation, factor=self.scale)
            item_box = placed.bounding_box()
            if item_box is None:
                continue
            box = item_box if box is None else box.union(item_box)
        return box

    def transform(self, fn: PointFn, rotation: float = 0.0, factor: float = 1.0) -> None:
        self.insertion = fn(self.insertion)
        self.rotation += rotation
        self.scale *= factor
        for att in self.attributes:
            att.position = fn(att.position)

# =====================================================
# ENTITY
# =====================================================

@dataclass(eq=False)
class Entity:
    geometry: object
    layer: str = "0"
    color_index: Optional[int] = None
    linetype: Optional[str] = None
    linetype_scale: Optional[float] = None
    deleted: bool = False

    @property
    def kind(self) -> EntityKind:
        return self.geometry.kind

    def describe(self) -> str:
        extras = []
        if self.color_index is not None:
            extras.append(f"color={self.color_index}")
        if self.linetype:
            extras.append(f"linetype={self.linetype}")
        if self.linetype_scale is not None:
            extras.append(f"ltscale={self.linetype_scale:g}")
        tail = (" " + " ".join(extras)) if extras else ""
        return f"{self.kind.value} on '{self.layer}'{tail}"


@dataclass
class Layer:
    name: str
    color_index: int = 7
    linetype: str = "Continuous"
    is_off: bool = False
    is_frozen: bool = False
    is_plottable: bool = True
