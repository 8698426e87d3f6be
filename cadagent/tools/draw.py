from __future__ import annotations
from typing import Any, Dict, Iterable

from ..entities import CircleGeometry, Entity, LineGeometry, PolylineGeometry
from ..geometry import Point2D, polygon_vertices, rectangle_vertices
from ..schema import CircleAction, LineAction, PolygonAction, PolylineAction, RectangleAction
from ..space import Space

# =====================================================
# BASIC SHAPES
# =====================================================

def _add(space: Space, geometry, layer: str) -> Dict[str, Any]:
    space.ensure_layer(layer)
    space.append(Entity(geometry=geometry, layer=layer))
    return {"ok": True, "created": 1}

def _closed_polyline(vertices: Iterable[Point2D]) -> PolylineGeometry:
    return PolylineGeometry(vertices=list(vertices), closed=True)

def create_line(action: LineAction, space: Space) -> Dict[str, Any]:
    return _add(space, LineGeometry(action.start, action.end), action.layer)

def create_polyline(action: PolylineAction, space: Space) -> Dict[str, Any]:
    geometry = PolylineGeometry(vertices=list(action.points), closed=action.closed)
    return _add(space, geometry, action.layer)

def create_rectangle(action: RectangleAction, space: Space) -> Dict[str, Any]:
    """Closed 4-vertex polyline, corners rotated about the base point."""
    pts = rectangle_vertices(action.base, action.width, action.height, action.rotation)
    return _add(space, _closed_polyline(pts), action.layer)

def create_circle(action: CircleAction, space: Space) -> Dict[str, Any]:
    return _add(space, CircleGeometry(action.center, action.radius), action.layer)

def create_polygon(action: PolygonAction, space: Space) -> Dict[str, Any]:
    pts = polygon_vertices(action.center, action.radius, action.sides, action.rotation)
    return _add(space, _closed_polyline(pts), action.layer)
