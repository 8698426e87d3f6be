import math

import pytest

from cadagent.entities import (
    BlockDefinition, BlockReferenceGeometry, CircleGeometry, Entity, LineGeometry, PolylineGeometry,
)
from cadagent.geometry import (
    BoundingBox, Point2D, bounding_box_of, dist, polygon_vertices, rectangle_vertices,
    rotate_entity, rotate_point, scale_entity, translate,
)
from conftest import motor_block

ANGLES = [0.0, 0.3, math.pi / 2, math.pi, -2.1, 7.5]


@pytest.mark.parametrize("angle", ANGLES)
def test_rotate_point_preserves_distance_and_round_trips(angle):
    center = Point2D(3.0, -4.0)
    p = Point2D(10.0, 2.5)
    q = rotate_point(p, center, angle)
    assert dist(q, center) == pytest.approx(dist(p, center))
    back = rotate_point(q, center, -angle)
    assert back.x == pytest.approx(p.x)
    assert back.y == pytest.approx(p.y)


def test_rotate_point_is_counter_clockwise():
    q = rotate_point(Point2D(1, 0), Point2D(0, 0), math.pi / 2)
    assert q.x == pytest.approx(0.0, abs=1e-12)
    assert q.y == pytest.approx(1.0)


@pytest.mark.parametrize("base,w,h", [((0, 0), 100, 50), ((-5, 7.5), 0.25, 3), ((1e3, -1e3), 12, 12)])
def test_unrotated_rectangle_box_is_base_plus_size(base, w, h):
    pts = rectangle_vertices(Point2D(*base), w, h, 0.0)
    assert len(pts) == 4
    box = BoundingBox.from_points(pts)
    assert box.min == Point2D(base[0], base[1])
    assert box.max.x == pytest.approx(base[0] + w)
    assert box.max.y == pytest.approx(base[1] + h)


def test_rotated_rectangle_keeps_base_corner():
    pts = rectangle_vertices(Point2D(5, 5), 10, 4, math.pi / 2)
    assert pts[0] == Point2D(5, 5)
    assert pts[1].x == pytest.approx(5.0)
    assert pts[1].y == pytest.approx(15.0)


@pytest.mark.parametrize("sides", [3, 4, 6, 17])
def test_polygon_vertices_lie_on_circle(sides):
    center = Point2D(2.0, -1.0)
    pts = polygon_vertices(center, 7.0, sides, 0.4)
    assert len(pts) == sides
    for p in pts:
        assert dist(p, center) == pytest.approx(7.0)


def test_circle_box_is_center_plus_minus_radius():
    ent = Entity(CircleGeometry(Point2D(10, 20), 5))
    assert bounding_box_of(ent) == BoundingBox(Point2D(5, 15), Point2D(15, 25))


def test_empty_polyline_has_no_box():
    assert bounding_box_of(Entity(PolylineGeometry([]))) is None


def test_box_contains_and_overlaps():
    window = BoundingBox(Point2D(0, 0), Point2D(10, 10))
    inside = BoundingBox(Point2D(1, 1), Point2D(10, 10))
    crossing = BoundingBox(Point2D(5, 5), Point2D(20, 20))
    apart = BoundingBox(Point2D(11, 0), Point2D(12, 1))
    assert window.contains(inside) and window.overlaps(inside)
    assert not window.contains(crossing) and window.overlaps(crossing)
    assert not window.overlaps(apart)


def test_from_corners_normalizes():
    box = BoundingBox.from_corners(Point2D(10, -2), Point2D(-3, 8))
    assert box == BoundingBox(Point2D(-3, -2), Point2D(10, 8))


def test_translate_line():
    ent = Entity(LineGeometry(Point2D(0, 0), Point2D(10, 0)))
    translate(ent, 5, -1)
    assert ent.geometry.start == Point2D(5, -1)
    assert ent.geometry.end == Point2D(15, -1)


def test_scale_circle_scales_center_and_radius():
    ent = Entity(CircleGeometry(Point2D(10, 0), 2))
    scale_entity(ent, Point2D(0, 0), 3)
    assert ent.geometry.center == Point2D(30, 0)
    assert ent.geometry.radius == 6


def test_rotate_polyline_about_pivot():
    ent = Entity(PolylineGeometry([Point2D(1, 0), Point2D(2, 0)]))
    rotate_entity(ent, Point2D(0, 0), math.pi)
    assert ent.geometry.vertices[1].x == pytest.approx(-2.0)
    assert ent.geometry.vertices[1].y == pytest.approx(0.0, abs=1e-12)


def test_block_reference_box_follows_insertion_and_scale():
    geom = BlockReferenceGeometry("MOTOR", insertion=Point2D(50, 50), scale=2.0, definition=motor_block())
    box = bounding_box_of(Entity(geom))
    assert box.min.x == pytest.approx(30)
    assert box.max.y == pytest.approx(70)


def test_block_reference_transform_updates_rotation_and_scale():
    geom = BlockReferenceGeometry("MOTOR", insertion=Point2D(10, 0), definition=motor_block())
    ent = Entity(geom)
    rotate_entity(ent, Point2D(0, 0), math.pi / 2)
    scale_entity(ent, Point2D(0, 0), 0.5)
    assert geom.rotation == pytest.approx(math.pi / 2)
    assert geom.scale == pytest.approx(0.5)
    assert geom.insertion.y == pytest.approx(5.0)


def test_block_without_geometry_has_no_box():
    geom = BlockReferenceGeometry("EMPTY", definition=BlockDefinition("EMPTY"))
    assert bounding_box_of(Entity(geom)) is None
