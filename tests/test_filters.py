import itertools

import pytest

from cadagent.entities import BlockDefinition, BlockReferenceGeometry, Entity
from cadagent.filters import matches, select
from cadagent.geometry import Point2D
from cadagent.schema import Filter

WINDOWS = [
    (Point2D(-1, -1), Point2D(11, 1)),
    (Point2D(11, 1), Point2D(-1, -1)),
    (Point2D(15, 15), Point2D(35, 35)),
    (Point2D(25, 25), Point2D(200, 200)),
    (Point2D(0, 0), Point2D(10, 0)),
    (Point2D(500, 500), Point2D(600, 600)),
    (Point2D(96, 96), Point2D(104, 104)),
]


def test_no_filter_and_empty_filter_match_everything(space):
    for ent in space.live_entities():
        assert matches(ent, None)
        assert matches(ent, Filter())


def test_layer_is_case_insensitive(space):
    picked = select(space, Filter(layer="wire"))
    assert [e.layer for e in picked] == ["WIRE"]


def test_type_matches_kind_name(space):
    assert [e.kind.value for e in select(space, Filter(type="CIRCLE"))] == ["Circle"]
    assert len(select(space, Filter(type="polyline", layer="0"))) == 1
    assert select(space, Filter(type="Arc")) == []


def test_window_requires_full_containment(space):
    square = Filter(window=(Point2D(15, 15), Point2D(35, 35)))
    partial = Filter(window=(Point2D(25, 25), Point2D(200, 200)))
    assert [e.kind.value for e in select(space, square)] == ["Polyline"]
    assert [e.kind.value for e in select(space, partial)] == ["Circle"]


def test_window_corners_may_come_in_any_order(space):
    flt = Filter(window=(Point2D(11, 1), Point2D(-1, -1)))
    assert [e.kind.value for e in select(space, flt)] == ["Line"]


def test_crossing_selects_on_overlap(space):
    flt = Filter(crossing=(Point2D(25, 25), Point2D(200, 200)))
    assert [e.kind.value for e in select(space, flt)] == ["Polyline", "Circle"]


def test_touching_edge_counts_as_crossing(space):
    flt = Filter(crossing=(Point2D(10, -5), Point2D(15, 5)))
    assert [e.kind.value for e in select(space, flt)] == ["Line"]


def test_predicates_are_conjunctive(space):
    flt = Filter(layer="0", crossing=(Point2D(0, 0), Point2D(1000, 1000)), type="Circle")
    assert len(select(space, flt)) == 1
    flt = Filter(layer="WIRE", type="Circle")
    assert select(space, flt) == []


def test_entity_without_extents_fails_spatial_filters():
    ent = Entity(BlockReferenceGeometry("EMPTY", definition=BlockDefinition("EMPTY")))
    assert matches(ent, Filter(layer="0"))
    assert not matches(ent, Filter(crossing=(Point2D(-1e9, -1e9), Point2D(1e9, 1e9))))
    assert not matches(ent, Filter(window=(Point2D(-1e9, -1e9), Point2D(1e9, 1e9))))


def test_window_match_implies_crossing_match(space):
    for ent, corners in itertools.product(space.live_entities(), WINDOWS):
        if matches(ent, Filter(window=corners)):
            assert matches(ent, Filter(crossing=corners))


def test_erased_entities_are_not_selected(space):
    first = space.live_entities()[0]
    space.mark_deleted(first)
    assert first not in select(space, None)
    assert len(select(space, None)) == 2


@pytest.mark.parametrize("layer", ["0", "WIRE"])
def test_select_keeps_drawing_order(space, layer):
    picked = select(space, Filter(layer=layer))
    order = space.live_entities()
    assert picked == [e for e in order if e.layer == layer]
