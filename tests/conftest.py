import pytest

from cadagent.entities import (
    AttributeDefinition, BlockDefinition, CircleGeometry, Entity, Layer, LineGeometry,
    PolylineGeometry,
)
from cadagent.geometry import Point2D
from cadagent.space import Space


def motor_block():
    return BlockDefinition(
        name="MOTOR",
        base_point=Point2D(0, 0),
        geometry=[CircleGeometry(Point2D(0, 0), 10.0), LineGeometry(Point2D(-10, 0), Point2D(10, 0))],
        attributes=[
            AttributeDefinition("TAG", default="M?", position=Point2D(0, 12)),
            AttributeDefinition("DESC", default="", position=Point2D(0, -12)),
            AttributeDefinition("MFR", default="ACME", position=Point2D(0, -20), constant=True),
        ],
    )


@pytest.fixture
def space():
    """Model space with a line, a closed square and a circle on different layers."""
    sp = Space()
    sp.add_layer(Layer("WIRE"))
    sp.add_layer(Layer("TITLE", is_frozen=True))
    sp.add_block(motor_block())
    sp.add_block(BlockDefinition(name="EMPTY"))
    sp.append(Entity(LineGeometry(Point2D(0, 0), Point2D(10, 0)), layer="WIRE"))
    sp.append(Entity(PolylineGeometry(
        [Point2D(20, 20), Point2D(30, 20), Point2D(30, 30), Point2D(20, 30)], closed=True), layer="0"))
    sp.append(Entity(CircleGeometry(Point2D(100, 100), 5.0), layer="0", linetype="DASHED", linetype_scale=2.0))
    return sp


@pytest.fixture
def quiet():
    """Reporter that collects executor output instead of printing it."""
    lines = []
    return lines.append
