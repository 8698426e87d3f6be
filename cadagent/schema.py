from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .geometry import ORIGIN, Point2D

# Angles below are radians; the decoder converts the degrees found in plans.


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Filter(_Frozen):
    """Conjunction of the predicates that are set. Empty filter matches everything."""
    layer: Optional[str] = None
    type: Optional[str] = None
    window: Optional[Tuple[Point2D, Point2D]] = None
    crossing: Optional[Tuple[Point2D, Point2D]] = None

    def is_empty(self) -> bool:
        return self.layer is None and self.type is None and self.window is None and self.crossing is None

# -----------------------
# creation actions
# -----------------------

class LineAction(_Frozen):
    action: Literal["line"] = "line"
    start: Point2D = ORIGIN
    end: Point2D = Point2D(100.0, 0.0)
    layer: str = "0"


class PolylineAction(_Frozen):
    action: Literal["polyline"] = "polyline"
    points: Tuple[Point2D, ...] = ()
    closed: bool = False
    layer: str = "0"


class RectangleAction(_Frozen):
    action: Literal["rectangle"] = "rectangle"
    base: Point2D = ORIGIN
    width: float = 100.0
    height: float = 100.0
    rotation: float = 0.0
    layer: str = "0"


class CircleAction(_Frozen):
    action: Literal["circle"] = "circle"
    center: Point2D = ORIGIN
    radius: float = 50.0
    layer: str = "0"


class PolygonAction(_Frozen):
    action: Literal["polygon"] = "polygon"
    center: Point2D = ORIGIN
    radius: float = 50.0
    sides: int = Field(default=6, ge=3)
    rotation: float = 0.0
    layer: str = "0"


class InsertBlockAction(_Frozen):
    action: Literal["insert_block"] = "insert_block"
    name: str = ""
    position: Point2D = ORIGIN
    scale: float = 1.0
    rotation: float = 0.0
    layer: str = "0"
    attributes: Dict[str, str] = Field(default_factory=dict)

# -----------------------
# mutation actions
# -----------------------

class MoveAction(_Frozen):
    action: Literal["move"] = "move"
    filter: Optional[Filter] = None
    offset: Point2D = ORIGIN


class RotateAction(_Frozen):
    action: Literal["rotate"] = "rotate"
    filter: Optional[Filter] = None
    base: Point2D = ORIGIN
    angle: float = 0.0


class ScaleAction(_Frozen):
    action: Literal["scale"] = "scale"
    filter: Optional[Filter] = None
    base: Point2D = ORIGIN
    factor: float = 1.0


class EraseAction(_Frozen):
    action: Literal["erase"] = "erase"
    filter: Optional[Filter] = None


class ChangeLayerAction(_Frozen):
    action: Literal["change_layer"] = "change_layer"
    filter: Optional[Filter] = None
    target_layer: Optional[str] = None


class ChangePropertiesAction(_Frozen):
    """Each property is applied only when it is set; None means leave it alone."""
    action: Literal["change_properties"] = "change_properties"
    filter: Optional[Filter] = None
    color_index: Optional[int] = None
    linetype: Optional[str] = None
    linetype_scale: Optional[float] = None


CREATION_ACTIONS = ("line", "polyline", "rectangle", "circle", "polygon", "insert_block")
MUTATION_ACTIONS = ("move", "rotate", "scale", "erase", "change_layer", "change_properties")

Action = Annotated[
    Union[
        LineAction, PolylineAction, RectangleAction, CircleAction, PolygonAction,
        InsertBlockAction, MoveAction, RotateAction, ScaleAction, EraseAction,
        ChangeLayerAction, ChangePropertiesAction,
    ],
    Field(discriminator="action"),
]


class Plan(_Frozen):
    actions: List[Action] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)
