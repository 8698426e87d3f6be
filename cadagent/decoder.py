"""
Raw model output -> Plan.

Plans come from a language model, so field decoding is deliberately forgiving:
numbers may arrive as strings, fields may be missing or of the wrong type.
Every reader below takes a fallback and returns it instead of failing; only a
broken document (no JSON, wrong root) is an error.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import DEFAULT_LAYER
from .errors import DecodeError
from .geometry import ORIGIN, Point2D
from .schema import (
    Action, ChangeLayerAction, ChangePropertiesAction, CircleAction, EraseAction, Filter,
    InsertBlockAction, LineAction, MoveAction, Plan, PolygonAction, PolylineAction,
    RectangleAction, RotateAction, ScaleAction,
)

log = logging.getLogger(__name__)

_FENCE = "```"
_FENCE_RE = re.compile(r"```[ \t]*[A-Za-z0-9_+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")

MIN_POLYGON_SIDES = 3
MAX_POLYGON_SIDES = 1024

# =====================================================
# FENCES
# =====================================================

def strip_code_fence(text: Optional[str]) -> str:
    """Drop a Markdown code fence (```json ... ```) around the payload, if any."""
    if not text or not text.strip():
        return ""
    trimmed = text.strip()
    if _FENCE not in trimmed:
        return trimmed

    m = _FENCE_RE.search(trimmed)
    if m:
        return m.group(1).strip()

    # opening fence without a closing one
    if trimmed.startswith(_FENCE):
        newline = trimmed.find("\n")
        trimmed = trimmed[newline + 1:] if newline >= 0 else trimmed[len(_FENCE):]
    return trimmed.strip()

# =====================================================
# FIELD READERS
# =====================================================

def to_number(value: Any) -> Optional[float]:
    """JSON number or numeric string (always '.' as decimal point). Booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and _NUMBER_RE.fullmatch(value.strip()):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # integers past the float range
        return None
    return number if math.isfinite(number) else None

def to_integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None

def read_float(obj: Dict[str, Any], name: str, fallback: float) -> float:
    number = to_number(obj.get(name))
    return fallback if number is None else number

def read_str(obj: Dict[str, Any], name: str) -> Optional[str]:
    """Non-blank string value or None."""
    value = obj.get(name)
    if isinstance(value, str) and value.strip():
        return value
    return None

def read_layer(obj: Dict[str, Any]) -> str:
    return read_str(obj, "layer") or DEFAULT_LAYER

def point_from_array(arr: Any, fallback: Point2D = ORIGIN) -> Point2D:
    """[x, y] -> Point2D. A short array keeps the fallback coordinate, a bad one yields the fallback."""
    if not isinstance(arr, list):
        return fallback
    coords = [fallback.x, fallback.y]
    for i, value in enumerate(arr[:2]):
        number = to_number(value)
        if number is None:
            return fallback
        coords[i] = number
    return Point2D(coords[0], coords[1])

def read_point(obj: Dict[str, Any], name: str, fallback: Point2D = ORIGIN) -> Point2D:
    value = obj.get(name)
    if isinstance(value, list):
        return point_from_array(value, fallback)
    return fallback

def read_window(value: Any) -> Tuple[Point2D, Point2D]:
    """First two [x, y] entries of a window array; missing corners default to the origin."""
    corners = [ORIGIN, ORIGIN]
    found = 0
    for item in value:
        if not isinstance(item, list):
            continue
        corners[found] = point_from_array(item, ORIGIN)
        found += 1
        if found == 2:
            break
    return corners[0], corners[1]

def read_attributes(obj: Dict[str, Any]) -> Dict[str, str]:
    value = obj.get("attributes")
    if not isinstance(value, dict):
        return {}
    return {str(tag): text for tag, text in value.items() if isinstance(text, str)}


class _MalformedFilter(ValueError):
    pass


def read_filter(obj: Dict[str, Any]) -> Optional[Filter]:
    """None when absent. A filter that is not an object can't be trusted to select anything safely."""
    value = obj.get("filter")
    if value is None:
        return None
    if not isinstance(value, dict):
        raise _MalformedFilter(f"filter must be an object, got {type(value).__name__}")
    window = value.get("window")
    crossing = value.get("crossing")
    return Filter(
        layer=value["layer"] if isinstance(value.get("layer"), str) else None,
        type=value["type"] if isinstance(value.get("type"), str) else None,
        window=read_window(window) if isinstance(window, list) else None,
        crossing=read_window(crossing) if isinstance(crossing, list) else None,
    )

# =====================================================
# ACTIONS
# =====================================================

def _line(obj):
    return LineAction(
        start=read_point(obj, "from", ORIGIN),
        end=read_point(obj, "to", Point2D(100.0, 0.0)),
        layer=read_layer(obj),
    )

def _polyline(obj):
    points = obj.get("points")
    vertices = [point_from_array(p, ORIGIN) for p in points] if isinstance(points, list) else []
    return PolylineAction(points=tuple(vertices), closed=obj.get("closed") is True, layer=read_layer(obj))

def _rectangle(obj):
    return RectangleAction(
        base=read_point(obj, "base"),
        width=read_float(obj, "width", 100.0),
        height=read_float(obj, "height", 100.0),
        rotation=math.radians(read_float(obj, "rotation", 0.0)),
        layer=read_layer(obj),
    )

def _circle(obj):
    return CircleAction(
        center=read_point(obj, "center"),
        radius=read_float(obj, "radius", 50.0),
        layer=read_layer(obj),
    )

def _polygon(obj):
    sides = int(read_float(obj, "sides", 6))
    return PolygonAction(
        center=read_point(obj, "center"),
        radius=read_float(obj, "radius", 50.0),
        sides=min(max(sides, MIN_POLYGON_SIDES), MAX_POLYGON_SIDES),
        rotation=math.radians(read_float(obj, "rotation", 0.0)),
        layer=read_layer(obj),
    )

def _insert_block(obj):
    return InsertBlockAction(
        name=read_str(obj, "name") or "",
        position=read_point(obj, "position"),
        scale=read_float(obj, "scale", 1.0),
        rotation=math.radians(read_float(obj, "rotation", 0.0)),
        layer=read_layer(obj),
        attributes=read_attributes(obj),
    )

def _move(obj):
    return MoveAction(filter=read_filter(obj), offset=read_point(obj, "offset"))

def _rotate(obj):
    return RotateAction(
        filter=read_filter(obj),
        base=read_point(obj, "base"),
        angle=math.radians(read_float(obj, "angle", 0.0)),
    )

def _scale(obj):
    return ScaleAction(filter=read_filter(obj), base=read_point(obj, "base"),
                       factor=read_float(obj, "factor", 1.0))

def _erase(obj):
    return EraseAction(filter=read_filter(obj))

def _change_layer(obj):
    return ChangeLayerAction(filter=read_filter(obj), target_layer=read_str(obj, "targetLayer"))

def _change_properties(obj):
    return ChangePropertiesAction(
        filter=read_filter(obj),
        color_index=to_integer(obj.get("colorIndex")),
        linetype=read_str(obj, "linetype"),
        linetype_scale=to_number(obj.get("linetypeScale")),
    )


_DECODERS: Dict[str, Callable[[Dict[str, Any]], Action]] = {
    "line": _line,
    "polyline": _polyline,
    "rectangle": _rectangle,
    "circle": _circle,
    "polygon": _polygon,
    "insert_block": _insert_block,
    "move": _move,
    "rotate": _rotate,
    "scale": _scale,
    "erase": _erase,
    "change_layer": _change_layer,
    "change_properties": _change_properties,
}

ACTION_KINDS = tuple(_DECODERS)


def decode_action(obj: Any) -> Optional[Action]:
    """One action object -> Action, or None when the action is not one we know."""
    if not isinstance(obj, dict):
        log.debug("skipping non-object action %r", obj)
        return None
    kind = obj.get("action")
    if not isinstance(kind, str):
        log.debug("skipping action without a string 'action' field")
        return None
    decoder = _DECODERS.get(kind.strip().lower())
    if decoder is None:
        log.debug("skipping unknown action %r", kind)
        return None
    try:
        return decoder(obj)
    except _MalformedFilter as e:
        log.debug("skipping %s: %s", kind, e)
        return None


def decode_plan(raw_text: Optional[str]) -> Plan:
    """Model output -> Plan. Raises DecodeError when the document itself is unusable."""
    text = strip_code_fence(raw_text)
    if not text:
        raise DecodeError(DecodeError.EMPTY, "Empty plan from AI.")
    try:
        root = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodeError(DecodeError.INVALID_JSON, f"Invalid JSON plan: {e}") from e

    if isinstance(root, list):
        items: List[Any] = root
    elif isinstance(root, dict):
        items = [root]
    else:
        raise DecodeError(DecodeError.INVALID_ROOT, "Invalid JSON plan: root is not object or array.")

    actions = [a for a in (decode_action(item) for item in items) if a is not None]
    return Plan(actions=actions)
