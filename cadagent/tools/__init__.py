# -*- coding: utf-8 -*-
from . import blocks as _blocks
from . import draw as _draw
from . import edit as _edit

# Action kind -> handler(action, space). Handlers return {"ok": True, ...}.
TOOLS = {
    # drawing
    "line": _draw.create_line,
    "polyline": _draw.create_polyline,
    "rectangle": _draw.create_rectangle,
    "circle": _draw.create_circle,
    "polygon": _draw.create_polygon,

    # blocks
    "insert_block": _blocks.insert_block,

    # editing
    "move": _edit.move,
    "rotate": _edit.rotate,
    "scale": _edit.scale,
    "erase": _edit.erase,
    "change_layer": _edit.change_layer,
    "change_properties": _edit.change_properties,
}
