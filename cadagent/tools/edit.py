"""Editing actions. Each one selects first, then mutates the selection."""
from __future__ import annotations
from typing import Any, Dict

from ..filters import select
from ..geometry import rotate_entity, scale_entity, translate
from ..schema import (ChangeLayerAction, ChangePropertiesAction, EraseAction, MoveAction,
                      RotateAction, ScaleAction)
from ..space import Space


def _done(count: int, **extra) -> Dict[str, Any]:
    return {"ok": True, "affected": count, **extra}

def move(action: MoveAction, space: Space) -> Dict[str, Any]:
    targets = select(space, action.filter)
    dx, dy = action.offset
    for ent in targets:
        translate(ent, dx, dy)
    return _done(len(targets))

def rotate(action: RotateAction, space: Space) -> Dict[str, Any]:
    targets = select(space, action.filter)
    for ent in targets:
        rotate_entity(ent, action.base, action.angle)
    return _done(len(targets))

def scale(action: ScaleAction, space: Space) -> Dict[str, Any]:
    targets = select(space, action.filter)
    for ent in targets:
        scale_entity(ent, action.base, action.factor)
    return _done(len(targets))

def erase(action: EraseAction, space: Space) -> Dict[str, Any]:
    targets = select(space, action.filter)
    for ent in targets:
        space.mark_deleted(ent)
    return _done(len(targets))

def change_layer(action: ChangeLayerAction, space: Space) -> Dict[str, Any]:
    if not action.target_layer:
        return _done(0, reason="no target layer")
    targets = select(space, action.filter)
    if targets:
        space.ensure_layer(action.target_layer)
    for ent in targets:
        ent.layer = action.target_layer
    return _done(len(targets))

def change_properties(action: ChangePropertiesAction, space: Space) -> Dict[str, Any]:
    """Only the properties present in the action are touched."""
    if action.color_index is None and action.linetype is None and action.linetype_scale is None:
        return _done(0, reason="no properties to change")
    targets = select(space, action.filter)
    for ent in targets:
        if action.color_index is not None:
            ent.color_index = action.color_index
        if action.linetype is not None:
            ent.linetype = action.linetype
        if action.linetype_scale is not None:
            ent.linetype_scale = action.linetype_scale
    return _done(len(targets))
