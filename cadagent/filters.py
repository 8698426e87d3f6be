"""
Entity selection by layer / type / window / crossing.

Window and crossing work on axis-aligned bounding boxes, not on the true
outline: a rotated rectangle or an arc-heavy block is selected by its box.
"""
from __future__ import annotations

from typing import List, Optional

from .entities import Entity
from .geometry import BoundingBox, bounding_box_of
from .schema import Filter
from .space import Space


def matches(entity: Entity, flt: Optional[Filter]) -> bool:
    """All predicates present in the filter must pass. No filter matches everything."""
    if flt is None:
        return True

    if flt.layer is not None and entity.layer.lower() != flt.layer.lower():
        return False

    if flt.type is not None and entity.kind.value.lower() != flt.type.lower():
        return False

    if flt.window is not None or flt.crossing is not None:
        box = bounding_box_of(entity)
        if box is None:
            return False
        if flt.window is not None and not BoundingBox.from_corners(*flt.window).contains(box):
            return False
        if flt.crossing is not None and not BoundingBox.from_corners(*flt.crossing).overlaps(box):
            return False

    return True


def select(space: Space, flt: Optional[Filter]) -> List[Entity]:
    """Live entities matching flt, in drawing order."""
    selected: List[Entity] = []
    space.for_each_live(lambda e: selected.append(e) if matches(e, flt) else None)
    return selected
