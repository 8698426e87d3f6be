from __future__ import annotations
import logging
from typing import Any, Dict, List

from ..entities import AttributeReference, BlockDefinition, BlockReferenceGeometry, Entity
from ..schema import InsertBlockAction
from ..space import Space

log = logging.getLogger(__name__)


def bind_attributes(block: BlockDefinition, geometry: BlockReferenceGeometry,
                    values: Dict[str, str]) -> List[AttributeReference]:
    """
    Create an attribute instance for every non-constant definition tag that has a value.

    Keys without a matching tag are ignored; tags without a value are left to
    the definition default (no instance is created for them).
    """
    if not block.has_attribute_definitions or not values:
        return []
    place = geometry.block_transform()
    bound = []
    for attdef in block.attributes:
        if attdef.constant or attdef.tag not in values:
            continue
        bound.append(AttributeReference(attdef.tag, values[attdef.tag], place(attdef.position)))
    unknown = set(values) - {a.tag for a in bound}
    if unknown:
        log.debug("block %s has no attribute tags %s", block.name, sorted(unknown))
    return bound


def insert_block(action: InsertBlockAction, space: Space) -> Dict[str, Any]:
    block = space.block_definition(action.name)
    if block is None:
        return {"ok": True, "created": 0, "reason": f"block {action.name!r} not found"}

    geometry = BlockReferenceGeometry(
        name=block.name,
        insertion=action.position,
        scale=action.scale,
        rotation=action.rotation,
        definition=block,
    )
    geometry.attributes = bind_attributes(block, geometry, action.attributes)

    space.ensure_layer(action.layer)
    space.append(Entity(geometry=geometry, layer=action.layer))
    return {"ok": True, "created": 1, "attributes": len(geometry.attributes)}
