"""In-memory drawing space (model space plus the block and layer tables)."""
from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .config import DEFAULT_LAYER
from .entities import BlockDefinition, Entity, Layer
from .errors import TransactionError

log = logging.getLogger(__name__)


class Space:
    """
    Ordered collection of entities for one drawing context.

    The space is a plain container: it does not check that geometry makes sense.
    Erase is logical (``Entity.deleted``): erased entities stay in the list
    for the life of the space and are skipped by the live views. A rollback
    clears the flag again.
    """

    def __init__(self, name: str = "*Model_Space", insunits: int = 4,
                 ltscale: float = 1.0, cecolor: int = 256):
        self.name = name
        # drawing variables reported to the assistant
        self.insunits = insunits
        self.ltscale = ltscale
        self.cecolor = cecolor

        self._entities: List[Entity] = []
        self._blocks: Dict[str, BlockDefinition] = {}
        self._layers: Dict[str, Layer] = {}
        self._snapshot: Optional[Tuple[int, List[Tuple[Entity, Dict[str, Any]]], Dict[str, Layer]]] = None

        self.add_layer(Layer(DEFAULT_LAYER))

    # ------------------------------
    # Entities
    # ------------------------------

    def append(self, entity: Entity) -> Entity:
        self._entities.append(entity)
        return entity

    def for_each_live(self, visitor: Callable[[Entity], None]) -> None:
        """Visit non-deleted entities in insertion order.

        Membership is fixed when the walk starts: entities appended or erased by
        the visitor don't change which entities are visited.
        """
        for entity in self.live_entities():
            visitor(entity)

    def live_entities(self) -> List[Entity]:
        return [e for e in self._entities if not e.deleted]

    def mark_deleted(self, entity: Entity) -> None:
        entity.deleted = True

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    # ------------------------------
    # Blocks
    # ------------------------------

    def add_block(self, block: BlockDefinition) -> BlockDefinition:
        self._blocks[block.name.lower()] = block
        return block

    def block_names(self) -> List[str]:
        return [b.name for b in self._blocks.values()]

    def block_definition(self, name: str) -> Optional[BlockDefinition]:
        if not name:
            return None
        return self._blocks.get(name.lower())

    # ------------------------------
    # Layers
    # ------------------------------

    def add_layer(self, layer: Layer) -> Layer:
        self._layers[layer.name.lower()] = layer
        return layer

    def layer(self, name: str) -> Optional[Layer]:
        return self._layers.get(name.lower())

    def has_layer(self, name: str) -> bool:
        return name.lower() in self._layers

    def ensure_layer(self, name: str) -> Layer:
        existing = self.layer(name)
        if existing is not None:
            return existing
        log.debug("creating layer %r", name)
        return self.add_layer(Layer(name))

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers.values())

    # ------------------------------
    # Transaction
    # ------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._snapshot is not None

    def begin(self) -> None:
        if self._snapshot is not None:
            raise TransactionError("a transaction is already active on this space")
        # block definitions are shared by references, never copied
        memo = {id(b): b for b in self._blocks.values()}
        states = [(e, copy.deepcopy(vars(e), memo)) for e in self._entities]
        self._snapshot = (len(self._entities), states, dict(self._layers))

    def commit(self) -> None:
        if self._snapshot is None:
            raise TransactionError("no active transaction to commit")
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is None:
            raise TransactionError("no active transaction to roll back")
        count, states, layers = self._snapshot
        del self._entities[count:]
        for entity, state in states:
            vars(entity).clear()
            vars(entity).update(state)
        self._layers = layers
        self._snapshot = None
        log.debug("transaction rolled back, %d entities restored", count)

    @contextmanager
    def transaction(self):
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()
