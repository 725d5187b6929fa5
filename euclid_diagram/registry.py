"""Deduplicating store for the points, lines and circles of one diagram."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .matcher import EntityKind
from .printer import format_term
from .terms import Term

logger = logging.getLogger(__name__)

Stringify = Callable[[Term], str]


@dataclass(frozen=True)
class Entity:
    kind: EntityKind
    key: str
    backing: Term = field(compare=False)
    order: int = 0


class EntityRegistry:
    """Entities keyed by their display string, in first-seen order.

    Identity is purely textual: two different terms that print the same way
    share one entity, and the first term seen becomes its ``backing``.
    """

    def __init__(self, stringify: Optional[Stringify] = None) -> None:
        self._stringify = stringify or format_term
        self._entities: Dict[str, Entity] = {}

    def stringify(self, term: Term) -> str:
        return self._stringify(term)

    def insert(self, key: str, term: Term, kind: EntityKind) -> Tuple[Entity, bool]:
        existing = self._entities.get(key)
        if existing is not None:
            if existing.kind is not kind:
                logger.warning(
                    "Key %r already registered as %s; ignoring use as %s",
                    key,
                    existing.kind,
                    kind,
                )
            return existing, False
        entity = Entity(kind, key, term, len(self._entities))
        self._entities[key] = entity
        return entity, True

    def copy(self) -> "EntityRegistry":
        clone = EntityRegistry(self._stringify)
        clone._entities = dict(self._entities)
        return clone

    def get(self, key: str) -> Optional[Entity]:
        return self._entities.get(key)

    def entities(self) -> List[Entity]:
        return list(self._entities.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)


__all__ = ["Entity", "EntityRegistry", "Stringify"]
