from __future__ import annotations

from dataclasses import replace
from typing import Any, TypeVar

E = TypeVar("E")


class InMemoryEntityStore:
    """
    Dict-backed EntityStore for running the reducer without a database
    (ad-hoc replays, fixtures).

    Entities are copied on load and on save, so callers see the same
    detached-copy semantics as with a database-backed store.
    """

    def __init__(self) -> None:
        self._rows: dict[tuple[type, Any], Any] = {}

    def load(self, entity_type: type[E], entity_id: Any) -> E | None:
        row = self._rows.get((entity_type, entity_id))
        return None if row is None else replace(row)

    def save(self, entity: Any) -> None:
        self._rows[(type(entity), entity.id)] = replace(entity)
