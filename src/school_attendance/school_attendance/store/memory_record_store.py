from __future__ import annotations

import copy
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Entity
from ..core.exceptions import RecordStoreError
from .repository import RecordStore, as_entity, check_fields

_IMMUTABLE_ON_UPSERT = ("id", "created_at")


def _norm(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value


class InMemoryRecordStore(RecordStore):
    """Dict-backed store used by tests and the ``memory`` backend.

    Records are kept in insertion order, so ``list`` returns them in the order
    they were created.
    """

    def __init__(self, seed: Optional[Mapping[Entity, Sequence[Mapping[str, Any]]]] = None):
        self._data: dict[Entity, dict[str, dict]] = {e: {} for e in Entity}
        for entity, records in (seed or {}).items():
            for record in records:
                self.create(entity, record)

    def list(self, entity: Entity, where: Optional[Mapping[str, Any]] = None) -> Sequence[dict]:
        entity = as_entity(entity)
        where = dict(where or {})
        check_fields(entity, list(where))
        wanted = {k: _norm(v) for k, v in where.items()}
        return [
            copy.deepcopy(r)
            for r in self._data[entity].values()
            if all(_norm(r.get(k)) == v for k, v in wanted.items())
        ]

    def create(self, entity: Entity, record: Mapping[str, Any]) -> None:
        entity = as_entity(entity)
        check_fields(entity, list(record))
        self._insert(entity, record)

    def _insert(self, entity: Entity, record: Mapping[str, Any]) -> None:
        record_id = record.get("id")
        if not record_id:
            raise RecordStoreError(f"{entity.value}: record without id")
        if record_id in self._data[entity]:
            raise RecordStoreError(f"{entity.value}: duplicate id {record_id}")
        self._data[entity][record_id] = {k: _norm(v) for k, v in record.items()}

    def update(self, entity: Entity, record_id: str, fields: Mapping[str, Any]) -> None:
        entity = as_entity(entity)
        check_fields(entity, list(fields))
        existing = self._data[entity].get(record_id)
        if existing is None:
            raise RecordStoreError(f"{entity.value}: no record with id {record_id}")
        existing.update({k: _norm(v) for k, v in fields.items() if k != "id"})

    def upsert(self, entity: Entity, record: Mapping[str, Any], *, key: Sequence[str]) -> None:
        entity = as_entity(entity)
        check_fields(entity, list(record) + list(key))
        wanted = {k: _norm(record.get(k)) for k in key}
        for existing in self._data[entity].values():
            if all(existing.get(k) == v for k, v in wanted.items()):
                existing.update({k: _norm(v) for k, v in record.items() if k not in _IMMUTABLE_ON_UPSERT})
                return
        self._insert(entity, record)

    def count(self, entity: Entity) -> int:
        return len(self._data[as_entity(entity)])
