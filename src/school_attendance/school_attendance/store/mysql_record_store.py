from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import Entity
from ..core.exceptions import RecordStoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import ENTITY_FIELDS, RecordStore, as_entity, check_fields

TABLES: dict[Entity, str] = {
    Entity.USERS: "users",
    Entity.CLASSES: "classes",
    Entity.ATTENDANCE: "attendance",
    Entity.PARENT_CHILD: "parent_child",
}


def _col(name: str) -> str:
    # `date` is a keyword; quote every identifier.
    return f"`{name}`"


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _cursor(self, action: str, entity: Entity):
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                yield cur
        except mysql.connector.Error as e:
            raise RecordStoreError(f"{action} {entity.value} failed: {e}") from e

    def list(self, entity: Entity, where: Optional[Mapping[str, Any]] = None) -> Sequence[dict]:
        entity = as_entity(entity)
        where = dict(where or {})
        check_fields(entity, list(where))

        sql = f"SELECT {', '.join(_col(c) for c in ENTITY_FIELDS[entity])} FROM {TABLES[entity]}"
        if where:
            sql += " WHERE " + " AND ".join(f"{_col(c)}=%s" for c in where)

        with self._cursor("list", entity) as cur:
            cur.execute(sql, tuple(where.values()))
            return fetchall(cur)

    def create(self, entity: Entity, record: Mapping[str, Any]) -> None:
        entity = as_entity(entity)
        check_fields(entity, list(record))
        columns = list(record)

        with self._cursor("create", entity) as cur:
            cur.execute(
                f"INSERT INTO {TABLES[entity]}({', '.join(_col(c) for c in columns)}) "
                f"VALUES({', '.join(['%s'] * len(columns))})",
                tuple(record[c] for c in columns),
            )

    def update(self, entity: Entity, record_id: str, fields: Mapping[str, Any]) -> None:
        entity = as_entity(entity)
        fields = {k: v for k, v in fields.items() if k != "id"}
        check_fields(entity, list(fields))
        if not fields:
            return

        with self._cursor("update", entity) as cur:
            cur.execute(
                f"UPDATE {TABLES[entity]} SET {', '.join(f'{_col(c)}=%s' for c in fields)} WHERE `id`=%s",
                tuple(fields.values()) + (record_id,),
            )
            if cur.rowcount == 0:
                # rowcount is 0 both for a missing id and for an unchanged row
                cur.execute(f"SELECT `id` FROM {TABLES[entity]} WHERE `id`=%s", (record_id,))
                if not fetchall(cur):
                    raise RecordStoreError(f"{entity.value}: no record with id {record_id}")

    def upsert(self, entity: Entity, record: Mapping[str, Any], *, key: Sequence[str]) -> None:
        """Single-statement insert-or-update relying on the table's unique key over ``key``."""
        entity = as_entity(entity)
        columns = list(record)
        check_fields(entity, columns + list(key))
        updates = [c for c in columns if c not in key and c not in ("id", "created_at")]

        sql = (
            f"INSERT INTO {TABLES[entity]}({', '.join(_col(c) for c in columns)}) "
            f"VALUES({', '.join(['%s'] * len(columns))})"
        )
        # row alias syntax, MySQL 8.0.19+
        if updates:
            sql += " AS new ON DUPLICATE KEY UPDATE " + ", ".join(f"{_col(c)}=new.{_col(c)}" for c in updates)
        else:
            sql += " ON DUPLICATE KEY UPDATE `id`=`id`"

        with self._cursor("upsert", entity) as cur:
            cur.execute(sql, tuple(record[c] for c in columns))
