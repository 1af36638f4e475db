"""Data store for one resource kind backed by the SQL store."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import ColumnElement, Select, false, func, select
from sqlalchemy.orm import Session

from interfaces.collaborators import SaveResult
from storage.schemas import RecordRow
from storage.sql_store import SQLStore

# Request metadata that is never persisted.
RESERVED_KEYS = {"id", "redirect_url"}


def payload_equals(field: str, value: Any) -> ColumnElement[bool]:
    """SQL clause matching records whose payload ``field`` equals ``value``.

    Only scalar values can be compared; a missing field matches ``None``.
    """
    element = RecordRow.payload[field]
    if value is None:
        return element.as_string().is_(None)
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    if isinstance(value, str):
        return element.as_string() == value
    raise ValueError(f"Cannot filter {field!r} on a {type(value).__name__} value")


class RecordStore:
    """Implements the pipeline's data-store contract over ``RecordRow``.

    Queries are ``{"conditions": {...}, "page": n, "limit": n}``. The ``id``
    condition matches the record identifier; any other condition matches a
    scalar payload field by equality. Filtering, counting and paging all run
    in SQL.
    """

    def __init__(
        self,
        sql_store: SQLStore,
        resource: str,
        id_format: str = "uuid",
        required_fields: Iterable[str] = (),
    ) -> None:
        if id_format not in {"uuid", "numeric"}:
            raise ValueError(f"Unsupported id_format: {id_format!r}")
        self.sql_store = sql_store
        self.resource = resource
        self.id_format = id_format
        self.required_fields = list(required_fields)

    # -- helpers ---------------------------------------------------------

    def _identifier(self, row: RecordRow) -> str:
        return row.uid if self.id_format == "uuid" else str(row.pk)

    def _to_dict(self, row: RecordRow) -> dict[str, Any]:
        return {"id": self._identifier(row), **(row.payload or {})}

    @staticmethod
    def _clean(payload: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in payload.items() if k not in RESERVED_KEYS}

    @staticmethod
    def _as_pk(value: Any) -> int | None:
        try:
            return int(str(value))
        except ValueError:
            pass
        try:
            number = float(str(value))
        except ValueError:
            return None
        return int(number) if number.is_integer() else None

    def _id_clause(self, record_id: Any) -> ColumnElement[bool]:
        if self.id_format == "uuid":
            return RecordRow.uid == str(record_id)
        pk = self._as_pk(record_id)
        return false() if pk is None else RecordRow.pk == pk

    def _where(self, query: dict[str, Any]) -> list[ColumnElement[bool]]:
        clauses = [RecordRow.resource == self.resource]
        for field, value in (query.get("conditions") or {}).items():
            clauses.append(self._id_clause(value) if field == "id" else payload_equals(field, value))
        return clauses

    def _select(self, query: dict[str, Any]) -> Select[tuple[RecordRow]]:
        return select(RecordRow).where(*self._where(query)).order_by(RecordRow.pk)

    def _row(self, sess: Session, record_id: Any) -> RecordRow | None:
        stmt = self._select({"conditions": {"id": record_id}}).limit(1)
        return sess.scalars(stmt).first()

    def _validate(self, payload: dict[str, Any], partial: bool = False) -> dict[str, str]:
        errors: dict[str, str] = {}
        for field in self.required_fields:
            if partial and field not in payload:
                continue
            value = payload.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field] = "This field cannot be left blank"
        return errors

    # -- contract --------------------------------------------------------

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        with self.sql_store.session() as sess:
            row = sess.scalars(self._select(query).limit(1)).first()
            return self._to_dict(row) if row is not None else None

    def count(self, query: dict[str, Any]) -> int:
        stmt = select(func.count()).select_from(RecordRow).where(*self._where(query))
        with self.sql_store.session() as sess:
            return int(sess.scalar(stmt) or 0)

    def paginate(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        page = max(1, int(query.get("page") or 1))
        limit = max(1, int(query.get("limit") or 20))
        stmt = self._select(query).offset((page - 1) * limit).limit(limit)
        with self.sql_store.session() as sess:
            return [self._to_dict(row) for row in sess.scalars(stmt)]

    def create(self, payload: dict[str, Any]) -> SaveResult:
        data = self._clean(payload)
        errors = self._validate(data)
        if errors:
            partial = {field: data.get(field, "") for field in self.required_fields}
            return SaveResult(success=False, errors=errors, data={**partial, **data})

        row = RecordRow(uid=str(uuid.uuid4()), resource=self.resource, payload=data)
        with self.sql_store.session() as sess:
            sess.add(row)
            sess.flush()
            record = self._to_dict(row)
        return SaveResult(success=True, id=record["id"], data=record)

    def update(self, record_id: str, payload: dict[str, Any]) -> SaveResult:
        data = self._clean(payload)
        errors = self._validate(data, partial=True)
        with self.sql_store.session() as sess:
            row = self._row(sess, record_id)
            if row is None:
                return SaveResult(success=False, errors={"id": "Record not found"}, data=data)
            current = self._to_dict(row)
            if errors:
                return SaveResult(success=False, id=current["id"], errors=errors, data=data)
            row.payload = {**(row.payload or {}), **data}
            sess.flush()
            record = self._to_dict(row)
        return SaveResult(success=True, id=record["id"], data=record)

    def delete(self, record_id: str) -> bool:
        with self.sql_store.session() as sess:
            row = self._row(sess, record_id)
            if row is None:
                return False
            sess.delete(row)
        return True
