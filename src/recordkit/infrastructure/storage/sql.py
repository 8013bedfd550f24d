"""SQLAlchemy Core record storage.

SQLAlchemy Core (not ORM) maps each record to one row of a caller-owned
:class:`~sqlalchemy.Table` whose column names match the record's field
names. Fields without a column are not persisted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import UUID

from sqlalchemy import Table, create_engine, event, func, insert, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.sql.elements import ColumnElement

from recordkit.domain.paging import PagedResult, page_offset
from recordkit.domain.records import Record, as_utc


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlStorage[R: Record]:
    """RecordStorage over one table.

    Keyword search is a case-insensitive LIKE over *search_columns*.
    Updates never write ``created_date``. Datetimes are written as UTC
    and read back as aware UTC, since SQLite keeps no offset.
    """

    def __init__(
        self,
        engine: Engine,
        table: Table,
        record_type: type[R],
        *,
        search_columns: Sequence[str] = (),
    ) -> None:
        self._engine = engine
        self._table = table
        self._record_type = record_type
        self._id_column = table.c[record_type.identifier_name()]
        self._search_columns = [table.c[name] for name in search_columns]

    def insert(self, record: R) -> UUID | None:
        with self._engine.begin() as conn:
            result = conn.execute(insert(self._table).values(**self._row_values(record)))
        if result.rowcount != 1:
            return None
        return record.get_identifier()

    def update(self, record: R, record_id: UUID) -> int:
        values = self._row_values(record)
        values.pop("created_date", None)
        values[self._id_column.name] = record_id
        stmt = update(self._table).where(self._id_column == record_id).values(**values)
        with self._engine.begin() as conn:
            return int(conn.execute(stmt).rowcount)

    def get_by_filter(self, page_number: int, page_size: int, keyword: str) -> PagedResult[R]:
        offset = page_offset(page_number, page_size)
        stmt = select(self._table)
        count_stmt = select(func.count()).select_from(self._table)

        condition = self._keyword_condition(keyword)
        if condition is not None:
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        if "modified_date" in self._table.c:
            stmt = stmt.order_by(self._table.c.modified_date.desc())
        stmt = stmt.order_by(self._id_column)
        stmt = stmt.limit(page_size).offset(offset)

        with self._engine.connect() as conn:
            total = int(conn.execute(count_stmt).scalar_one() or 0)
            rows = conn.execute(stmt).mappings().all()
        return PagedResult(
            items=[self._to_record(row) for row in rows],
            total_records=total,
        )

    def get_by_id(self, record_id: UUID) -> R | None:
        stmt = select(self._table).where(self._id_column == record_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return self._to_record(row) if row is not None else None

    def delete(self, record_id: UUID) -> int:
        stmt = self._table.delete().where(self._id_column == record_id)
        with self._engine.begin() as conn:
            return int(conn.execute(stmt).rowcount)

    def _to_record(self, row: Mapping[str, Any]) -> R:
        return self._record_type.model_validate(
            {k: as_utc(v) if isinstance(v, datetime) else v for k, v in row.items()}
        )

    def _row_values(self, record: R) -> dict[str, Any]:
        return {
            name: as_utc(value) if isinstance(value, datetime) else value
            for name, value in record.model_dump().items()
            if name in self._table.c
        }

    def _keyword_condition(self, keyword: str) -> ColumnElement[bool] | None:
        if not keyword or not self._search_columns:
            return None
        pattern = f"%{_escape_like(keyword)}%"
        return or_(*(column.ilike(pattern, escape="\\") for column in self._search_columns))
