"""Thread-safe in-memory record storage.

Used by tests and by applications that want the service layer without a
database. Records are deep-copied on the way in and out, so callers never
share instances with the store.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from recordkit.domain.ids import is_empty_id
from recordkit.domain.paging import PagedResult, page_offset
from recordkit.domain.records import Record, as_utc

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class InMemoryStorage[R: Record]:
    """Dict-backed store keyed by record identifier.

    Keyword search is a case-insensitive substring match over
    *search_fields* (default: every string-valued field). Pages are
    ordered by ``modified_date``, newest first.
    """

    def __init__(self, record_type: type[R], *, search_fields: Sequence[str] = ()) -> None:
        self._record_type = record_type
        self._search_fields = tuple(search_fields)
        self._rows: dict[UUID, R] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def insert(self, record: R) -> UUID | None:
        record_id = record.get_identifier()
        if is_empty_id(record_id):
            return None
        with self._lock:
            if record_id in self._rows:
                return None
            self._rows[record_id] = record.model_copy(deep=True)
        return record_id

    def update(self, record: R, record_id: UUID) -> int:
        with self._lock:
            current = self._rows.get(record_id)
            if current is None:
                return 0
            stored = record.model_copy(deep=True)
            stored.set_identifier(record_id)
            stored.created_date = current.created_date
            self._rows[record_id] = stored
        return 1

    def get_by_filter(self, page_number: int, page_size: int, keyword: str) -> PagedResult[R]:
        offset = page_offset(page_number, page_size)
        with self._lock:
            matches = [row for row in self._rows.values() if self._matches(row, keyword)]
        matches.sort(key=_recency_key, reverse=True)
        page = matches[offset : offset + page_size]
        return PagedResult(
            items=[row.model_copy(deep=True) for row in page],
            total_records=len(matches),
        )

    def get_by_id(self, record_id: UUID) -> R | None:
        with self._lock:
            row = self._rows.get(record_id)
            return row.model_copy(deep=True) if row is not None else None

    def delete(self, record_id: UUID) -> int:
        with self._lock:
            return 1 if self._rows.pop(record_id, None) is not None else 0

    def _matches(self, row: R, keyword: str) -> bool:
        if not keyword:
            return True
        needle = keyword.casefold()
        return any(needle in value.casefold() for value in self._search_values(row))

    def _search_values(self, row: R) -> list[str]:
        if self._search_fields:
            values: list[Any] = [getattr(row, name, None) for name in self._search_fields]
        else:
            values = list(row.model_dump().values())
        return [value for value in values if isinstance(value, str)]


def _recency_key(row: Record) -> datetime:
    # modified_date may have been assigned naive, bypassing model validation.
    return as_utc(row.modified_date) if row.modified_date is not None else _EPOCH
