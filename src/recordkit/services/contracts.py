"""Collaborator protocols consumed by the record service.

Storage and message lookup live outside this package; any object with
the right methods can be plugged in. Reference implementations are in
:mod:`recordkit.infrastructure`.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from recordkit.domain.paging import PagedResult
from recordkit.domain.records import Record
from recordkit.domain.validation import ValidationOutcome


class RecordStorage[R: Record](Protocol):
    """Persistence collaborator for one record type.

    Implementations own concurrency, timeouts and uniqueness constraints.
    """

    def insert(self, record: R) -> UUID | None:
        """Persist a new record. ``None`` or the nil UUID signals failure."""
        ...

    def update(self, record: R, record_id: UUID) -> int:
        """Overwrite the record stored under *record_id*; return affected rows."""
        ...

    def get_by_filter(self, page_number: int, page_size: int, keyword: str) -> PagedResult[R]:
        """Return one page of matches with ``total_records`` set."""
        ...

    def get_by_id(self, record_id: UUID) -> R | None: ...

    def delete(self, record_id: UUID) -> int: ...


class RecordValidator[R: Record](Protocol):
    """Entity-specific validation strategy run after required-field checks."""

    def validate(self, record: R, record_id: UUID | None) -> ValidationOutcome: ...


class MessageSource(Protocol):
    """Localized message lookup."""

    def get(self, key: str, locale: str | None = None) -> str: ...
