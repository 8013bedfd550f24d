"""Record enricher — identifier and audit timestamp injection."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from recordkit.domain.ids import new_record_id
from recordkit.domain.records import Record
from recordkit.services._helpers import utc_now


def enrich[R: Record](
    record: R,
    *,
    is_insert: bool,
    record_id: UUID | None = None,
    now: datetime | None = None,
) -> R:
    """Stamp *record* in place before it is handed to storage.

    - ``modified_date`` is always set.
    - On insert, ``created_date`` gets the same timestamp and a new
      identifier is generated (any caller-supplied id is replaced).
    - On update, *record_id* is pinned onto the identifier field and
      ``created_date`` is left alone.
    """
    stamp = now or utc_now()
    record.modified_date = stamp
    if is_insert:
        record.created_date = stamp
        record.set_identifier(new_record_id())
    else:
        record.set_identifier(record_id)
    return record
