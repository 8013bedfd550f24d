"""Record identifier generation.

Identifiers are random UUID4 values assigned by the record service at
insert time, never by the caller or by storage.

INVARIANT: IDs are permanent. Once assigned, an ID never changes.
"""

from __future__ import annotations

import uuid
from uuid import UUID

NIL_ID = UUID(int=0)


def new_record_id() -> UUID:
    """Generate a fresh random identifier."""
    return uuid.uuid4()


def is_empty_id(value: UUID | None) -> bool:
    """True for ``None`` and the all-zero UUID, both used as "no id" signals."""
    return value is None or value == NIL_ID
