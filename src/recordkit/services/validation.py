"""Validation engine — required-field checks, then custom strategies.

Pipeline: REQUIRED → (short-circuit on failure) → CUSTOM → MERGE

INVARIANT: custom validators only ever see records whose required fields
are all present. A required-field failure returns immediately and no
custom validator runs.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any
from uuid import UUID

from recordkit.domain.records import Record
from recordkit.domain.validation import ValidationOutcome
from recordkit.services._helpers import is_missing
from recordkit.services.contracts import RecordValidator


class BaseValidator:
    """Custom-validation strategy that accepts every record.

    Subclass and override :meth:`validate` to add entity rules
    (uniqueness, cross-field checks, existence checks against storage).
    """

    def validate(self, record: Record, record_id: UUID | None) -> ValidationOutcome:
        return ValidationOutcome.passed()


class UniqueFieldValidator(BaseValidator):
    """Reject a record whose *field* value is already taken by another record.

    *exists* is called as ``exists(value, exclude_id)`` and must return True
    when a record other than *exclude_id* holds *value*. On update the
    record's own id is passed as *exclude_id* so it does not clash with
    itself.

    Check-then-act: storage must still enforce the constraint, two
    concurrent inserts can both pass this check.
    """

    def __init__(
        self,
        field: str,
        exists: Callable[[Any, UUID | None], bool],
        message: str | None = None,
    ) -> None:
        self.field = field
        self._exists = exists
        self.message = message or f"{field} already exists."

    def validate(self, record: Record, record_id: UUID | None) -> ValidationOutcome:
        value = getattr(record, self.field)
        if is_missing(value):
            return ValidationOutcome.passed()
        if self._exists(value, record_id):
            return ValidationOutcome.failed(self.message)
        return ValidationOutcome.passed()


def check_required(record: Record) -> ValidationOutcome:
    """Collect the message of every required field that is empty."""
    errors = [
        field.message
        for field in type(record).required_fields()
        if is_missing(getattr(record, field.name, None))
    ]
    return ValidationOutcome(errors=errors)


def validate_record(
    record: Record,
    record_id: UUID | None = None,
    validators: Sequence[RecordValidator[Any]] = (),
) -> ValidationOutcome:
    """Run the full validation pipeline for *record*.

    *record_id* is None on insert and the target id on update.
    Never raises for malformed records; all problems end up in the outcome.
    """
    required = check_required(record)
    if not required.success:
        return required

    outcome = ValidationOutcome.passed()
    for validator in validators:
        outcome = outcome.merge(validator.validate(record, record_id))
    return outcome
