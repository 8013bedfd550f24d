"""RecordService — generic create/read/update/delete and paged search.

Pipeline for writes: VALIDATE → ENRICH → PERSIST → RESPOND

Expected outcomes (validation failures, nothing written) are reported in
the returned ServiceResult. Anything else raised by storage is logged and
re-raised unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any
from uuid import UUID

from recordkit.domain.ids import is_empty_id
from recordkit.domain.paging import PagedResult, compute_total_pages, page_offset
from recordkit.domain.records import Record
from recordkit.domain.validation import ValidationOutcome
from recordkit.errors import InvalidPageError
from recordkit.infrastructure.messages import DATA_INVALID, SERVER_ERROR
from recordkit.services.base import BaseService
from recordkit.services.enrich import enrich
from recordkit.services.result import ErrorCode, ServiceResult
from recordkit.services.telemetry import trace_span, traced
from recordkit.services.validation import validate_record

if TYPE_CHECKING:
    from recordkit.config.settings import RecordkitSettings
    from recordkit.services.contracts import MessageSource, RecordStorage, RecordValidator

logger = logging.getLogger(__name__)


class RecordService[R: Record](BaseService):
    """Business-logic layer for one record type.

    Stateless between calls: one instance can be shared across threads
    when the storage collaborator is thread-safe.

    Usage::

        service = RecordService(
            InMemoryStorage(Employee),
            validators=[UniqueFieldValidator("employee_code", code_taken)],
        )
        result = service.insert(Employee(employee_code="E01", full_name="An"))
        if result.success:
            employee = service.get_by_id(result.id)
    """

    def __init__(
        self,
        storage: RecordStorage[R],
        *,
        validators: Sequence[RecordValidator[Any]] = (),
        settings: RecordkitSettings | None = None,
        messages: MessageSource | None = None,
    ) -> None:
        super().__init__(settings=settings, messages=messages)
        self._storage = storage
        self._validators = tuple(validators)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, record: R, record_id: UUID | None = None) -> ValidationOutcome:
        """Run required-field checks, then the custom validators."""
        with trace_span("validate"):
            return validate_record(record, record_id, self._validators)

    @traced
    def insert(self, record: R, *, locale: str | None = None) -> ServiceResult:
        """Validate, stamp and persist a new record."""
        outcome = self.validate(record, None)
        if not outcome.success:
            return self._invalid(record, outcome, locale)

        enrich(record, is_insert=True)
        with self._storage_call("insert", record):
            new_id = self._storage.insert(record)

        if is_empty_id(new_id):
            logger.warning(
                "Storage insert wrote nothing for %s %s (returned %r)",
                type(record).__name__,
                record.get_identifier(),
                new_id,
            )
            return self._persistence_failed(locale)
        return ServiceResult(success=True, id=new_id)

    @traced
    def update(self, record: R, record_id: UUID, *, locale: str | None = None) -> ServiceResult:
        """Validate, stamp and overwrite the record stored under *record_id*."""
        outcome = self.validate(record, record_id)
        if not outcome.success:
            return self._invalid(record, outcome, locale)

        enrich(record, is_insert=False, record_id=record_id)
        with self._storage_call("update", record):
            affected = self._storage.update(record, record_id)

        if affected <= 0:
            logger.warning(
                "Storage update affected no rows for %s %s",
                type(record).__name__,
                record_id,
            )
            return self._persistence_failed(locale)
        return ServiceResult(success=True, id=record_id)

    @traced
    def get_by_filter(
        self,
        page_number: int = 1,
        page_size: int | None = None,
        keyword: str = "",
    ) -> PagedResult[R]:
        """Return one page of records matching *keyword*, with page totals.

        *page_size* defaults to ``paging.default_page_size``.

        Raises:
            InvalidPageError: If *page_number* < 1, *page_size* <= 0, or
                *page_size* exceeds ``paging.max_page_size``.
        """
        paging = self._settings.paging
        size = paging.default_page_size if page_size is None else page_size
        page_offset(page_number, size)
        if size > paging.max_page_size:
            raise InvalidPageError(
                f"page_size {size} exceeds the maximum of {paging.max_page_size}"
            )

        with self._storage_call("get_by_filter"):
            page = self._storage.get_by_filter(page_number, size, keyword or "")
        return page.model_copy(
            update={"total_pages": compute_total_pages(page.total_records, size)}
        )

    @traced
    def get_by_id(self, record_id: UUID) -> R | None:
        with self._storage_call("get_by_id"):
            return self._storage.get_by_id(record_id)

    @traced
    def delete(self, record_id: UUID) -> int:
        """Delete a record; returns the affected-row count from storage."""
        with self._storage_call("delete"):
            return self._storage.delete(record_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _storage_call(self, op: str, record: Record | None = None) -> Iterator[None]:
        with trace_span(f"storage.{op}"):
            try:
                yield
            except Exception:
                logger.exception(
                    "Storage %s failed in %s%s",
                    op,
                    type(self._storage).__name__,
                    f" for {type(record).__name__}" if record is not None else "",
                    extra={"operation": op},
                )
                raise

    def _invalid(self, record: R, outcome: ValidationOutcome, locale: str | None) -> ServiceResult:
        logger.debug(
            "Validation failed for %s: %s", type(record).__name__, "; ".join(outcome.errors)
        )
        return ServiceResult(
            success=False,
            error_code=ErrorCode.BAD_REQUEST,
            message=self._message(DATA_INVALID, locale),
            data=outcome,
        )

    def _persistence_failed(self, locale: str | None) -> ServiceResult:
        return ServiceResult(
            success=False,
            error_code=ErrorCode.INSERT_FAILED,
            message=self._message(SERVER_ERROR, locale),
        )
