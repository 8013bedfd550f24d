"""ServiceResult and ErrorCode — the record service contract.

INVARIANT: insert and update return ServiceResult. Callers branch on
``success`` and only then read ``error_code``, ``data`` and ``message``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Self
from uuid import UUID

from pydantic import BaseModel, model_validator

from recordkit.domain.validation import ValidationOutcome


class ErrorCode(IntEnum):
    """Error classes reported through ``ServiceResult.error_code``.

    ``INSERT_FAILED`` covers both insert and update: storage reported that
    nothing was written.
    """

    BAD_REQUEST = 400
    INSERT_FAILED = 500


class ServiceResult(BaseModel):
    """Uniform outcome envelope for mutating record operations.

    Attributes:
        success: Whether the operation succeeded.
        id: Identifier of the inserted or updated record.
        error_code: Error class if ``success`` is False.
        data: Extra payload; the ValidationOutcome on BAD_REQUEST.
        message: Localized, caller-facing message.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    success: bool
    id: UUID | None = None
    error_code: ErrorCode | None = None
    data: Any = None
    message: str | None = None
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> Self:
        if self.success:
            if self.error_code is not None:
                raise ValueError("successful result cannot carry an error_code")
            if isinstance(self.data, ValidationOutcome) and not self.data.success:
                raise ValueError("successful result cannot carry validation errors")
        elif self.error_code is None and not self.data:
            raise ValueError("failed result needs an error_code or an error payload")
        return self
