"""Exception types raised for programming errors and rejected requests.

Expected outcomes (validation failures, zero rows affected) are reported
through :class:`~recordkit.services.result.ServiceResult`, never raised.
"""

from __future__ import annotations


class RecordkitError(Exception):
    """Base exception for recordkit errors."""


class InvalidPageError(RecordkitError, ValueError):
    """Raised when paging parameters cannot describe a page."""


class RecordDefinitionError(RecordkitError, TypeError):
    """Raised when a record class does not declare a usable identifier field."""
