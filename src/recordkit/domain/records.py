"""Record base model — identifier, audit timestamps, required-field markers.

Every entity processed by the record service subclasses :class:`Record`
and declares its capabilities explicitly instead of relying on naming
conventions discovered at runtime:

- ``identifier_field``: name of the UUID field that identifies the record.
  Checked when the subclass is defined.
- ``Required(message)``: ``Annotated`` marker on fields whose emptiness is
  a validation failure. Read back through :meth:`Record.required_fields`.

Usage::

    class Employee(Record):
        identifier_field: ClassVar[str] = "employee_id"

        employee_id: UUID | None = None
        employee_code: Annotated[str | None, Required("Code is required.")] = None
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from recordkit.errors import RecordDefinitionError


@dataclass(frozen=True)
class Required:
    """Annotation marker for a field that must not be empty."""

    message: str | None = None


@dataclass(frozen=True)
class RequiredField:
    """Descriptor of one required field: its name and failure message."""

    name: str
    message: str


def as_utc(value: datetime) -> datetime:
    """Convert *value* to UTC. Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Record(BaseModel):
    """Base class for all records handled by :class:`RecordService`.

    Instances are mutable: the service assigns the identifier and audit
    timestamps in place before handing the record to storage.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    identifier_field: ClassVar[str | None] = None

    created_date: datetime | None = None
    modified_date: datetime | None = None

    @field_validator("created_date", "modified_date")
    @classmethod
    def audit_stamp_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        name = cls.identifier_field
        if name is not None and name not in cls.model_fields:
            msg = f"{cls.__name__}.identifier_field names unknown field {name!r}"
            raise RecordDefinitionError(msg)

    @classmethod
    def identifier_name(cls) -> str:
        """Name of the identifier field.

        Raises:
            RecordDefinitionError: If the class declares no identifier field.
        """
        if cls.identifier_field is None:
            msg = f"{cls.__name__} does not declare identifier_field"
            raise RecordDefinitionError(msg)
        return cls.identifier_field

    @classmethod
    def required_fields(cls) -> tuple[RequiredField, ...]:
        """Required-field descriptors in declaration order."""
        found: list[RequiredField] = []
        for name, info in cls.model_fields.items():
            marker = next((m for m in info.metadata if isinstance(m, Required)), None)
            if marker is None:
                continue
            label = info.alias or name
            message = marker.message or f"{label} is required."
            found.append(RequiredField(name=name, message=message))
        return tuple(found)

    def get_identifier(self) -> UUID | None:
        return getattr(self, self.identifier_name())

    def set_identifier(self, value: UUID | None) -> None:
        setattr(self, self.identifier_name(), value)
