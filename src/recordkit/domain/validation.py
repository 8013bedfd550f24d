"""Validation outcome shared by the required-field check and custom validators."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class ValidationOutcome(BaseModel):
    """Result of validating one record.

    ``success`` is derived from ``errors``: an outcome fails exactly when
    it carries at least one error message.
    """

    model_config = {"frozen": True}

    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def passed(cls) -> ValidationOutcome:
        return cls()

    @classmethod
    def failed(cls, *errors: str) -> ValidationOutcome:
        return cls(errors=list(errors))

    def merge(self, other: ValidationOutcome) -> ValidationOutcome:
        """Combine two outcomes, keeping error order."""
        if not other.errors:
            return self
        return ValidationOutcome(errors=[*self.errors, *other.errors])
