"""Tests for the validation engine: required fields, then custom validators."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from recordkit.domain.validation import ValidationOutcome
from recordkit.services.validation import (
    BaseValidator,
    UniqueFieldValidator,
    check_required,
    validate_record,
)
from tests.entities import Employee, RecordingValidator, make_employee


class TestCheckRequired:
    def test_all_present(self) -> None:
        assert check_required(make_employee()).success

    def test_none_is_missing(self) -> None:
        outcome = check_required(Employee(employee_code="E1"))
        assert outcome.errors == ["Full name must not be empty."]

    def test_empty_string_is_missing(self) -> None:
        outcome = check_required(Employee(employee_code="", full_name=""))
        assert outcome.errors == [
            "Employee code must not be empty.",
            "Full name must not be empty.",
        ]

    def test_whitespace_is_a_value(self) -> None:
        assert check_required(Employee(employee_code=" ", full_name="A")).success

    def test_optional_fields_ignored(self) -> None:
        assert check_required(make_employee(email=None)).success


class TestValidateRecord:
    def test_no_custom_validators(self) -> None:
        assert validate_record(make_employee()).success

    def test_custom_skipped_when_required_fails(self) -> None:
        custom = RecordingValidator("should not appear")
        outcome = validate_record(Employee(full_name="A"), None, [custom])
        assert outcome.errors == ["Employee code must not be empty."]
        assert custom.calls == []

    def test_custom_receives_record_id(self) -> None:
        custom = RecordingValidator()
        record = make_employee()
        record_id = uuid4()
        validate_record(record, record_id, [custom])
        assert custom.calls == [(record, record_id)]

    def test_custom_failure_reported(self) -> None:
        outcome = validate_record(make_employee(), None, [RecordingValidator("Code taken.")])
        assert not outcome.success
        assert outcome.errors == ["Code taken."]

    def test_custom_outcomes_merged_in_order(self) -> None:
        validators = [
            RecordingValidator("first"),
            RecordingValidator(),
            RecordingValidator("second", "third"),
        ]
        outcome = validate_record(make_employee(), None, validators)
        assert outcome.errors == ["first", "second", "third"]
        assert all(len(v.calls) == 1 for v in validators)

    def test_base_validator_accepts(self) -> None:
        assert BaseValidator().validate(make_employee(), None) == ValidationOutcome.passed()


class TestUniqueFieldValidator:
    def test_rejects_taken_value(self) -> None:
        validator = UniqueFieldValidator("employee_code", lambda value, exclude: value == "E001")
        outcome = validator.validate(make_employee("E001"), None)
        assert outcome.errors == ["employee_code already exists."]

    def test_accepts_free_value(self) -> None:
        validator = UniqueFieldValidator("employee_code", lambda value, exclude: False)
        assert validator.validate(make_employee("E002"), None).success

    def test_passes_exclude_id(self) -> None:
        seen: list[tuple[Any, UUID | None]] = []

        def exists(value: Any, exclude: UUID | None) -> bool:
            seen.append((value, exclude))
            return False

        record_id = uuid4()
        UniqueFieldValidator("employee_code", exists).validate(make_employee("E9"), record_id)
        assert seen == [("E9", record_id)]

    def test_missing_value_not_checked(self) -> None:
        called: list[Any] = []
        validator = UniqueFieldValidator("email", lambda value, exclude: called.append(value) or True)
        assert validator.validate(make_employee(email=None), None).success
        assert called == []

    def test_custom_message(self) -> None:
        validator = UniqueFieldValidator(
            "employee_code", lambda value, exclude: True, message="Code already used."
        )
        assert validator.validate(make_employee(), None).errors == ["Code already used."]
