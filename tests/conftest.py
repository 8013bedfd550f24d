"""Shared pytest fixtures for recordkit tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from recordkit.config.settings import RecordkitSettings
from recordkit.infrastructure.storage import InMemoryStorage, SqlStorage, create_db_engine
from recordkit.services.record import RecordService
from recordkit.services.telemetry import _current_span, disable_telemetry
from tests.entities import Employee, employees, metadata


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Telemetry state lives in ContextVars shared by every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> RecordkitSettings:
    """Default settings, isolated from RECORDKIT_* env vars."""
    monkeypatch.delenv("RECORDKIT_CONFIG", raising=False)
    return RecordkitSettings()


@pytest.fixture
def storage() -> InMemoryStorage[Employee]:
    return InMemoryStorage(Employee, search_fields=("employee_code", "full_name"))


@pytest.fixture
def service(
    storage: InMemoryStorage[Employee], settings: RecordkitSettings
) -> RecordService[Employee]:
    return RecordService(storage, settings=settings)


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """SQLite engine with the employees table created."""
    engine = create_db_engine(tmp_path / "records.db")
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_storage(db_engine: Engine) -> SqlStorage[Employee]:
    return SqlStorage(
        db_engine,
        employees,
        Employee,
        search_columns=("employee_code", "full_name"),
    )
