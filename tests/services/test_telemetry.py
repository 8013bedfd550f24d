"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

import pytest

from recordkit.infrastructure.storage import InMemoryStorage
from recordkit.services.record import RecordService
from recordkit.services.result import ServiceResult
from recordkit.services.telemetry import (
    Span,
    _current_span,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)
from tests.entities import Employee, make_employee


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child")
        child.annotate("rows", 3)
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "child"
        assert d["children"][0]["annotations"] == {"rows": 3}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_no_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_child_attached_to_parent(self) -> None:
        enable_telemetry()
        parent = Span(name="parent")
        token = _current_span.set(parent)
        try:
            with trace_span("child") as child:
                assert child is not None
                assert get_current_span() is child
            assert get_current_span() is parent
        finally:
            _current_span.reset(token)
        assert [c.name for c in parent.children] == ["child"]
        assert parent.children[0].end_time is not None


class TestTraced:
    def test_disabled_leaves_result_untouched(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(success=True)

        assert op().meta is None

    def test_enabled_injects_span(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(success=True, meta={"source": "test"})

        enable_telemetry()
        result = op()
        assert result.meta is not None
        assert result.meta["source"] == "test"
        assert result.meta["telemetry"]["name"].endswith("op")

    def test_non_result_return_passes_through(self) -> None:
        @traced
        def op() -> int:
            return 7

        enable_telemetry()
        assert op() == 7

    def test_exception_restores_span(self) -> None:
        @traced
        def op() -> ServiceResult:
            raise ValueError("boom")

        enable_telemetry()
        with pytest.raises(ValueError, match="boom"):
            op()
        assert _current_span.get() is None

    def test_service_call_span_tree(self) -> None:
        enable_telemetry()
        service = RecordService(InMemoryStorage(Employee))
        result = service.insert(make_employee())
        assert result.success
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "RecordService.insert"
        assert [c["name"] for c in tree["children"]] == ["validate", "storage.insert"]
