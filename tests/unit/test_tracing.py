"""Tests for tracing helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ecommerce_operator import tracing


class TestTraceSpan:
    """Test cases for trace_span context manager."""

    def test_noop_without_tracer(self):
        """Test that spans are skipped when tracing is disabled."""
        with patch.object(tracing, "_tracer", None):
            with tracing.trace_span("reconcile_application", kind="ECommerceApplication") as span:
                assert span is None

    def test_span_attributes(self):
        """Test that the resource kind is added to the span attributes."""
        tracer = MagicMock()
        with patch.object(tracing, "_tracer", tracer):
            with tracing.trace_span("project_secrets", kind="Secret", attributes={"application.name": "shop"}):
                pass

        tracer.start_as_current_span.assert_called_once_with(
            "project_secrets", attributes={"application.name": "shop", "resource.kind": "Secret"}
        )

    def test_records_exception(self):
        """Test that failures are recorded on the span and re-raised."""
        tracer = MagicMock()
        span = tracer.start_as_current_span.return_value.__enter__.return_value
        span.is_recording.return_value = True
        with patch.object(tracing, "_tracer", tracer):
            with pytest.raises(RuntimeError):
                with tracing.trace_span("ensure_workload"):
                    raise RuntimeError("boom")

        span.record_exception.assert_called_once()


class TestInitializeTracing:
    """Test cases for initialize_tracing function."""

    def test_disabled_by_default(self, monkeypatch):
        """Test that no tracer is installed unless enabled."""
        monkeypatch.delenv("OTEL_TRACES_ENABLED", raising=False)
        with patch.object(tracing, "_tracer", None):
            tracing.initialize_tracing()
            assert tracing.get_tracer() is None
