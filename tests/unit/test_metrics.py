"""Tests for Prometheus metrics."""

from __future__ import annotations


from prometheus_client import REGISTRY

from ecommerce_operator.builders.secret import build_secret
from ecommerce_operator.metrics import (
    api_call_duration_seconds,
    api_call_total,
    credential_wait_total,
    drift_detected_total,
    error_total,
    rate_limit_hits_total,
    reconcile_duration_seconds,
    reconcile_total,
    resource_status_total,
    resource_writes_total,
)
from ecommerce_operator.reconcilers.upsert import upsert


class TestMetricsExist:
    """Test that all expected metrics are defined."""

    def test_metric_names(self):
        """Test the exported metric names."""
        # Prometheus counters don't include "_total" in their _name attribute
        assert reconcile_total._name == "ecommerce_operator_reconcile"
        assert reconcile_duration_seconds._name == "ecommerce_operator_reconcile_duration_seconds"
        assert error_total._name == "ecommerce_operator_error"
        assert resource_status_total._name == "ecommerce_operator_resource_status"
        assert resource_writes_total._name == "ecommerce_operator_resource_writes"
        assert credential_wait_total._name == "ecommerce_operator_credential_wait"
        assert drift_detected_total._name == "ecommerce_operator_drift_detected"
        assert api_call_total._name == "ecommerce_operator_api_call"
        assert api_call_duration_seconds._name == "ecommerce_operator_api_call_duration_seconds"
        assert rate_limit_hits_total._name == "ecommerce_operator_rate_limit_hits"


class TestMetricsRecording:
    """Test that operations record metrics."""

    def _writes(self, operation: str) -> float:
        return (
            REGISTRY.get_sample_value(
                "ecommerce_operator_resource_writes_total", {"kind": "Secret", "operation": operation}
            )
            or 0.0
        )

    def test_upsert_counts_writes(self, store):
        """Test that upserts count created and updated writes by kind."""
        secret = build_secret("postgres.url", "tenant-a", "POSTGRES_URL", "jdbc:x")
        created_before = self._writes("created")
        updated_before = self._writes("updated")

        upsert(store, secret)
        upsert(store, secret)

        assert self._writes("created") == created_before + 1
        assert self._writes("updated") == updated_before + 1

    def test_counter_labels(self):
        """Test that labelled counters increment independently."""
        before = REGISTRY.get_sample_value(
            "ecommerce_operator_credential_wait_total", {"namespace": "metrics-test"}
        ) or 0.0

        credential_wait_total.labels(namespace="metrics-test").inc()

        after = REGISTRY.get_sample_value("ecommerce_operator_credential_wait_total", {"namespace": "metrics-test"})
        assert after == before + 1
