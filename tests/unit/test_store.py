"""Tests for the Kubernetes-backed resource store."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client.exceptions import ApiException

from ecommerce_operator.builders.job import build_init_job
from ecommerce_operator.builders.secret import build_secret
from ecommerce_operator.constants import (
    API_GROUP,
    API_VERSION,
    FIELD_MANAGER,
    KIND_APPLICATION,
    KIND_DEPLOYMENT,
    KIND_SECRET,
    PLURAL_APPLICATION,
)
from ecommerce_operator.exceptions import StoreOperationError
from ecommerce_operator.services.store import KubernetesStore, kind_of, name_of, namespace_of


@pytest.fixture(autouse=True)
def no_rate_limit():
    """Run API calls without client-side spacing."""
    with patch("ecommerce_operator.services.store.k8s.rate_limit_k8s", side_effect=lambda fn: fn):
        yield


@pytest.fixture
def apis():
    """Mocked Kubernetes API groups."""
    return {
        "core_api": MagicMock(),
        "batch_api": MagicMock(),
        "apps_api": MagicMock(),
        "custom_api": MagicMock(),
    }


@pytest.fixture
def k8s_store(apis):
    """Store wired to mocked API groups."""
    return KubernetesStore(**apis)


class TestResourceHelpers:
    """Test cases for resource identity helpers."""

    def test_model_identity(self):
        """Test kind, name and namespace of a typed model."""
        secret = build_secret("postgres.url", "tenant-a", "POSTGRES_URL", "jdbc:x")
        assert kind_of(secret) == "Secret"
        assert name_of(secret) == "postgres.url"
        assert namespace_of(secret) == "tenant-a"

    def test_model_without_kind(self):
        """Test that the kind falls back to the model class."""
        job = build_init_job("default", "bash")
        job.kind = None
        assert kind_of(job) == "Job"

    def test_dict_identity(self):
        """Test kind, name and namespace of a raw resource body."""
        body = {"kind": KIND_APPLICATION, "metadata": {"name": "shop", "namespace": "tenant-a"}}
        assert kind_of(body) == KIND_APPLICATION
        assert name_of(body) == "shop"
        assert namespace_of(body) == "tenant-a"


class TestKubernetesStore:
    """Test cases for KubernetesStore class."""

    def test_get_application(self, k8s_store, apis):
        """Test that applications are read through the custom objects API."""
        apis["custom_api"].get_namespaced_custom_object.return_value = {"kind": KIND_APPLICATION}

        result = k8s_store.get(KIND_APPLICATION, "shop", "tenant-a")

        assert result == {"kind": KIND_APPLICATION}
        apis["custom_api"].get_namespaced_custom_object.assert_called_once_with(
            group=API_GROUP,
            version=API_VERSION,
            namespace="tenant-a",
            plural=PLURAL_APPLICATION,
            name="shop",
        )

    def test_get_not_found_returns_none(self, k8s_store, apis):
        """Test that a 404 on get means absent."""
        apis["core_api"].read_namespaced_secret.side_effect = ApiException(status=404, reason="Not Found")

        assert k8s_store.get(KIND_SECRET, "postgres-binding", "tenant-a") is None

    def test_get_error_raises(self, k8s_store, apis):
        """Test that other get failures surface as store errors."""
        apis["apps_api"].read_namespaced_deployment.side_effect = ApiException(
            status=500, reason="Internal Server Error"
        )

        with pytest.raises(StoreOperationError) as exc_info:
            k8s_store.get(KIND_DEPLOYMENT, "shop", "tenant-a")

        assert exc_info.value.status == 500
        assert exc_info.value.operation == "get"
        assert "Deployment tenant-a/shop" in str(exc_info.value)

    def test_create_error_on_conflict(self, k8s_store, apis):
        """Test that a create conflict is not swallowed."""
        apis["batch_api"].create_namespaced_job.side_effect = ApiException(status=409, reason="Conflict")

        with pytest.raises(StoreOperationError) as exc_info:
            k8s_store.create(build_init_job("default", "bash"))

        assert exc_info.value.status == 409

    def test_create_secret(self, k8s_store, apis):
        """Test that secrets are created with the field manager."""
        secret = build_secret("postgres.url", "tenant-a", "POSTGRES_URL", "jdbc:x")

        k8s_store.create(secret)

        apis["core_api"].create_namespaced_secret.assert_called_once_with(
            namespace="tenant-a", body=secret, field_manager=FIELD_MANAGER
        )

    def test_update_secret(self, k8s_store, apis):
        """Test that secrets are replaced in full."""
        secret = build_secret("postgres.url", "tenant-a", "POSTGRES_URL", "jdbc:x")

        k8s_store.update(secret)

        apis["core_api"].replace_namespaced_secret.assert_called_once_with(
            name="postgres.url", namespace="tenant-a", body=secret, field_manager=FIELD_MANAGER
        )

    def test_rate_limit_error_counted(self, k8s_store, apis):
        """Test that throttled calls bump the rate limit metric."""
        apis["core_api"].read_namespaced_secret.side_effect = ApiException(status=429, reason="Too Many Requests")

        with patch("ecommerce_operator.services.store.k8s.metrics") as mock_metrics:
            with pytest.raises(StoreOperationError):
                k8s_store.get(KIND_SECRET, "postgres-binding", "tenant-a")

        mock_metrics.rate_limit_hits_total.labels.assert_called_once_with(api_type="k8s")

    def test_delete_job_in_background(self, k8s_store, apis):
        """Test that jobs are deleted together with their pods in the background."""
        k8s_store.delete("Job", "pg", "default")

        apis["batch_api"].delete_namespaced_job.assert_called_once_with(
            name="pg", namespace="default", propagation_policy="Background"
        )

    def test_delete_missing_is_ignored(self, k8s_store, apis):
        """Test that deleting an absent resource is not an error."""
        apis["batch_api"].delete_namespaced_job.side_effect = ApiException(status=404, reason="Not Found")

        assert k8s_store.delete("Job", "pg", "default") is None

    @pytest.mark.parametrize("operation", ["create", "update"])
    def test_application_is_read_only(self, k8s_store, apis, operation):
        """Test that the store never writes the application resource."""
        body = {"kind": KIND_APPLICATION, "metadata": {"name": "shop", "namespace": "tenant-a"}}

        with pytest.raises(ValueError, match="Unsupported resource kind"):
            getattr(k8s_store, operation)(body)

        assert not apis["custom_api"].method_calls

    def test_unsupported_kind(self, k8s_store):
        """Test that unknown kinds are rejected."""
        with pytest.raises(ValueError, match="Unsupported resource kind"):
            k8s_store.get("ConfigMap", "x", "tenant-a")
