"""Kubernetes API implementation of the resource store."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from kubernetes import client

from ... import metrics
from ...constants import (
    API_GROUP,
    API_VERSION,
    FIELD_MANAGER,
    KIND_APPLICATION,
    KIND_DEPLOYMENT,
    KIND_JOB,
    KIND_SECRET,
    PLURAL_APPLICATION,
)
from ...exceptions import StoreOperationError
from ...utils.rate_limit import is_rate_limit_error, rate_limit_k8s
from .base import kind_of, name_of, namespace_of

logger = logging.getLogger(__name__)


class KubernetesStore:
    """Resource store backed by the Kubernetes API server.

    Every failure other than a 404 on get or delete is surfaced as a
    StoreOperationError; nothing is retried here; the caller relies on the
    event source redelivering the trigger.
    """

    def __init__(
        self,
        core_api: client.CoreV1Api | None = None,
        batch_api: client.BatchV1Api | None = None,
        apps_api: client.AppsV1Api | None = None,
        custom_api: client.CustomObjectsApi | None = None,
    ) -> None:
        self.core_api = core_api or client.CoreV1Api()
        self.batch_api = batch_api or client.BatchV1Api()
        self.apps_api = apps_api or client.AppsV1Api()
        self.custom_api = custom_api or client.CustomObjectsApi()

    def _call(
        self,
        operation: str,
        kind: str,
        name: str,
        namespace: str,
        fn: Callable[..., Any],
        /,
        **kwargs: Any,
    ) -> Any:
        metric_op = f"{operation}_{kind.lower()}"
        start_time = time.time()
        try:
            result = rate_limit_k8s(fn)(**kwargs)
            metrics.api_call_total.labels(api_type="k8s", operation=metric_op, result="success").inc()
            return result
        except client.exceptions.ApiException as e:
            if operation in ("get", "delete") and e.status == 404:
                metrics.api_call_total.labels(api_type="k8s", operation=metric_op, result="not_found").inc()
                return None
            metrics.api_call_total.labels(api_type="k8s", operation=metric_op, result="error").inc()
            if is_rate_limit_error(e.status, str(e.reason or "")):
                metrics.rate_limit_hits_total.labels(api_type="k8s").inc()
            logger.debug(f"Kubernetes API {operation} {kind} {namespace}/{name} failed with status {e.status}")
            raise StoreOperationError(operation, kind, name, namespace, status=e.status, reason=e.reason) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=metric_op).observe(duration)

    def get(self, kind: str, name: str, namespace: str) -> Any | None:
        """Fetch a resource, returning None when it does not exist."""
        if kind == KIND_APPLICATION:
            return self._call(
                "get", kind, name, namespace,
                self.custom_api.get_namespaced_custom_object,
                group=API_GROUP,
                version=API_VERSION,
                namespace=namespace,
                plural=PLURAL_APPLICATION,
                name=name,
            )
        readers = {
            KIND_SECRET: self.core_api.read_namespaced_secret,
            KIND_JOB: self.batch_api.read_namespaced_job,
            KIND_DEPLOYMENT: self.apps_api.read_namespaced_deployment,
        }
        return self._call("get", kind, name, namespace, self._lookup(readers, kind), name=name, namespace=namespace)

    def create(self, resource: Any) -> Any:
        """Create a resource and return the stored object."""
        kind = kind_of(resource)
        name = name_of(resource)
        namespace = namespace_of(resource)
        creators = {
            KIND_SECRET: self.core_api.create_namespaced_secret,
            KIND_JOB: self.batch_api.create_namespaced_job,
            KIND_DEPLOYMENT: self.apps_api.create_namespaced_deployment,
        }
        return self._call(
            "create", kind, name, namespace,
            self._lookup(creators, kind),
            namespace=namespace,
            body=resource,
            field_manager=FIELD_MANAGER,
        )

    def update(self, resource: Any) -> Any:
        """Overwrite an existing resource and return the stored object."""
        kind = kind_of(resource)
        name = name_of(resource)
        namespace = namespace_of(resource)
        replacers = {
            KIND_SECRET: self.core_api.replace_namespaced_secret,
            KIND_JOB: self.batch_api.replace_namespaced_job,
            KIND_DEPLOYMENT: self.apps_api.replace_namespaced_deployment,
        }
        return self._call(
            "update", kind, name, namespace,
            self._lookup(replacers, kind),
            name=name,
            namespace=namespace,
            body=resource,
            field_manager=FIELD_MANAGER,
        )

    def delete(self, kind: str, name: str, namespace: str) -> None:
        """Delete a resource and its dependents in the background.

        A resource that is already gone is not an error.
        """
        deleters = {
            KIND_SECRET: self.core_api.delete_namespaced_secret,
            KIND_JOB: self.batch_api.delete_namespaced_job,
            KIND_DEPLOYMENT: self.apps_api.delete_namespaced_deployment,
        }
        self._call(
            "delete", kind, name, namespace,
            self._lookup(deleters, kind),
            name=name,
            namespace=namespace,
            propagation_policy="Background",
        )

    @staticmethod
    def _lookup(table: dict[str, Callable[..., Any]], kind: str) -> Callable[..., Any]:
        try:
            return table[kind]
        except KeyError:
            raise ValueError(f"Unsupported resource kind: {kind}") from None
