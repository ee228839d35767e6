"""Reconciler for the application deployment."""

from __future__ import annotations

import logging

from .. import metrics
from ..builders.application import Application
from ..builders.deployment import build_deployment
from ..config import OperatorConfig
from ..constants import KIND_DEPLOYMENT
from ..logging import log_resource_event
from ..services.store import ResourceStore
from .decision import Decision, Phase

logger = logging.getLogger(__name__)


class WorkloadReconciler:
    """Ensures the deployment exists and runs the desired number of replicas."""

    def __init__(self, store: ResourceStore, config: OperatorConfig) -> None:
        self.store = store
        self.config = config

    def reconcile(self, application: Application) -> Decision | None:
        """Create the deployment or correct replica drift.

        Returns:
            A requeue decision when something was written, None when the
            deployment already matches the desired state
        """
        found = self.store.get(KIND_DEPLOYMENT, application.name, application.namespace)
        if found is None:
            deployment = build_deployment(application, self.config.workload_image, self.config.workload_port)
            log_resource_event(
                logger,
                resource_kind=KIND_DEPLOYMENT,
                resource_name=application.name,
                namespace=application.namespace,
                event="create",
                reason="WorkloadCreated",
                message="Creating a new Deployment",
                replicas=application.size,
            )
            self.store.create(deployment)
            metrics.resource_writes_total.labels(kind=KIND_DEPLOYMENT, operation="created").inc()
            return Decision.requeue(
                self.config.created_requeue_seconds,
                Phase.ENSURE_WORKLOAD,
                reason="WorkloadCreated",
                message=f"Deployment {application.name} created",
            )

        current = found.spec.replicas
        if current != application.size:
            metrics.drift_detected_total.labels(kind=KIND_DEPLOYMENT, resource_type="replicas").inc()
            log_resource_event(
                logger,
                resource_kind=KIND_DEPLOYMENT,
                resource_name=application.name,
                namespace=application.namespace,
                event="update",
                reason="ReplicasAdjusted",
                message=f"Scaling Deployment from {current} to {application.size} replicas",
            )
            found.spec.replicas = application.size
            self.store.update(found)
            metrics.resource_writes_total.labels(kind=KIND_DEPLOYMENT, operation="updated").inc()
            # Give the pods time to come up before the next pass
            return Decision.requeue(
                self.config.replica_requeue_seconds,
                Phase.ADJUST_REPLICAS,
                reason="ReplicasAdjusted",
                message=f"Deployment {application.name} scaled to {application.size} replicas",
            )

        return None
