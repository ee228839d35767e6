"""Reconciler for the database initialization job."""

from __future__ import annotations

import logging

from .. import metrics
from ..builders.application import Application
from ..builders.job import build_init_job
from ..constants import ANNOTATION_INIT_TOKEN, INIT_JOB_NAME, KIND_JOB
from ..logging import log_resource_event
from ..services.store import ResourceStore
from .upsert import CREATED, UNCHANGED

logger = logging.getLogger(__name__)

# The existing job runs other content; it is being deleted and will be
# created again on a later pass
REPLACING = "replacing"


class InitJobReconciler:
    """Ensures the cluster-wide init job exists and runs the current content.

    The job lives in the platform namespace, not the tenant's, and carries no
    owner reference. Every application targets the same job, so concurrent
    tenants may race on it; they all converge on the same token, so the race
    does not change the outcome.

    Job pod templates are immutable. A job whose token differs from the
    current one is deleted in the background and recreated once it is gone.
    """

    def __init__(self, store: ResourceStore, namespace: str, image: str) -> None:
        self.store = store
        self.namespace = namespace
        self.image = image

    def reconcile(self, application: Application) -> str:
        """Create the init job, or start replacing a job with stale content.

        Returns:
            CREATED, UNCHANGED when the job already carries the current
            token, or REPLACING while a stale job is being deleted
        """
        desired = build_init_job(self.namespace, self.image)
        token = desired.metadata.annotations[ANNOTATION_INIT_TOKEN]

        existing = self.store.get(KIND_JOB, INIT_JOB_NAME, self.namespace)
        if existing is None:
            self.store.create(desired)
            action = CREATED
        elif existing.metadata.deletion_timestamp is not None:
            # Deletion already requested; the name is free once it completes
            action = REPLACING
        elif (existing.metadata.annotations or {}).get(ANNOTATION_INIT_TOKEN) == token:
            action = UNCHANGED
        else:
            self.store.delete(KIND_JOB, INIT_JOB_NAME, self.namespace)
            action = REPLACING

        if action != UNCHANGED:
            metrics.resource_writes_total.labels(kind=KIND_JOB, operation=action).inc()
        log_resource_event(
            logger,
            resource_kind=KIND_JOB,
            resource_name=INIT_JOB_NAME,
            namespace=self.namespace,
            event=action,
            reason="InitJobEnsured",
            message=f"Job {INIT_JOB_NAME} {action}",
            application=application.name,
            tenant=application.tenant_name,
        )
        return action

