"""The ECommerceApplication reconciliation loop."""

from __future__ import annotations

import logging

from .. import metrics
from ..builders.application import Application, create_application_from_resource
from ..config import OperatorConfig
from ..constants import INIT_JOB_NAME, KIND_APPLICATION, KIND_DEPLOYMENT, KIND_JOB, KIND_SECRET
from ..exceptions import CredentialSourcePending
from ..logging import log_resource_event
from ..services.binding import ConnectionDescriptor, load_binding
from ..services.store import ResourceStore
from ..tracing import trace_span
from .decision import Decision, Phase
from .init_job import REPLACING, InitJobReconciler
from .secrets import SecretProjector
from .workload import WorkloadReconciler

logger = logging.getLogger(__name__)


class ReconciliationLoop:
    """Drives one ECommerceApplication toward its desired state.

    Each call to ``reconcile`` reads everything it needs from the store and
    keeps nothing between calls, so invocations for different applications
    may run concurrently. Errors propagate to the caller without any retry
    here: the caller is expected to redeliver the same trigger with backoff.
    A run interrupted between steps leaves every written resource valid, and
    the next run completes the rest.
    """

    def __init__(self, store: ResourceStore, config: OperatorConfig) -> None:
        self.store = store
        self.config = config
        self.secrets = SecretProjector(store)
        self.init_job = InitJobReconciler(store, config.init_job_namespace, config.init_job_image)
        self.workload = WorkloadReconciler(store, config)

    def reconcile(self, name: str, namespace: str) -> Decision:
        """Run one pass of the state machine for the named application.

        Returns:
            Done, or a requeue request with its delay

        Raises:
            InvalidApplicationError: If the application spec is invalid
            MalformedBindingError: If the credential binding cannot be parsed
            CertificateDecodeError: If the binding certificate cannot be decoded
            StoreOperationError: If any store call fails
        """
        with trace_span("reconcile_application", kind=KIND_APPLICATION, attributes={"application.name": name}):
            obj = self.store.get(KIND_APPLICATION, name, namespace)
            if obj is None:
                # Owned objects are garbage collected with their owner
                log_resource_event(
                    logger,
                    resource_kind=KIND_APPLICATION,
                    resource_name=name,
                    namespace=namespace,
                    event="fetch",
                    reason="NotFound",
                    message="Application not found. Ignoring since object must be deleted",
                )
                return Decision.done(Phase.FETCH_DESIRED, reason="NotFound", message="Application not found")

            application = create_application_from_resource(obj)

            try:
                with trace_span("load_credentials", kind=KIND_SECRET):
                    descriptor = self._load_credentials(application)
            except CredentialSourcePending as e:
                metrics.credential_wait_total.labels(namespace=application.namespace).inc()
                log_resource_event(
                    logger,
                    resource_kind=KIND_APPLICATION,
                    resource_name=application.name,
                    namespace=application.namespace,
                    uid=application.uid,
                    event="wait",
                    reason="CredentialsPending",
                    message="Secret does not exist, wait for a while",
                    secret=e.name,
                )
                return Decision.requeue(
                    self.config.credential_wait_seconds,
                    Phase.AWAIT_CREDENTIAL_SOURCE,
                    reason="CredentialsPending",
                    message=str(e),
                )

            with trace_span("project_secrets", kind=KIND_SECRET):
                self.secrets.reconcile(application, descriptor)

            with trace_span("ensure_init_job", kind=KIND_JOB):
                init_job_action = self.init_job.reconcile(application)

            with trace_span("ensure_workload", kind=KIND_DEPLOYMENT):
                decision = self.workload.reconcile(application)
            if decision is not None:
                return decision

            if init_job_action == REPLACING:
                return Decision.requeue(
                    self.config.created_requeue_seconds,
                    Phase.ENSURE_INIT_JOB,
                    reason="InitJobReplacing",
                    message=f"Job {INIT_JOB_NAME} is being replaced",
                )

            return Decision.done(
                reason="Reconciled",
                message=f"Deployment {application.name} runs {application.size} replicas",
            )

    def _load_credentials(self, application: Application) -> ConnectionDescriptor:
        secret = self.store.get(KIND_SECRET, application.credential_source_name, application.namespace)
        if secret is None:
            raise CredentialSourcePending(application.credential_source_name, application.namespace)
        return load_binding(secret)
