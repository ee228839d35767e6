"""Handler for ECommerceApplication CRD."""

from __future__ import annotations

import threading
from typing import Any, Callable

import kopf

from ..config import OperatorConfig
from ..constants import API_GROUP_VERSION, KIND_APPLICATION
from ..exceptions import InvalidApplicationError
from ..reconcilers import Decision, Phase, ReconciliationLoop
from ..services.store import ResourceStore
from ..utils.conditions import (
    set_credentials_pending_condition,
    set_ready_condition,
    set_reconcile_failed_condition,
)
from ..utils.context import with_correlation_id
from ..utils.errors import sanitize_exception
from ..utils.events import (
    emit_credentials_pending,
    emit_replicas_adjusted,
    emit_workload_created,
)
from .base import BaseHandler
from .shared import get_store


class ApplicationHandler(BaseHandler):
    """Handler for ECommerceApplication resources.

    Translates loop decisions into kopf semantics: done returns normally, a
    requeue raises kopf.TemporaryError with the requested delay, and any
    other failure propagates so kopf retries the handler after its backoff.
    """

    def __init__(
        self,
        config: OperatorConfig | None = None,
        store_factory: Callable[[], ResourceStore] = get_store,
    ):
        """Initialize application handler."""
        super().__init__(KIND_APPLICATION)
        self.config = config or OperatorConfig.from_env()
        self.store_factory = store_factory
        self._loop: ReconciliationLoop | None = None
        self._loop_lock = threading.Lock()

    @property
    def loop(self) -> ReconciliationLoop:
        """Reconciliation loop shared by every trigger of this handler.

        The store is created on first use, after kopf startup has loaded the
        cluster configuration.
        """
        with self._loop_lock:
            if self._loop is None:
                self._loop = ReconciliationLoop(self.store_factory(), self.config)
            return self._loop

    def reconcile(
        self,
        body: Any,
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile ECommerceApplication resource."""
        name = meta["name"]
        namespace = meta.get("namespace", "default")
        generation = meta.get("generation", 0)
        conditions = status.get("conditions", [])

        with with_correlation_id():
            try:
                decision = self.loop.reconcile(name, namespace)
            except InvalidApplicationError as e:
                self.handle_validation_error(body, meta, str(e))
            except Exception as e:
                conditions = set_reconcile_failed_condition(
                    conditions, True, f"Reconciliation failed: {sanitize_exception(e)}", generation
                )
                conditions = set_ready_condition(conditions, False, "Reconciliation failed", generation)
                self.update_resource_status(patch, meta, False, {"conditions": conditions})
                raise

            self.apply_decision(body, meta, conditions, patch, decision)

    def apply_decision(
        self,
        body: Any,
        meta: dict[str, Any],
        conditions: list[dict[str, Any]],
        patch: kopf.Patch,
        decision: Decision,
    ) -> None:
        """Record a decision in status and events, then hand it to kopf.

        Raises:
            kopf.TemporaryError: When the decision asks for a requeue
        """
        name = meta["name"]
        generation = meta.get("generation", 0)
        spec_size = body.get("spec", {}).get("size")

        if decision.phase == Phase.FETCH_DESIRED:
            # The resource vanished between the event and the fetch
            return

        pending = decision.phase == Phase.AWAIT_CREDENTIAL_SOURCE
        conditions = set_credentials_pending_condition(
            conditions,
            pending,
            decision.message if pending else "Credential source found",
            generation,
        )
        conditions = set_reconcile_failed_condition(conditions, False, "Reconciliation succeeded", generation)
        conditions = set_ready_condition(
            conditions,
            decision.is_done,
            decision.message or decision.reason,
            generation,
        )
        status_data: dict[str, Any] = {"phase": decision.phase.value, "conditions": conditions}
        if not pending:
            status_data["replicas"] = spec_size
        self.update_resource_status(patch, meta, decision.is_done, status_data)

        if decision.phase == Phase.AWAIT_CREDENTIAL_SOURCE:
            emit_credentials_pending(body, body.get("spec", {}).get("postgresSecretName", ""))
            self.log_warning(meta, decision.message, event="wait", reason=decision.reason)
        elif decision.phase == Phase.ENSURE_WORKLOAD:
            emit_workload_created(body, name)
        elif decision.phase == Phase.ADJUST_REPLICAS:
            emit_replicas_adjusted(body, name, spec_size)

        if not decision.is_done:
            raise kopf.TemporaryError(decision.message or decision.reason, delay=decision.requeue_after)

        self.log_info(meta, decision.message or "Reconciled", event="reconciled", reason=decision.reason)


# Global handler instance
_handler = ApplicationHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_APPLICATION, backoff=_handler.config.error_backoff_seconds)
@kopf.on.update(API_GROUP_VERSION, KIND_APPLICATION, backoff=_handler.config.error_backoff_seconds)
@kopf.on.resume(API_GROUP_VERSION, KIND_APPLICATION, backoff=_handler.config.error_backoff_seconds)
def handle_application(
    body: kopf.Body,
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle ECommerceApplication resource reconciliation."""
    _handler.reconcile_with_metrics(body, meta, lambda: _handler.reconcile(body, meta, status, patch))


@kopf.timer(
    API_GROUP_VERSION,
    KIND_APPLICATION,
    interval=_handler.config.drift_check_interval_seconds,
    initial_delay=_handler.config.drift_check_interval_seconds,
    backoff=_handler.config.error_backoff_seconds,
)
def check_application_drift(
    body: kopf.Body,
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Periodically re-run reconciliation to repair drift of derived resources."""
    _handler.reconcile_with_metrics(body, meta, lambda: _handler.reconcile(body, meta, status, patch))
