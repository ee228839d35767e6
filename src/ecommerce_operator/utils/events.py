"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_CREDENTIALS_PENDING,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_REPLICAS_ADJUSTED,
    EVENT_REASON_VALIDATE_FAILED,
    EVENT_REASON_WORKLOAD_CREATED,
)


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: Any) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: Any, message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_validate_failed(body: Any, message: str) -> None:
    """Emit validation failed event."""
    emit_event(body, EVENT_REASON_VALIDATE_FAILED, message, type_="Warning")


def emit_credentials_pending(body: Any, secret_name: str) -> None:
    """Emit credentials pending event."""
    emit_event(body, EVENT_REASON_CREDENTIALS_PENDING, f"Waiting for credential source {secret_name}")


def emit_workload_created(body: Any, name: str) -> None:
    """Emit workload created event."""
    emit_event(body, EVENT_REASON_WORKLOAD_CREATED, f"Deployment {name} created")


def emit_replicas_adjusted(body: Any, name: str, replicas: int) -> None:
    """Emit replicas adjusted event."""
    emit_event(body, EVENT_REASON_REPLICAS_ADJUSTED, f"Deployment {name} scaled to {replicas} replicas")
