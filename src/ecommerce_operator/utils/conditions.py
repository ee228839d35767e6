"""Status conditions of ECommerceApplication resources."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..constants import COND_CREDENTIALS_PENDING, COND_READY, COND_RECONCILE_FAILED

# Condition type -> (reason when True, reason when False)
_REASONS = {
    COND_READY: ("Ready", "NotReady"),
    COND_CREDENTIALS_PENDING: ("CredentialSourceMissing", "CredentialSourceFound"),
    COND_RECONCILE_FAILED: ("ReconcileFailed", "ReconcileSucceeded"),
}


def update_condition(
    conditions: list[dict[str, Any]],
    condition_type: str,
    status: str,
    reason: str,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Return a copy of ``conditions`` with one condition replaced or appended.

    The input list is not modified. ``lastTransitionTime`` is carried over
    from the previous condition of the same type when its status is unchanged.

    Args:
        conditions: Current conditions from the resource status
        condition_type: Condition type, e.g. "Ready"
        status: "True", "False" or "Unknown"
        reason: CamelCase reason
        message: Human-readable message
        observed_generation: Resource generation the condition refers to

    Returns:
        New list of conditions
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    condition = {
        "type": condition_type,
        "status": status,
        "reason": reason,
        "message": message,
        "lastTransitionTime": timestamp,
    }
    if observed_generation is not None:
        condition["observedGeneration"] = observed_generation

    result = []
    replaced = False
    for current in conditions:
        if not replaced and current.get("type") == condition_type:
            if current.get("status") == status:
                condition["lastTransitionTime"] = current.get("lastTransitionTime", timestamp)
            result.append(condition)
            replaced = True
        else:
            result.append(dict(current))
    if not replaced:
        result.append(condition)
    return result


def _set_flag(
    conditions: list[dict[str, Any]],
    condition_type: str,
    flag: bool,
    message: str,
    observed_generation: int | None,
) -> list[dict[str, Any]]:
    when_true, when_false = _REASONS[condition_type]
    return update_condition(
        conditions,
        condition_type,
        str(flag),
        when_true if flag else when_false,
        message,
        observed_generation,
    )


def set_ready_condition(
    conditions: list[dict[str, Any]],
    status: bool,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Set the Ready condition."""
    return _set_flag(conditions, COND_READY, status, message, observed_generation)


def set_credentials_pending_condition(
    conditions: list[dict[str, Any]],
    pending: bool,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Set the CredentialsPending condition."""
    return _set_flag(conditions, COND_CREDENTIALS_PENDING, pending, message, observed_generation)


def set_reconcile_failed_condition(
    conditions: list[dict[str, Any]],
    failed: bool,
    message: str,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Set the ReconcileFailed condition."""
    return _set_flag(conditions, COND_RECONCILE_FAILED, failed, message, observed_generation)
