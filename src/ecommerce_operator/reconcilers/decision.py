"""Scheduling decisions returned by a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """Step of the reconciliation state machine a run finished in."""

    FETCH_DESIRED = "FetchDesired"
    AWAIT_CREDENTIAL_SOURCE = "AwaitCredentialSource"
    PROJECT_SECRETS = "ProjectSecrets"
    ENSURE_INIT_JOB = "EnsureInitJob"
    ENSURE_WORKLOAD = "EnsureWorkload"
    ADJUST_REPLICAS = "AdjustReplicas"
    DONE = "Done"


@dataclass(frozen=True)
class Decision:
    """Outcome of one reconciliation run.

    A decision is either done (no re-trigger needed) or a request to run
    again after ``requeue_after`` seconds. Failures are not decisions: they
    are raised, and the event source redelivers the trigger with its own
    backoff.
    """

    phase: Phase
    requeue_after: float | None = None
    reason: str = "Reconciled"
    message: str = ""

    @property
    def is_done(self) -> bool:
        return self.requeue_after is None

    @classmethod
    def done(cls, phase: Phase = Phase.DONE, reason: str = "Reconciled", message: str = "") -> Decision:
        return cls(phase=phase, reason=reason, message=message)

    @classmethod
    def requeue(cls, delay: float, phase: Phase, reason: str, message: str = "") -> Decision:
        return cls(phase=phase, requeue_after=delay, reason=reason, message=message)
