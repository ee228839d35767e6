"""Reconciliation logic for ECommerceApplication resources."""

from .decision import Decision, Phase
from .init_job import InitJobReconciler
from .loop import ReconciliationLoop
from .secrets import NormalizedSecret, SecretProjector, project_secrets
from .upsert import upsert
from .workload import WorkloadReconciler

__all__ = [
    "Decision",
    "Phase",
    "InitJobReconciler",
    "ReconciliationLoop",
    "NormalizedSecret",
    "SecretProjector",
    "project_secrets",
    "upsert",
    "WorkloadReconciler",
]
