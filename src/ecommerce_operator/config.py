"""Environment-driven configuration for the operator."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass(frozen=True)
class OperatorConfig:
    """Runtime settings for the reconciliation loop and its host process."""

    metrics_port: int = 8080
    drift_check_interval_seconds: float = 300.0
    # Delay before re-checking a credential source that does not exist yet
    credential_wait_seconds: float = 300.0
    # Delay after scaling a workload so pods can settle before the next pass
    replica_requeue_seconds: float = 60.0
    created_requeue_seconds: float = 5.0
    error_backoff_seconds: float = 15.0
    init_job_namespace: str = "default"
    init_job_image: str = "bash"
    workload_image: str = "quay.io/nheidloff/service-catalog:latest"
    workload_port: int = 8081
    log_level: str = "INFO"
    k8s_rate_limit_per_second: float = 10.0

    @classmethod
    def from_env(cls) -> OperatorConfig:
        """Build a configuration from environment variables.

        Unset variables fall back to the dataclass defaults.

        Raises:
            ValueError: If a variable is not a number or the rate limit is not positive
        """
        defaults = cls()
        rate_limit = _env_float("K8S_RATE_LIMIT_PER_SECOND", defaults.k8s_rate_limit_per_second)
        if rate_limit <= 0:
            raise ValueError(f"K8S_RATE_LIMIT_PER_SECOND must be positive, got {rate_limit}")
        return cls(
            metrics_port=_env_int("METRICS_PORT", defaults.metrics_port),
            drift_check_interval_seconds=_env_float(
                "DRIFT_CHECK_INTERVAL_SECONDS", defaults.drift_check_interval_seconds
            ),
            credential_wait_seconds=_env_float("CREDENTIAL_WAIT_SECONDS", defaults.credential_wait_seconds),
            replica_requeue_seconds=_env_float("REPLICA_REQUEUE_SECONDS", defaults.replica_requeue_seconds),
            created_requeue_seconds=_env_float("CREATED_REQUEUE_SECONDS", defaults.created_requeue_seconds),
            error_backoff_seconds=_env_float("ERROR_BACKOFF_SECONDS", defaults.error_backoff_seconds),
            init_job_namespace=os.getenv("INIT_JOB_NAMESPACE", defaults.init_job_namespace),
            init_job_image=os.getenv("INIT_JOB_IMAGE", defaults.init_job_image),
            workload_image=os.getenv("WORKLOAD_IMAGE", defaults.workload_image),
            workload_port=_env_int("WORKLOAD_PORT", defaults.workload_port),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            k8s_rate_limit_per_second=rate_limit,
        )
