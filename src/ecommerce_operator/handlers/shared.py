"""Shared utilities for handlers."""

from __future__ import annotations

from kubernetes import config

from ..services.store import KubernetesStore


def load_kube_config() -> None:
    """Load in-cluster configuration, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


def get_store() -> KubernetesStore:
    """Get a resource store bound to the configured Kubernetes cluster.

    Returns:
        KubernetesStore instance
    """
    return KubernetesStore()
