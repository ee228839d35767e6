"""Resource store capability used by the reconcilers."""

from .base import ResourceStore, kind_of, name_of, namespace_of
from .k8s import KubernetesStore

__all__ = ["ResourceStore", "KubernetesStore", "kind_of", "name_of", "namespace_of"]
