"""Base resource store interface."""

from __future__ import annotations

from typing import Any, Protocol


class ResourceStore(Protocol):
    """Protocol defining the get/create/update/delete primitives of the cluster store."""

    def get(self, kind: str, name: str, namespace: str) -> Any | None:
        """Fetch a resource, returning None when it does not exist."""
        ...

    def create(self, resource: Any) -> Any:
        """Create a resource and return the stored object."""
        ...

    def update(self, resource: Any) -> Any:
        """Overwrite an existing resource and return the stored object."""
        ...

    def delete(self, kind: str, name: str, namespace: str) -> None:
        """Delete a resource in the background; a missing resource is not an error."""
        ...


def _metadata(resource: Any) -> Any:
    if isinstance(resource, dict):
        return resource.get("metadata", {})
    return resource.metadata


def kind_of(resource: Any) -> str:
    """Return the kind of a model object or raw resource body."""
    if isinstance(resource, dict):
        return resource["kind"]
    # Typed models read back from the API may leave kind unset; V1Secret -> Secret
    return resource.kind or type(resource).__name__[2:]


def name_of(resource: Any) -> str:
    """Return the metadata name of a model object or raw resource body."""
    metadata = _metadata(resource)
    return metadata["name"] if isinstance(metadata, dict) else metadata.name


def namespace_of(resource: Any) -> str:
    """Return the metadata namespace of a model object or raw resource body."""
    metadata = _metadata(resource)
    return metadata["namespace"] if isinstance(metadata, dict) else metadata.namespace
