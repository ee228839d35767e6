"""Builder for the ECommerceApplication desired state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import InvalidApplicationError


@dataclass(frozen=True)
class Application:
    """Desired state declared by an ECommerceApplication resource."""

    name: str
    namespace: str
    uid: str
    size: int
    credential_source_name: str
    tenant_name: str = ""
    generation: int = 0


def create_application_from_resource(obj: dict[str, Any]) -> Application:
    """Create an Application from an ECommerceApplication resource body.

    Args:
        obj: Custom resource body with metadata and spec

    Returns:
        Validated desired state

    Raises:
        InvalidApplicationError: If size or postgresSecretName are invalid
    """
    meta = obj.get("metadata", {})
    spec = obj.get("spec", {})

    size = spec.get("size")
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise InvalidApplicationError("spec.size must be a non-negative integer")

    credential_source_name = spec.get("postgresSecretName")
    if not credential_source_name:
        raise InvalidApplicationError("spec.postgresSecretName is required")

    return Application(
        name=meta["name"],
        namespace=meta.get("namespace", "default"),
        uid=meta.get("uid", ""),
        size=size,
        credential_source_name=credential_source_name,
        tenant_name=spec.get("tenantName", ""),
        generation=meta.get("generation", 0),
    )
