"""Create-or-update of derived resources."""

from __future__ import annotations

from typing import Any

from .. import metrics
from ..services.store import ResourceStore, kind_of, name_of, namespace_of

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"


def upsert(store: ResourceStore, resource: Any) -> str:
    """Create the resource if absent, otherwise overwrite it unconditionally.

    There is no content diffing: an existing resource is always rewritten,
    which keeps repeated runs idempotent at the cost of one write per run.

    Returns:
        CREATED or UPDATED
    """
    kind = kind_of(resource)
    existing = store.get(kind, name_of(resource), namespace_of(resource))
    if existing is None:
        store.create(resource)
        action = CREATED
    else:
        store.update(resource)
        action = UPDATED
    metrics.resource_writes_total.labels(kind=kind, operation=action).inc()
    return action
