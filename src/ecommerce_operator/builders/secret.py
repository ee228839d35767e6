"""Builder for normalized credential secrets."""

from __future__ import annotations

import base64

from kubernetes import client

from ..constants import FIELD_MANAGER, KIND_SECRET, LABEL_MANAGED_BY


def build_secret(name: str, namespace: str, key: str, value: str | bytes) -> client.V1Secret:
    """Build an Opaque secret holding a single value.

    Args:
        name: Secret name
        namespace: Secret namespace
        key: The only key of the secret
        value: Plain-text value, stored as stringData, or raw bytes, stored
            base64 encoded under data

    Returns:
        Secret model ready to be created or to overwrite an existing one
    """
    secret = client.V1Secret(
        api_version="v1",
        kind=KIND_SECRET,
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels={LABEL_MANAGED_BY: FIELD_MANAGER},
        ),
        immutable=False,
        type="Opaque",
    )
    if isinstance(value, bytes):
        secret.data = {key: base64.b64encode(value).decode("ascii")}
    else:
        secret.string_data = {key: value}
    return secret
