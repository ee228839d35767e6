"""Builder for the database initialization job."""

from __future__ import annotations

import hashlib
import json

from kubernetes import client

from ..constants import (
    ANNOTATION_INIT_TOKEN,
    FIELD_MANAGER,
    INIT_JOB_COMMAND,
    INIT_JOB_CONTAINER,
    INIT_JOB_NAME,
    KIND_JOB,
    LABEL_MANAGED_BY,
)

# Only used to serialize models; never sends requests
_serializer = client.ApiClient()


def _pod_template(image: str) -> client.V1PodTemplateSpec:
    return client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(labels={"job-name": INIT_JOB_NAME}),
        spec=client.V1PodSpec(
            restart_policy="Never",
            containers=[
                client.V1Container(
                    name=INIT_JOB_CONTAINER,
                    image=image,
                    command=list(INIT_JOB_COMMAND),
                )
            ],
        ),
    )


def init_job_token(image: str) -> str:
    """Compute the idempotency token for the init job content.

    The token is a sha256 over the serialized pod template, so every
    reconciliation of any application derives the same token for the same
    job definition.
    """
    template = _serializer.sanitize_for_serialization(_pod_template(image))
    digest = hashlib.sha256(json.dumps(template, sort_keys=True).encode("utf-8")).hexdigest()
    return digest[:32]


def build_init_job(namespace: str, image: str) -> client.V1Job:
    """Build the singleton database initialization job.

    Args:
        namespace: Namespace for the job (the platform default namespace)
        image: Container image running the init command

    Returns:
        Job model without owner references
    """
    return client.V1Job(
        api_version="batch/v1",
        kind=KIND_JOB,
        metadata=client.V1ObjectMeta(
            name=INIT_JOB_NAME,
            namespace=namespace,
            labels={LABEL_MANAGED_BY: FIELD_MANAGER},
            annotations={ANNOTATION_INIT_TOKEN: init_job_token(image)},
        ),
        spec=client.V1JobSpec(template=_pod_template(image)),
    )
