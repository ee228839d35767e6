"""Builder for the application workload."""

from __future__ import annotations

from kubernetes import client

from ..constants import (
    API_GROUP_VERSION,
    KIND_APPLICATION,
    KIND_DEPLOYMENT,
    LABEL_APP,
    LABEL_APP_VALUE,
    LABEL_APPLICATION_NAME,
    WORKLOAD_CONTAINER,
)
from .application import Application


def labels_for_application(name: str) -> dict[str, str]:
    """Return the labels selecting the pods of the given application."""
    return {LABEL_APP: LABEL_APP_VALUE, LABEL_APPLICATION_NAME: name}


def owner_reference_for(application: Application) -> client.V1OwnerReference:
    """Controller reference making the application own a derived resource."""
    return client.V1OwnerReference(
        api_version=API_GROUP_VERSION,
        kind=KIND_APPLICATION,
        name=application.name,
        uid=application.uid,
        controller=True,
        block_owner_deletion=True,
    )


def build_deployment(application: Application, image: str, port: int) -> client.V1Deployment:
    """Build the deployment running the application.

    Args:
        application: Desired state providing name, namespace and size
        image: Container image of the service
        port: Container port exposed by the service

    Returns:
        Deployment model owned by the application
    """
    labels = labels_for_application(application.name)

    return client.V1Deployment(
        api_version="apps/v1",
        kind=KIND_DEPLOYMENT,
        metadata=client.V1ObjectMeta(
            name=application.name,
            namespace=application.namespace,
            owner_references=[owner_reference_for(application)],
        ),
        spec=client.V1DeploymentSpec(
            replicas=application.size,
            selector=client.V1LabelSelector(match_labels=labels),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=labels),
                spec=client.V1PodSpec(
                    containers=[
                        client.V1Container(
                            name=WORKLOAD_CONTAINER,
                            image=image,
                            ports=[client.V1ContainerPort(container_port=port, name=WORKLOAD_CONTAINER)],
                        )
                    ],
                ),
            ),
        ),
    )
