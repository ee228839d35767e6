"""Builders for derived Kubernetes resources."""

from .application import Application, create_application_from_resource
from .deployment import build_deployment, labels_for_application
from .job import build_init_job, init_job_token
from .secret import build_secret

__all__ = [
    "Application",
    "create_application_from_resource",
    "build_deployment",
    "labels_for_application",
    "build_init_job",
    "init_job_token",
    "build_secret",
]
