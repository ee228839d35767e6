"""Main entry point for the ECommerce Application Operator."""

from __future__ import annotations

import threading
from typing import Any

import kopf
from werkzeug.serving import make_server

from . import handlers  # noqa: F401
from . import health
from . import logging as structured_logging
from .config import OperatorConfig
from .handlers.shared import load_kube_config
from .tracing import initialize_tracing
from .utils.rate_limit import configure_k8s_rate_limit


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    config = OperatorConfig.from_env()

    # Set up structured JSON logging
    structured_logging.setup_structured_logging(config.log_level)
    initialize_tracing()
    configure_k8s_rate_limit(config.k8s_rate_limit_per_second)
    load_kube_config()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    # Start metrics HTTP server with health check endpoints
    combined_app = health.create_combined_wsgi_app()
    server = make_server("", config.metrics_port, combined_app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()


def main() -> None:
    """Run the operator against all namespaces."""
    kopf.run(clusterwide=True)
