"""Health check endpoint for the operator."""

from typing import Any

from prometheus_client import make_wsgi_app
from werkzeug.wrappers import Response


def health_check_app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
    """WSGI application for the /healthz and /readyz endpoints."""
    path = environ.get("PATH_INFO", "")

    if path == "/healthz":
        response = Response('{"status":"ok"}', mimetype="application/json", status=200)
    elif path == "/readyz":
        response = Response('{"status":"ready"}', mimetype="application/json", status=200)
    else:
        response = Response('{"error":"not found"}', mimetype="application/json", status=404)

    return response(environ, start_response)


def create_combined_wsgi_app() -> Any:
    """Create a WSGI app that combines metrics and health check endpoints.

    Returns:
        Combined WSGI application
    """
    metrics_app = make_wsgi_app()

    def combined_app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        """WSGI app that routes /healthz and /readyz, delegates /metrics to prometheus."""
        path = environ.get("PATH_INFO", "")
        if path in ("/healthz", "/readyz"):
            return health_check_app(environ, start_response)
        return metrics_app(environ, start_response)

    return combined_app
