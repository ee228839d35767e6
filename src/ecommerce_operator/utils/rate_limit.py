"""Client-side rate limiting for Kubernetes API calls."""

from __future__ import annotations

import threading
import time
from functools import wraps
from typing import Any, Callable, TypeVar

_F = TypeVar("_F", bound=Callable[..., Any])

_K8S_RATE_LIMIT_PER_SECOND = 10.0

# Track last call time across kopf worker threads
_k8s_last_call_time: float = 0.0
_k8s_lock = threading.Lock()


def configure_k8s_rate_limit(per_second: float) -> None:
    """Set how many Kubernetes API calls per second the decorator allows.

    Raises:
        ValueError: If ``per_second`` is not positive
    """
    global _K8S_RATE_LIMIT_PER_SECOND
    if per_second <= 0:
        raise ValueError(f"Kubernetes rate limit must be positive, got {per_second}")
    _K8S_RATE_LIMIT_PER_SECOND = per_second


def rate_limit_k8s(func: _F) -> _F:
    """Decorator to rate limit Kubernetes API calls.

    Spaces calls at least 1/rate apart to avoid overwhelming the Kubernetes
    API server. The rate is set with configure_k8s_rate_limit. Failures are
    not retried.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        global _k8s_last_call_time
        min_interval = 1.0 / _K8S_RATE_LIMIT_PER_SECOND
        with _k8s_lock:
            time_since_last_call = time.time() - _k8s_last_call_time
            if time_since_last_call < min_interval:
                time.sleep(min_interval - time_since_last_call)
            _k8s_last_call_time = time.time()
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def is_rate_limit_error(status: int | None, message: str = "") -> bool:
    """Check whether an API status code signals server-side throttling.

    Kubernetes API rate limit errors typically return 429 or 503.
    """
    return status == 429 or (status == 503 and "rate limit" in message.lower())
