"""Exception taxonomy for the reconciliation loop."""

from __future__ import annotations


class OperatorError(Exception):
    """Base class for all operator errors."""


class CredentialSourcePending(OperatorError):
    """The externally provisioned credential source does not exist yet."""

    def __init__(self, name: str, namespace: str) -> None:
        self.name = name
        self.namespace = namespace
        super().__init__(f"Credential source {name} not found in namespace {namespace}")


class MalformedBindingError(OperatorError):
    """The credential binding payload cannot be decoded."""


class MissingEndpointError(MalformedBindingError):
    """The credential binding lists no database endpoints."""


class CertificateDecodeError(OperatorError):
    """The binding certificate is not valid base64 encoded text."""


class InvalidApplicationError(OperatorError, ValueError):
    """The desired-state object carries an invalid spec."""


class StoreOperationError(OperatorError):
    """A get, create or update against the resource store failed."""

    def __init__(
        self,
        operation: str,
        kind: str,
        name: str,
        namespace: str,
        status: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.operation = operation
        self.kind = kind
        self.name = name
        self.namespace = namespace
        self.status = status
        self.reason = reason
        message = f"Failed to {operation} {kind} {namespace}/{name}"
        if status is not None:
            message += f" (status {status}"
            message += f": {reason})" if reason else ")"
        super().__init__(message)
