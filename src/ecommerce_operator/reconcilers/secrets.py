"""Projection of a credential binding into normalized database secrets."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass

from ..builders.application import Application
from ..builders.secret import build_secret
from ..constants import (
    KIND_SECRET,
    POSTGRES_URL_TEMPLATE,
    SECRET_CERTIFICATE,
    SECRET_PASSWORD,
    SECRET_URL,
    SECRET_USERNAME,
)
from ..exceptions import CertificateDecodeError, MissingEndpointError
from ..logging import log_resource_event
from ..services.binding import ConnectionDescriptor
from ..services.store import ResourceStore
from .upsert import upsert

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedSecret:
    """A single-key secret derived from the credential binding.

    Text values are stored as stringData; the certificate is kept as raw
    bytes so binary (DER) content survives unchanged.
    """

    name: str
    namespace: str
    key: str
    value: str | bytes


def decode_certificate(certificate_base64: str) -> bytes:
    """Decode the base64 certificate of a binding into its raw bytes.

    Line breaks and other whitespace in wrapped base64 are ignored; any other
    character outside the base64 alphabet is an error.
    """
    try:
        return base64.b64decode("".join(certificate_base64.split()), validate=True)
    except binascii.Error as e:
        raise CertificateDecodeError("Binding certificate is not valid base64") from e


def postgres_url(descriptor: ConnectionDescriptor) -> str:
    """Build the JDBC URL from the first endpoint of the binding."""
    if not descriptor.hosts:
        raise MissingEndpointError("Binding lists no postgres hosts")
    endpoint = descriptor.hosts[0]
    return POSTGRES_URL_TEMPLATE.format(
        hostname=endpoint.hostname,
        port=endpoint.port,
        database=descriptor.database,
    )


def project_secrets(descriptor: ConnectionDescriptor, namespace: str) -> list[NormalizedSecret]:
    """Derive the four normalized secrets for a namespace.

    All values are computed before anything is written, so a binding that
    cannot be projected leaves the store untouched.

    Raises:
        CertificateDecodeError: If the certificate cannot be decoded
        MissingEndpointError: If the binding has no hosts
    """
    values = [
        (SECRET_USERNAME, descriptor.username),
        (SECRET_PASSWORD, descriptor.password),
        (SECRET_CERTIFICATE, decode_certificate(descriptor.certificate_base64)),
        (SECRET_URL, postgres_url(descriptor)),
    ]
    return [
        NormalizedSecret(name=name, namespace=namespace, key=key, value=value)
        for (name, key), value in values
    ]


class SecretProjector:
    """Keeps the normalized database secrets of a namespace up to date."""

    def __init__(self, store: ResourceStore) -> None:
        self.store = store

    def reconcile(self, application: Application, descriptor: ConnectionDescriptor) -> dict[str, str]:
        """Upsert every normalized secret into the application namespace.

        Returns:
            Mapping of secret name to the upsert action taken
        """
        actions = {}
        for secret in project_secrets(descriptor, application.namespace):
            action = upsert(
                self.store,
                build_secret(secret.name, secret.namespace, secret.key, secret.value),
            )
            actions[secret.name] = action
            log_resource_event(
                logger,
                resource_kind=KIND_SECRET,
                resource_name=secret.name,
                namespace=secret.namespace,
                event=action,
                reason="SecretProjected",
                message=f"Target secret {secret.name} {action}",
                application=application.name,
            )
        return actions
