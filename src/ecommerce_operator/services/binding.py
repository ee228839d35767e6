"""Decoding of externally provisioned Postgres credential bindings."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any

from ..constants import CREDENTIAL_SOURCE_DATA_KEY
from ..exceptions import MalformedBindingError


@dataclass(frozen=True)
class Endpoint:
    """A database host and port."""

    hostname: str = ""
    port: int = 0


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Normalized Postgres connection details taken from a binding."""

    username: str = ""
    password: str = ""
    certificate_base64: str = ""
    hosts: tuple[Endpoint, ...] = field(default_factory=tuple)
    database: str = ""


def _object(data: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedBindingError(f"{path}{key} must be an object")
    return value


def _string(data: dict[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedBindingError(f"{path}{key} must be a string")
    return value


def _port(data: dict[str, Any], path: str) -> int:
    value = data.get("port")
    if value is None:
        return 0
    # bool is an int subclass but never a valid port
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedBindingError(f"{path}port must be an integer")
    return value


def _hosts(data: dict[str, Any]) -> tuple[Endpoint, ...]:
    value = data.get("hosts")
    if value is None:
        return ()
    if not isinstance(value, list):
        raise MalformedBindingError("postgres.hosts must be a list")

    hosts = []
    for idx, entry in enumerate(value):
        path = f"postgres.hosts[{idx}]."
        if not isinstance(entry, dict):
            raise MalformedBindingError(f"postgres.hosts[{idx}] must be an object")
        hosts.append(Endpoint(hostname=_string(entry, "hostname", path), port=_port(entry, path)))
    return tuple(hosts)


def parse_binding(payload: bytes) -> ConnectionDescriptor:
    """Decode a binding payload into a connection descriptor.

    Unknown fields are ignored and missing objects or fields decode to empty
    values; only undecodable data or fields of the wrong type are rejected.

    Args:
        payload: JSON document as produced by the cloud service binding

    Returns:
        Parsed connection descriptor

    Raises:
        MalformedBindingError: If the payload is not a JSON object matching
            the binding schema
    """
    try:
        document = json.loads(payload)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedBindingError(f"Binding payload is not valid JSON: {e.__class__.__name__}") from e

    if not isinstance(document, dict):
        raise MalformedBindingError("Binding payload must be a JSON object")

    postgres = _object(document, "postgres", "")
    authentication = _object(postgres, "authentication", "postgres.")
    certificate = _object(postgres, "certificate", "postgres.")

    return ConnectionDescriptor(
        username=_string(authentication, "username", "postgres.authentication."),
        password=_string(authentication, "password", "postgres.authentication."),
        certificate_base64=_string(certificate, "certificate_base64", "postgres.certificate."),
        hosts=_hosts(postgres),
        database=_string(postgres, "database", "postgres."),
    )


def load_binding(secret: Any) -> ConnectionDescriptor:
    """Parse the binding stored in a credential source secret.

    Args:
        secret: V1Secret holding the binding under the connection data key

    Returns:
        Parsed connection descriptor

    Raises:
        MalformedBindingError: If the key is missing or the payload is invalid
    """
    data = secret.data or {}
    if CREDENTIAL_SOURCE_DATA_KEY not in data:
        raise MalformedBindingError(f"Credential source has no '{CREDENTIAL_SOURCE_DATA_KEY}' key")

    value = data[CREDENTIAL_SOURCE_DATA_KEY]
    if isinstance(value, bytes):
        return parse_binding(value)
    try:
        return parse_binding(base64.b64decode(value, validate=True))
    except binascii.Error as e:
        raise MalformedBindingError("Credential source data is not valid base64") from e
