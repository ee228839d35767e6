"""Shared fixtures for unit tests."""

from __future__ import annotations

import base64
import copy
import json
from typing import Any

import pytest

from ecommerce_operator.config import OperatorConfig
from ecommerce_operator.constants import API_GROUP_VERSION, KIND_APPLICATION, KIND_SECRET
from ecommerce_operator.services.store import kind_of, name_of, namespace_of
from kubernetes import client


class FakeStore:
    """In-memory resource store recording every write."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str, str], Any] = {}
        self.writes: list[tuple[str, str, str, str]] = []

    def _key(self, resource: Any) -> tuple[str, str, str]:
        return (kind_of(resource), namespace_of(resource), name_of(resource))

    def put(self, resource: Any) -> None:
        """Seed a resource without recording a write."""
        self.objects[self._key(resource)] = copy.deepcopy(resource)

    def get(self, kind: str, name: str, namespace: str) -> Any | None:
        obj = self.objects.get((kind, namespace, name))
        return copy.deepcopy(obj)

    def create(self, resource: Any) -> Any:
        key = self._key(resource)
        assert key not in self.objects, f"{key} already exists"
        self.objects[key] = copy.deepcopy(resource)
        self.writes.append(("create", *key))
        return resource

    def update(self, resource: Any) -> Any:
        key = self._key(resource)
        assert key in self.objects, f"{key} does not exist"
        self.objects[key] = copy.deepcopy(resource)
        self.writes.append(("update", *key))
        return resource

    def delete(self, kind: str, name: str, namespace: str) -> None:
        self.objects.pop((kind, namespace, name), None)
        self.writes.append(("delete", kind, namespace, name))

    def of_kind(self, kind: str) -> dict[tuple[str, str], Any]:
        return {(ns, name): obj for (k, ns, name), obj in self.objects.items() if k == kind}


def make_binding(
    username: str = "u",
    password: str = "p",
    certificate: str = "CERT",
    hosts: list[dict[str, Any]] | None = None,
    database: str = "appdb",
) -> dict[str, Any]:
    """Build a binding document as produced by the cloud service."""
    return {
        "cli": {"bin": "psql", "type": "cli"},
        "postgres": {
            "authentication": {"method": "direct", "username": username, "password": password},
            "certificate": {
                "certificate_base64": base64.b64encode(certificate.encode()).decode(),
                "name": "cert",
            },
            "hosts": hosts if hosts is not None else [{"hostname": "db.local", "port": 5432}],
            "database": database,
            "scheme": "postgres",
        },
    }


def make_credential_secret(name: str, namespace: str, payload: bytes) -> client.V1Secret:
    """Build a credential source secret as read back from the API server."""
    return client.V1Secret(
        api_version="v1",
        kind=KIND_SECRET,
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        data={"connection": base64.b64encode(payload).decode()},
    )


def make_application(
    name: str = "shop",
    namespace: str = "tenant-a",
    size: int = 3,
    secret_name: str = "postgres-binding",
) -> dict[str, Any]:
    """Build an ECommerceApplication resource body."""
    return {
        "apiVersion": API_GROUP_VERSION,
        "kind": KIND_APPLICATION,
        "metadata": {"name": name, "namespace": namespace, "uid": f"uid-{name}", "generation": 2},
        "spec": {"size": size, "postgresSecretName": secret_name, "tenantName": "tenant-a"},
    }


@pytest.fixture
def store() -> FakeStore:
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def config() -> OperatorConfig:
    """Default operator configuration."""
    return OperatorConfig()


@pytest.fixture
def seeded_store(store: FakeStore) -> FakeStore:
    """Store holding an application and its credential source."""
    store.put(make_application())
    store.put(make_credential_secret("postgres-binding", "tenant-a", json.dumps(make_binding()).encode()))
    return store
