# tests/conftest.py
from __future__ import annotations

from typing import Dict, List, Set, Tuple

import pytest

from swift_driver.config.settings import DriverSettings
from swift_driver.descriptors import ConfigDescriptor, EndpointDescriptor, WorkloadDescriptor
from swift_driver.k8s.errors import AlreadyExists, NotFound, SubmitError
from swift_driver.models import ObjectMeta, StorageCluster, StorageNetwork, StorageNode, StorageNodeSpec


class FakeClusterClient:
    """
    In-memory cluster API. Records every call in `ops` as
    (verb, kind, name) and enforces name+namespace uniqueness.
    """

    def __init__(self):
        self.objects: Dict[Tuple[str, str, str], object] = {}
        self.ops: List[Tuple[str, str, str]] = []
        self.unready: Set[str] = set()
        self.failures: Dict[Tuple[str, str, str], Exception] = {}

    # helpers ---------------------------------------------------------
    def _maybe_fail(self, verb, kind, name):
        exc = self.failures.get((verb, kind, name))
        if exc is not None:
            raise exc

    def _create(self, kind, desc):
        self.ops.append(("create", kind, desc.name))
        self._maybe_fail("create", kind, desc.name)
        key = (kind, desc.namespace, desc.name)
        if key in self.objects:
            raise AlreadyExists(f"{kind} {desc.name} exists", kind=kind, name=desc.name,
                                namespace=desc.namespace, status=409)
        self.objects[key] = desc

    def _delete(self, kind, name, namespace):
        self.ops.append(("delete", kind, name))
        self._maybe_fail("delete", kind, name)
        key = (kind, namespace, name)
        if key not in self.objects:
            raise NotFound(f"{kind} {name} not found", kind=kind, name=name,
                           namespace=namespace, status=404)
        del self.objects[key]

    def names(self, kind):
        return sorted(n for (k, _, n) in self.objects if k == kind)

    def fail(self, verb, kind, name, exc=None):
        self.failures[(verb, kind, name)] = exc or SubmitError(
            "forbidden", kind=kind, name=name, namespace="default", status=403
        )

    # ClusterClient -----------------------------------------------------
    def create_workload(self, workload: WorkloadDescriptor) -> None:
        self._create("Deployment", workload)

    def create_endpoint(self, endpoint: EndpointDescriptor) -> None:
        self._create("Service", endpoint)

    def create_config(self, cfg: ConfigDescriptor) -> None:
        self._create("ConfigMap", cfg)

    def delete_workload(self, name, namespace):
        self._delete("Deployment", name, namespace)

    def delete_endpoint(self, name, namespace):
        self._delete("Service", name, namespace)

    def delete_config(self, name, namespace):
        self._delete("ConfigMap", name, namespace)

    def read_config(self, name, namespace):
        key = ("ConfigMap", namespace, name)
        if key not in self.objects:
            raise NotFound(f"ConfigMap {name} not found", kind="ConfigMap", name=name,
                           namespace=namespace, status=404)
        return dict(self.objects[key].data)

    def read_available_replicas(self, name, namespace):
        self.ops.append(("read", "Deployment", name))
        key = ("Deployment", namespace, name)
        if key not in self.objects:
            raise NotFound(f"Deployment {name} not found", kind="Deployment", name=name,
                           namespace=namespace, status=404)
        if name in self.unready:
            return 0
        return self.objects[key].replicas


@pytest.fixture
def api():
    return FakeClusterClient()


@pytest.fixture
def settings():
    return DriverSettings(ready_timeout_seconds=0.05, ready_poll_interval_seconds=0.01)


@pytest.fixture
def cluster():
    return StorageCluster(
        metadata=ObjectMeta(name="demo", namespace="swift"),
    )


@pytest.fixture
def node():
    return StorageNode(
        metadata=ObjectMeta(
            name="node-a",
            namespace="swift",
            labels={"zone": "z1"},
            annotations={"owner": "storage-team"},
        ),
        spec=StorageNodeSpec(
            node_name="worker-1",
            node_selector={"disk": "ssd"},
            storage_network=StorageNetwork(ips=["10.96.10.1", "10.96.10.2"]),
        ),
    )
