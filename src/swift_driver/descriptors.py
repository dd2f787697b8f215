# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/descriptors.py
"""
Desired-state descriptions of the Swift workloads, endpoints and config
objects. Everything in here is pure: same input, same descriptor, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .config.settings import DriverSettings
from .models import StorageNode

# Labels
DRIVER_LABEL = "quartermaster"
ROLE_LABEL = "swift"
NODE_ROLE_LABEL = "swift_storage"

# Fixed resource names
PROXY_DEPLOYMENT = "swift-proxy-deploy"
PROXY_SERVICE = "swiftservice"
RING_MASTER_DEPLOYMENT = "swift-ring-master-deploy"
RING_MASTER_SERVICE = "swift-ring-master-svc"
TOPOLOGY_CONFIGMAP = "swift-cluster-configmap"
TOPOLOGY_KEY = "cluster.json"
RING_MINION_CONTAINER = "swift-ring-minion"

# Well-known ports
OBJECT_PORT = 6200
CONTAINER_PORT = 6201
ACCOUNT_PORT = 6202
PROXY_PORT = 8080
RING_MASTER_PORT = 8090

CLUSTER_IP = "ClusterIP"
NODE_PORT = "NodePort"


def _freeze(obj, *names: str) -> None:
    # Read-only copies; the caller keeps its own dicts
    for name in names:
        object.__setattr__(obj, name, MappingProxyType(dict(getattr(obj, name))))


@dataclass(frozen=True)
class PortDescriptor:
    port: int
    name: Optional[str] = None
    target_port: Optional[int] = None   # defaults to port


@dataclass(frozen=True)
class MountDescriptor:
    name: str
    mount_path: str


@dataclass(frozen=True)
class VolumeDescriptor:
    """Exactly one of host_path / config_map is set."""
    name: str
    host_path: Optional[str] = None
    config_map: Optional[str] = None
    items: Tuple[Tuple[str, str], ...] = ()   # (key, path) pairs


@dataclass(frozen=True)
class ContainerDescriptor:
    name: str
    image: str
    ports: Tuple[PortDescriptor, ...] = ()
    mounts: Tuple[MountDescriptor, ...] = ()
    pull_policy: str = "IfNotPresent"


@dataclass(frozen=True)
class WorkloadDescriptor:
    name: str
    namespace: str
    containers: Tuple[ContainerDescriptor, ...]
    pod_labels: Mapping[str, str] = field(hash=False)
    labels: Mapping[str, str] = field(default_factory=dict, hash=False)
    annotations: Mapping[str, str] = field(default_factory=dict, hash=False)
    replicas: int = 1
    volumes: Tuple[VolumeDescriptor, ...] = ()
    pod_name: Optional[str] = None
    node_name: Optional[str] = None
    node_selector: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze(self, "pod_labels", "labels", "annotations", "node_selector")

    @property
    def image(self) -> str:
        return self.containers[0].image


@dataclass(frozen=True)
class EndpointDescriptor:
    name: str
    namespace: str
    selector: Mapping[str, str] = field(hash=False)
    ports: Tuple[PortDescriptor, ...]
    service_type: str = CLUSTER_IP
    cluster_ip: Optional[str] = None
    labels: Mapping[str, str] = field(default_factory=dict, hash=False)
    annotations: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze(self, "selector", "labels", "annotations")


@dataclass(frozen=True)
class ConfigDescriptor:
    name: str
    namespace: str
    data: Mapping[str, str] = field(hash=False)

    def __post_init__(self):
        _freeze(self, "data")


# ---------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------

def _swift_etc(volume: str, host_path: str) -> Tuple[VolumeDescriptor, MountDescriptor]:
    return (
        VolumeDescriptor(name=volume, host_path=host_path),
        MountDescriptor(name=volume, mount_path="/etc/swift"),
    )


def _ring_minion(settings: DriverSettings, mount: MountDescriptor) -> ContainerDescriptor:
    return ContainerDescriptor(
        name=RING_MINION_CONTAINER,
        image=settings.ring_minion_image,
        mounts=(mount,),
    )


# ---------------------------------------------------------------------
# Storage nodes
# ---------------------------------------------------------------------

def node_pod_labels(node: StorageNode) -> Dict[str, str]:
    # Drivers *should* add a quartermaster label
    return {
        DRIVER_LABEL: node.name,
        NODE_ROLE_LABEL: node.name,
    }


def node_workload(
    node: StorageNode,
    settings: DriverSettings,
    previous: Optional[WorkloadDescriptor] = None,
) -> WorkloadDescriptor:
    """
    Deployment for one storage node. The node object is not modified;
    the default image is applied to the descriptor only. Annotations of
    ``previous`` win over the node's so in-place updates keep them.
    """
    image = node.spec.image or settings.default_node_image
    volume, mount = _swift_etc("swift-storage-etc", "/var/lib/swift_storage/etc")

    labels = dict(node.metadata.labels)
    labels[DRIVER_LABEL] = node.name

    annotations = dict(node.metadata.annotations)
    if previous is not None:
        annotations = dict(previous.annotations)

    storage = ContainerDescriptor(
        name=node.name,
        image=image,
        mounts=(mount,),
        ports=(
            PortDescriptor(port=OBJECT_PORT, name="object"),
            PortDescriptor(port=CONTAINER_PORT, name="container"),
            PortDescriptor(port=ACCOUNT_PORT, name="account"),
        ),
    )

    return WorkloadDescriptor(
        name=node.name,
        namespace=node.namespace,
        labels=labels,
        annotations=annotations,
        pod_labels=node_pod_labels(node),
        containers=(storage, _ring_minion(settings, mount)),
        volumes=(volume,),
        node_name=node.spec.node_name,
        node_selector=dict(node.spec.node_selector),
    )


def node_endpoint_name(node: StorageNode) -> str:
    return f"{node.name}-svc"


def node_endpoint(node: StorageNode) -> EndpointDescriptor:
    return EndpointDescriptor(
        name=node_endpoint_name(node),
        namespace=node.namespace,
        labels={ROLE_LABEL: "swift-storage"},
        annotations={"description": "Exposes Swift Storage Service"},
        selector={NODE_ROLE_LABEL: node.name},
        cluster_ip=node.first_ip(),
        service_type=CLUSTER_IP,
        ports=(
            PortDescriptor(port=ACCOUNT_PORT, name="account"),
            PortDescriptor(port=CONTAINER_PORT, name="container"),
            PortDescriptor(port=OBJECT_PORT, name="object"),
        ),
    )


# ---------------------------------------------------------------------
# Proxy
# ---------------------------------------------------------------------

def proxy_workload(namespace: str, settings: DriverSettings) -> WorkloadDescriptor:
    volume, mount = _swift_etc("swift-proxy-etc", "/var/lib/swift_proxy/etc")
    labels = {ROLE_LABEL: "swift-proxy", DRIVER_LABEL: "swift"}

    proxy = ContainerDescriptor(
        name="swift-proxy",
        image=settings.proxy_image,
        mounts=(mount,),
        ports=(PortDescriptor(port=PROXY_PORT),),
    )

    return WorkloadDescriptor(
        name=PROXY_DEPLOYMENT,
        namespace=namespace,
        labels=dict(labels),
        annotations={"description": "Deployment spec for Swift proxy"},
        pod_labels=dict(labels),
        pod_name="swift-proxy-pod",
        containers=(proxy, _ring_minion(settings, mount)),
        volumes=(volume,),
    )


def proxy_endpoint(namespace: str) -> EndpointDescriptor:
    return EndpointDescriptor(
        name=PROXY_SERVICE,
        namespace=namespace,
        labels={ROLE_LABEL: "swift-service"},
        annotations={"description": "Exposes Swift Proxy Service"},
        selector={ROLE_LABEL: "swift-proxy"},
        service_type=NODE_PORT,
        ports=(PortDescriptor(port=PROXY_PORT),),
    )


# ---------------------------------------------------------------------
# Ring master
# ---------------------------------------------------------------------

def ring_master_workload(namespace: str, settings: DriverSettings) -> WorkloadDescriptor:
    labels = {ROLE_LABEL: "swift-ring-master", DRIVER_LABEL: "swift"}

    # cluster.json from the topology ConfigMap, seen as cluster_topology.json
    volume = VolumeDescriptor(
        name="config-swift-cluster",
        config_map=TOPOLOGY_CONFIGMAP,
        items=((TOPOLOGY_KEY, "cluster_topology.json"),),
    )
    mount = MountDescriptor(name="config-swift-cluster", mount_path="/etc/swift_config")

    master = ContainerDescriptor(
        name="swift-ring-master",
        image=settings.ring_master_image,
        mounts=(mount,),
        ports=(PortDescriptor(port=RING_MASTER_PORT),),
    )

    return WorkloadDescriptor(
        name=RING_MASTER_DEPLOYMENT,
        namespace=namespace,
        labels=dict(labels),
        annotations={"description": "Deployment spec for Swift Ring Master"},
        pod_labels=dict(labels),
        pod_name="swift-ring-master-pod",
        containers=(master,),
        volumes=(volume,),
    )


def ring_master_endpoint(namespace: str, settings: DriverSettings) -> EndpointDescriptor:
    return EndpointDescriptor(
        name=RING_MASTER_SERVICE,
        namespace=namespace,
        labels={ROLE_LABEL: "swift-ring-master-svc"},
        annotations={"description": "Exposes Swift Ring Master Service"},
        selector={ROLE_LABEL: "swift-ring-master"},
        cluster_ip=settings.ring_master_cluster_ip,
        service_type=CLUSTER_IP,
        ports=(PortDescriptor(port=RING_MASTER_PORT),),
    )


def describe(descriptor) -> Tuple[str, str, str]:
    """(kind, namespace, name) of any descriptor, for logs and events."""
    if isinstance(descriptor, WorkloadDescriptor):
        kind = "Deployment"
    elif isinstance(descriptor, EndpointDescriptor):
        kind = "Service"
    elif isinstance(descriptor, ConfigDescriptor):
        kind = "ConfigMap"
    else:
        raise TypeError(f"Unknown descriptor type: {type(descriptor).__name__}")
    return kind, descriptor.namespace, descriptor.name
