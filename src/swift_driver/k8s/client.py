# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/k8s/client.py
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Protocol, TypeVar

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from ..descriptors import ConfigDescriptor, EndpointDescriptor, WorkloadDescriptor
from . import manifests
from .errors import SubmitError, from_api_exception

log = logging.getLogger("swift_driver")

T = TypeVar("T")


class ClusterClient(Protocol):
    """
    What the driver needs from the cluster-management API.

    Every method raises AlreadyExists / NotFound / SubmitError from
    swift_driver.k8s.errors; nothing else leaks out.
    """

    def create_workload(self, workload: WorkloadDescriptor) -> None: ...
    def create_endpoint(self, endpoint: EndpointDescriptor) -> None: ...
    def create_config(self, cfg: ConfigDescriptor) -> None: ...

    def delete_workload(self, name: str, namespace: str) -> None: ...
    def delete_endpoint(self, name: str, namespace: str) -> None: ...
    def delete_config(self, name: str, namespace: str) -> None: ...

    def read_config(self, name: str, namespace: str) -> Dict[str, str]: ...
    def read_available_replicas(self, name: str, namespace: str) -> int: ...


def load_kube_config(kube_context: Optional[str] = None) -> None:
    """
    Load credentials: the named kube context if given, otherwise the
    in-cluster service account, falling back to the default kubeconfig.
    """
    if kube_context:
        config.load_kube_config(context=kube_context)
        return
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


class KubernetesClusterClient:
    """ClusterClient backed by the official kubernetes python client."""

    def __init__(
        self,
        apps: Optional[client.AppsV1Api] = None,
        core: Optional[client.CoreV1Api] = None,
    ):
        self.apps = apps or client.AppsV1Api()
        self.core = core or client.CoreV1Api()

    @classmethod
    def connect(cls, kube_context: Optional[str] = None) -> "KubernetesClusterClient":
        load_kube_config(kube_context)
        return cls()

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    def _call(self, kind: str, name: str, namespace: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except ApiException as exc:
            raise from_api_exception(exc, kind=kind, name=name, namespace=namespace) from exc
        except urllib3.exceptions.HTTPError as exc:
            raise SubmitError(
                f"{kind} {namespace}/{name}: transport error: {exc}",
                kind=kind,
                name=name,
                namespace=namespace,
            ) from exc

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_workload(self, workload: WorkloadDescriptor) -> None:
        body = manifests.deployment(workload)
        self._call(
            "Deployment", workload.name, workload.namespace,
            lambda: self.apps.create_namespaced_deployment(namespace=workload.namespace, body=body),
        )

    def create_endpoint(self, endpoint: EndpointDescriptor) -> None:
        body = manifests.service(endpoint)
        self._call(
            "Service", endpoint.name, endpoint.namespace,
            lambda: self.core.create_namespaced_service(namespace=endpoint.namespace, body=body),
        )

    def create_config(self, cfg: ConfigDescriptor) -> None:
        body = manifests.config_map(cfg)
        self._call(
            "ConfigMap", cfg.name, cfg.namespace,
            lambda: self.core.create_namespaced_config_map(namespace=cfg.namespace, body=body),
        )

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_workload(self, name: str, namespace: str) -> None:
        # Background propagation: ReplicaSets and pods go with the Deployment
        body = client.V1DeleteOptions(propagation_policy="Background")
        self._call(
            "Deployment", name, namespace,
            lambda: self.apps.delete_namespaced_deployment(name=name, namespace=namespace, body=body),
        )

    def delete_endpoint(self, name: str, namespace: str) -> None:
        self._call(
            "Service", name, namespace,
            lambda: self.core.delete_namespaced_service(name=name, namespace=namespace),
        )

    def delete_config(self, name: str, namespace: str) -> None:
        self._call(
            "ConfigMap", name, namespace,
            lambda: self.core.delete_namespaced_config_map(name=name, namespace=namespace),
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_config(self, name: str, namespace: str) -> Dict[str, str]:
        cm = self._call(
            "ConfigMap", name, namespace,
            lambda: self.core.read_namespaced_config_map(name=name, namespace=namespace),
        )
        return dict(cm.data or {})

    def read_available_replicas(self, name: str, namespace: str) -> int:
        d = self._call(
            "Deployment", name, namespace,
            lambda: self.apps.read_namespaced_deployment_status(name=name, namespace=namespace),
        )
        if d.status is None:
            return 0
        return d.status.available_replicas or 0
