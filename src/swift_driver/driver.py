# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/driver.py

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple

from . import descriptors
from .config.settings import DriverSettings
from .descriptors import WorkloadDescriptor
from .k8s.client import ClusterClient
from .k8s.errors import DependencyUnready
from .k8s.submitter import submit
from .k8s.waiter import wait_until_ready
from .models import StorageCluster, StorageNode, StorageTypeIdentifier
from .observers.dispatcher import EventBus
from .observers.events import (
    new_ctx,
    CallbackStarted,
    CallbackSucceeded,
    CallbackFailed,
    ResourceDeleted,
    WaiterStarted,
    WaiterSucceeded,
    WaiterTimedOut,
)
from .topology import TopologyPublisher

# (api, name, namespace, replicas) -> None, raises DependencyUnready
Waiter = Callable[[ClusterClient, str, str, int], None]


class SwiftStorage:
    """
    Swift storage driver.

    Holds only read-only configuration, so one instance may serve
    callbacks for different clusters/nodes at the same time.
    """

    def __init__(
        self,
        api: ClusterClient,
        settings: Optional[DriverSettings] = None,
        *,
        bus: Optional[EventBus] = None,
        logger: Optional[logging.Logger] = None,
        waiter: Optional[Waiter] = None,
        context: Optional[str] = None,
    ):
        self.api = api
        self.settings = settings or DriverSettings()
        self.bus = bus or EventBus()
        self.log = logger or logging.getLogger("swift_driver")
        self.waiter = waiter or self._default_waiter
        self.context = context
        self.topology = TopologyPublisher(api, bus=self.bus)
        self._initialized = False

    # ------------------------------------------------------------------
    # Driver identity / startup
    # ------------------------------------------------------------------

    def type(self) -> StorageTypeIdentifier:
        return StorageTypeIdentifier.SWIFT

    def init(self) -> None:
        if self._initialized:
            raise RuntimeError("SwiftStorage.init() called twice")
        self._initialized = True
        self.log.debug("swift driver initialized")

    # ------------------------------------------------------------------
    # Cluster callbacks
    # ------------------------------------------------------------------

    def add_cluster(self, cluster: StorageCluster) -> Optional[StorageCluster]:
        """
        Bring up the cluster-wide Swift services, strictly in order:

          1. topology ConfigMap
          2. ring master Deployment, wait until available, then its Service
          3. proxy Deployment, wait until available, then its Service

        The ring master must be ready before the proxy starts since the
        proxy reads its rings at process start. The first failure aborts
        the callback; nothing already created is removed. Re-running is
        safe because creates are idempotent.
        """
        self.log.info("Add cluster %s", cluster.name)
        ns = cluster.namespace

        with self._callback("add_cluster", cluster.namespace, cluster.name) as ctx:
            # Rings
            self.topology.publish(cluster, run_ctx=ctx)
            ring_master = descriptors.ring_master_workload(ns, self.settings)
            self._submit(ring_master, ctx)
            self._wait(ring_master, ctx)
            self._submit(descriptors.ring_master_endpoint(ns, self.settings), ctx)
            self.log.debug("rings master deploy created")

            # Proxy
            proxy = descriptors.proxy_workload(ns, self.settings)
            self._submit(proxy, ctx)
            self._wait(proxy, ctx)
            self.log.debug("swift-proxy pod deployed")

            self._submit(descriptors.proxy_endpoint(ns), ctx)
            self.log.debug("swift proxy service created")

        return None

    def update_cluster(self, old: StorageCluster, new: StorageCluster) -> None:
        # Topology is published once; nothing is republished or patched here.
        self.log.info("Updating cluster %s", old.name)
        if not old.topology_equals(new):
            self.log.info(
                "Topology of cluster %s changed; published topology left as is",
                new.name,
            )

    def delete_cluster(self, cluster: StorageCluster) -> None:
        """
        Delete everything add_cluster created. Unlike creates, a missing
        resource is an error: NotFound is raised and the remaining deletes
        are not attempted.
        """
        self.log.info("Deleting cluster %s", cluster.name)
        ns = cluster.namespace
        steps: List[Tuple[str, str, Callable[[str, str], None]]] = [
            ("Service", descriptors.PROXY_SERVICE, self.api.delete_endpoint),
            ("Service", descriptors.RING_MASTER_SERVICE, self.api.delete_endpoint),
            ("Deployment", descriptors.PROXY_DEPLOYMENT, self.api.delete_workload),
            ("Deployment", descriptors.RING_MASTER_DEPLOYMENT, self.api.delete_workload),
            ("ConfigMap", descriptors.TOPOLOGY_CONFIGMAP, self.api.delete_config),
        ]

        with self._callback("delete_cluster", ns, cluster.name) as ctx:
            for kind, name, delete in steps:
                delete(name, ns)
                self.log.debug("deleted %s %s/%s", kind, ns, name)
                self.bus.emit(ResourceDeleted(kind=kind, name=name, namespace=ns, **ctx))

    # ------------------------------------------------------------------
    # Node callbacks
    # ------------------------------------------------------------------

    def make_deployment(
        self,
        node: StorageNode,
        previous: Optional[WorkloadDescriptor] = None,
    ) -> WorkloadDescriptor:
        """Deployment the host framework submits for a node. No I/O."""
        self.log.debug("Make deployment for node %s", node.name)
        return descriptors.node_workload(node, self.settings, previous)

    def add_node(self, node: StorageNode) -> Optional[StorageNode]:
        """Expose a node whose Deployment is already running."""
        self.log.info("Adding node %s", node.name)
        with self._callback("add_node", node.namespace, node.name) as ctx:
            self._submit(descriptors.node_endpoint(node), ctx)
        return None

    def update_node(self, node: StorageNode) -> Optional[StorageNode]:
        self.log.info("Updating storage node %s", node.name)
        return None

    def delete_node(self, node: StorageNode) -> None:
        self.log.info("Deleting storage node %s", node.name)
        name = descriptors.node_endpoint_name(node)
        with self._callback("delete_node", node.namespace, node.name) as ctx:
            self.api.delete_endpoint(name, node.namespace)
            self.bus.emit(ResourceDeleted(kind="Service", name=name, namespace=node.namespace, **ctx))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _callback(self, callback: str, namespace: str, name: str) -> Iterator[dict]:
        ctx = new_ctx(target=f"{namespace}/{name}", context=self.context)
        self.bus.emit(CallbackStarted(callback=callback, **ctx))
        t0 = time.monotonic()
        try:
            yield ctx
        except Exception as e:
            self.log.error("%s %s/%s failed: %s", callback, namespace, name, e)
            self.bus.emit(CallbackFailed(callback=callback, error=str(e), **ctx))
            raise
        duration_ms = int((time.monotonic() - t0) * 1000)
        self.bus.emit(CallbackSucceeded(callback=callback, duration_ms=duration_ms, **ctx))

    def _submit(self, descriptor, ctx: dict) -> None:
        submit(self.api, descriptor, bus=self.bus, run_ctx=ctx)

    def _wait(self, workload: WorkloadDescriptor, ctx: dict) -> None:
        timeout = self.settings.ready_timeout_seconds
        self.bus.emit(WaiterStarted(
            name=workload.name,
            namespace=workload.namespace,
            replicas=workload.replicas,
            timeout_s=timeout,
            **ctx,
        ))
        try:
            self.waiter(self.api, workload.name, workload.namespace, workload.replicas)
        except DependencyUnready:
            self.bus.emit(WaiterTimedOut(name=workload.name, timeout_s=timeout, **ctx))
            raise
        self.bus.emit(WaiterSucceeded(name=workload.name, **ctx))

    def _default_waiter(self, api: ClusterClient, name: str, namespace: str, replicas: int) -> None:
        wait_until_ready(
            api,
            name,
            namespace,
            replicas,
            timeout_seconds=self.settings.ready_timeout_seconds,
            poll_interval_seconds=self.settings.ready_poll_interval_seconds,
        )
