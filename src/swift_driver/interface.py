# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/interface.py
from __future__ import annotations

from typing import Optional, Protocol

from .descriptors import WorkloadDescriptor
from .models import StorageCluster, StorageNode, StorageTypeIdentifier


class StorageDriver(Protocol):
    """
    Callbacks the host framework invokes, one cluster/node at a time.

    Failures are raised; a returned object is an updated version the host
    should persist, None means nothing changed.
    """

    def type(self) -> StorageTypeIdentifier: ...
    def init(self) -> None: ...

    # Cluster
    def add_cluster(self, cluster: StorageCluster) -> Optional[StorageCluster]: ...
    def update_cluster(self, old: StorageCluster, new: StorageCluster) -> None: ...
    def delete_cluster(self, cluster: StorageCluster) -> None: ...

    # Node
    def make_deployment(
        self, node: StorageNode, previous: Optional[WorkloadDescriptor] = None
    ) -> WorkloadDescriptor: ...
    def add_node(self, node: StorageNode) -> Optional[StorageNode]: ...
    def update_node(self, node: StorageNode) -> Optional[StorageNode]: ...
    def delete_node(self, node: StorageNode) -> None: ...
