# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/models.py

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StorageTypeIdentifier(str, Enum):
    SWIFT = "swift"


class ObjectMeta(BaseModel):
    name: str
    namespace: str = "default"
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class StorageNetwork(BaseModel):
    ips: List[str] = Field(default_factory=list)


class StorageNodeSpec(BaseModel):
    image: Optional[str] = None
    node_name: Optional[str] = None                  # pin the pod to this host
    node_selector: Dict[str, str] = Field(default_factory=dict)
    storage_network: Optional[StorageNetwork] = None
    devices: List[str] = Field(default_factory=list)
    directories: List[str] = Field(default_factory=list)


class StorageNode(BaseModel):
    """
    One storage daemon. Maps to exactly one Deployment and one Service.
    The host framework creates these; the driver only reacts to them.
    """
    metadata: ObjectMeta
    spec: StorageNodeSpec = Field(default_factory=StorageNodeSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def first_ip(self) -> Optional[str]:
        net = self.spec.storage_network
        if net and net.ips:
            return net.ips[0]
        return None


class StorageClusterSpec(BaseModel):
    type: StorageTypeIdentifier = StorageTypeIdentifier.SWIFT
    image: Optional[str] = None
    storage_nodes: List[StorageNodeSpec] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)  # opaque to the driver


class StorageCluster(BaseModel):
    metadata: ObjectMeta
    spec: StorageClusterSpec = Field(default_factory=StorageClusterSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def topology_equals(self, other: "StorageCluster") -> bool:
        """True when both clusters describe the same member topology."""
        return self.spec.model_dump(mode="json") == other.spec.model_dump(mode="json")
