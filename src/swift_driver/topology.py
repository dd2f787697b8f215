# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/topology.py

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .descriptors import ConfigDescriptor, TOPOLOGY_CONFIGMAP, TOPOLOGY_KEY
from .k8s.client import ClusterClient
from .k8s.errors import TopologyUnreadable
from .k8s.submitter import submit
from .models import StorageCluster
from .observers.dispatcher import EventBus

log = logging.getLogger("swift_driver")


def topology_config(cluster: StorageCluster) -> ConfigDescriptor:
    """The whole cluster, as JSON, under a single key."""
    return ConfigDescriptor(
        name=TOPOLOGY_CONFIGMAP,
        namespace=cluster.namespace,
        data={TOPOLOGY_KEY: cluster.model_dump_json()},
    )


def load_topology(api: ClusterClient, namespace: str) -> StorageCluster:
    """
    Read the published topology back.

    Raises NotFound if it was never published and TopologyUnreadable if the
    ConfigMap lacks the key or holds something that is not a cluster.
    """
    data = api.read_config(TOPOLOGY_CONFIGMAP, namespace)
    if TOPOLOGY_KEY not in data:
        raise TopologyUnreadable(f"ConfigMap {namespace}/{TOPOLOGY_CONFIGMAP} has no {TOPOLOGY_KEY} key")
    try:
        return StorageCluster.model_validate_json(data[TOPOLOGY_KEY])
    except ValidationError as e:
        raise TopologyUnreadable(f"ConfigMap {namespace}/{TOPOLOGY_CONFIGMAP}: {e}") from e


class TopologyPublisher:
    def __init__(self, api: ClusterClient, bus: Optional[EventBus] = None):
        self.api = api
        self.bus = bus

    def publish(self, cluster: StorageCluster, run_ctx: Optional[dict] = None) -> None:
        # Created once; an existing topology is left alone
        created = submit(self.api, topology_config(cluster), bus=self.bus, run_ctx=run_ctx)
        if created:
            log.debug("published topology for cluster %s", cluster.name)
