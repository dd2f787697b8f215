# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/k8s/submitter.py

from __future__ import annotations

import logging
from typing import Optional, Union

from ..descriptors import (
    ConfigDescriptor,
    EndpointDescriptor,
    WorkloadDescriptor,
    describe,
)
from ..observers.dispatcher import EventBus
from ..observers.events import ResourceExisted, ResourceSubmitted
from .client import ClusterClient
from .errors import AlreadyExists

log = logging.getLogger("swift_driver")

Descriptor = Union[WorkloadDescriptor, EndpointDescriptor, ConfigDescriptor]


def submit(
    api: ClusterClient,
    descriptor: Descriptor,
    *,
    bus: Optional[EventBus] = None,
    run_ctx: Optional[dict] = None,
) -> bool:
    """
    Create the resource a descriptor describes.

    AlreadyExists counts as success and leaves the existing object
    untouched (no patch, no merge). Any other ClusterAPIError propagates.
    Returns True if this call created the resource.

    Deletes are deliberately NOT idempotent; see SwiftStorage.delete_cluster.
    """
    kind, namespace, name = describe(descriptor)

    try:
        if isinstance(descriptor, WorkloadDescriptor):
            api.create_workload(descriptor)
        elif isinstance(descriptor, EndpointDescriptor):
            api.create_endpoint(descriptor)
        else:
            api.create_config(descriptor)
    except AlreadyExists:
        log.debug("%s %s/%s already exists", kind, namespace, name)
        if bus and run_ctx is not None:
            bus.emit(ResourceExisted(kind=kind, name=name, namespace=namespace, **run_ctx))
        return False

    log.debug("created %s %s/%s", kind, namespace, name)
    if bus and run_ctx is not None:
        bus.emit(ResourceSubmitted(kind=kind, name=name, namespace=namespace, **run_ctx))
    return True
