# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/k8s/waiter.py
from __future__ import annotations

import logging
import time
from typing import Callable

from .client import ClusterClient
from .errors import DependencyUnready, NotFound

log = logging.getLogger("swift_driver")


def wait_until_ready(
    api: ClusterClient,
    name: str,
    namespace: str,
    replicas: int,
    *,
    timeout_seconds: float = 300,
    poll_interval_seconds: float = 2.0,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Block until Deployment name in namespace has at least `replicas`
    available replicas.

    Args:
        api: cluster client to poll
        name: deployment name
        namespace: namespace to check
        replicas: available replicas required
        timeout_seconds: max time to wait
        poll_interval_seconds: pause between polls

    A deployment the API does not know yet counts as 0 available.
    Raises DependencyUnready once the deadline passes.
    """
    end = clock() + timeout_seconds
    available = 0

    while True:
        try:
            available = api.read_available_replicas(name, namespace)
        except NotFound:
            available = 0

        if available >= replicas:
            log.debug("deployment %s/%s ready (%d/%d)", namespace, name, available, replicas)
            return

        remaining = end - clock()
        if remaining <= 0:
            break
        log.debug(
            "waiting for deployment %s/%s (%d/%d available)",
            namespace, name, available, replicas,
        )
        sleep(min(poll_interval_seconds, remaining))

    raise DependencyUnready(
        name=name,
        namespace=namespace,
        wanted=replicas,
        observed=available,
        timeout_seconds=timeout_seconds,
    )
