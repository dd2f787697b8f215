# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/config/settings.py

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class DriverSettings(BaseModel):
    """Read-only configuration handed to each SwiftStorage instance."""

    # Images
    default_node_image: str = "thiagodasilva/swift-storage:dev-v1"
    proxy_image: str = "thiagodasilva/swift-proxy:dev-v1"
    ring_master_image: str = "thiagodasilva/swift_ring_master:dev-v1"
    ring_minion_image: str = "thiagodasilva/swift_ring_minion:dev-v5"

    # Networking
    ring_master_cluster_ip: Optional[str] = "10.96.0.248"

    # Readiness waits
    ready_timeout_seconds: float = Field(default=300, gt=0)
    ready_poll_interval_seconds: float = Field(default=2.0, gt=0)

    # Kubernetes context to load (None = current context / in-cluster)
    kube_context: Optional[str] = None

    # Per-run log files (None = ~/.swift_driver/logs)
    log_dir: Optional[Path] = None
