# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/__init__.py

from .driver import SwiftStorage
from .interface import StorageDriver
from .models import StorageCluster, StorageNode, StorageTypeIdentifier

__all__ = [
    "SwiftStorage",
    "StorageDriver",
    "StorageCluster",
    "StorageNode",
    "StorageTypeIdentifier",
]
