# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of one callback invocation
    target: str       # "<namespace>/<name>" of the cluster or node
    context: Optional[str]  # kube-context

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(target: str, context: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": str(uuid.uuid4()),
        "target": target,
        "context": context,
    }


# ---------------------------------------------------------------------
# Callback lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class CallbackStarted(BaseEvent):
    callback: str

@dataclass(frozen=True)
class CallbackSucceeded(BaseEvent):
    callback: str
    duration_ms: int

@dataclass(frozen=True)
class CallbackFailed(BaseEvent):
    callback: str
    error: str


# ---------------------------------------------------------------------
# Resource lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceSubmitted(BaseEvent):
    kind: str
    name: str
    namespace: str

@dataclass(frozen=True)
class ResourceExisted(BaseEvent):
    kind: str
    name: str
    namespace: str

@dataclass(frozen=True)
class ResourceDeleted(BaseEvent):
    kind: str
    name: str
    namespace: str


# ---------------------------------------------------------------------
# Waiter lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class WaiterStarted(BaseEvent):
    name: str
    namespace: str
    replicas: int
    timeout_s: float

@dataclass(frozen=True)
class WaiterSucceeded(BaseEvent):
    name: str

@dataclass(frozen=True)
class WaiterTimedOut(BaseEvent):
    name: str
    timeout_s: float
