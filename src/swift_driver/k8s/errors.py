# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/k8s/errors.py
from __future__ import annotations

import json
from typing import Optional


class DriverError(RuntimeError):
    """Base class for Swift driver failures."""


class ClusterAPIError(DriverError):
    """
    A failure reported by the cluster-management API for one resource.

    kind/name/namespace identify the resource the call targeted, status is
    the HTTP status the API answered with (None for transport failures).
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        name: str,
        namespace: str,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.namespace = namespace
        self.status = status


class AlreadyExists(ClusterAPIError):
    """Create targeted a name that is already taken."""


class NotFound(ClusterAPIError):
    """Read or delete targeted a resource that does not exist."""


class SubmitError(ClusterAPIError):
    """Any other API failure: permission, validation, transport."""


class DependencyUnready(DriverError, TimeoutError):
    """A workload other steps depend on did not become ready in time."""

    def __init__(
        self,
        *,
        name: str,
        namespace: str,
        wanted: int,
        observed: int,
        timeout_seconds: float,
    ):
        super().__init__(
            f"Timeout waiting for deployment {namespace}/{name}: "
            f"{observed}/{wanted} replicas available after {timeout_seconds}s"
        )
        self.name = name
        self.namespace = namespace
        self.wanted = wanted
        self.observed = observed
        self.timeout_seconds = timeout_seconds


class TopologyUnreadable(DriverError):
    """The topology ConfigMap exists but does not hold a cluster document."""


def _status_reason(exc) -> Optional[str]:
    # The API answers with a v1 Status object; its reason names the failure
    body = getattr(exc, "body", None)
    if not body:
        return None
    try:
        status = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(status, dict):
        return None
    return status.get("reason")


def from_api_exception(exc, *, kind: str, name: str, namespace: str) -> ClusterAPIError:
    """
    Map a kubernetes ApiException onto the typed taxonomy.

    409 with Status reason AlreadyExists -> AlreadyExists, 404 -> NotFound,
    anything else (including a 409 Conflict) -> SubmitError.
    """
    status = getattr(exc, "status", None)
    reason = getattr(exc, "reason", None) or str(exc)
    message = f"{kind} {namespace}/{name}: {reason}"

    if status == 409 and _status_reason(exc) == "AlreadyExists":
        cls = AlreadyExists
    elif status == 404:
        cls = NotFound
    else:
        cls = SubmitError
    return cls(message, kind=kind, name=name, namespace=namespace, status=status)
