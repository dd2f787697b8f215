# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/swift_driver/k8s/manifests.py
"""Turn descriptors into kubernetes client model objects."""

from __future__ import annotations

from kubernetes import client

from ..descriptors import (
    ConfigDescriptor,
    ContainerDescriptor,
    EndpointDescriptor,
    VolumeDescriptor,
    WorkloadDescriptor,
)


def _volume(v: VolumeDescriptor) -> client.V1Volume:
    if v.config_map:
        return client.V1Volume(
            name=v.name,
            config_map=client.V1ConfigMapVolumeSource(
                name=v.config_map,
                items=[client.V1KeyToPath(key=k, path=p) for k, p in v.items] or None,
            ),
        )
    return client.V1Volume(
        name=v.name,
        host_path=client.V1HostPathVolumeSource(path=v.host_path),
    )


def _container(c: ContainerDescriptor) -> client.V1Container:
    return client.V1Container(
        name=c.name,
        image=c.image,
        image_pull_policy=c.pull_policy,
        ports=[
            client.V1ContainerPort(container_port=p.port, name=p.name)
            for p in c.ports
        ] or None,
        volume_mounts=[
            client.V1VolumeMount(name=m.name, mount_path=m.mount_path)
            for m in c.mounts
        ] or None,
    )


def deployment(w: WorkloadDescriptor) -> client.V1Deployment:
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(
            name=w.name,
            namespace=w.namespace,
            labels=dict(w.labels) or None,
            annotations=dict(w.annotations) or None,
        ),
        spec=client.V1DeploymentSpec(
            replicas=w.replicas,
            # apps/v1 requires an explicit selector matching the template
            selector=client.V1LabelSelector(match_labels=dict(w.pod_labels)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(
                    name=w.pod_name,
                    labels=dict(w.pod_labels),
                ),
                spec=client.V1PodSpec(
                    node_name=w.node_name,
                    node_selector=dict(w.node_selector) or None,
                    containers=[_container(c) for c in w.containers],
                    volumes=[_volume(v) for v in w.volumes] or None,
                ),
            ),
        ),
    )


def service(e: EndpointDescriptor) -> client.V1Service:
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=e.name,
            namespace=e.namespace,
            labels=dict(e.labels) or None,
            annotations=dict(e.annotations) or None,
        ),
        spec=client.V1ServiceSpec(
            selector=dict(e.selector),
            type=e.service_type,
            cluster_ip=e.cluster_ip,
            ports=[
                client.V1ServicePort(
                    name=p.name,
                    port=p.port,
                    target_port=p.target_port or p.port,
                )
                for p in e.ports
            ],
        ),
    )


def config_map(c: ConfigDescriptor) -> client.V1ConfigMap:
    return client.V1ConfigMap(
        api_version="v1",
        kind="ConfigMap",
        metadata=client.V1ObjectMeta(name=c.name, namespace=c.namespace),
        data=dict(c.data),
    )
