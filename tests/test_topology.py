import json

import pytest

from swift_driver.descriptors import TOPOLOGY_CONFIGMAP, TOPOLOGY_KEY
from swift_driver.k8s.errors import DriverError, NotFound, TopologyUnreadable
from swift_driver.models import (
    ObjectMeta,
    StorageCluster,
    StorageClusterSpec,
    StorageNetwork,
    StorageNodeSpec,
)
from swift_driver.topology import TopologyPublisher, load_topology, topology_config


def _rich_cluster():
    return StorageCluster(
        metadata=ObjectMeta(
            name="prod",
            namespace="swift",
            labels={"tier": "gold"},
            annotations={"note": "three zones"},
        ),
        spec=StorageClusterSpec(
            image="example/swift:2.31",
            storage_nodes=[
                StorageNodeSpec(
                    node_name="w1",
                    node_selector={"zone": "a"},
                    storage_network=StorageNetwork(ips=["10.0.0.1"]),
                    devices=["/dev/sdb", "/dev/sdc"],
                ),
                StorageNodeSpec(node_name="w2", directories=["/srv/node"]),
            ],
            options={"replicas": 3, "part_power": 10, "zones": ["a", "b"]},
        ),
    )


def test_topology_config_single_key(cluster):
    cfg = topology_config(cluster)
    assert cfg.name == TOPOLOGY_CONFIGMAP
    assert cfg.namespace == "swift"
    assert list(cfg.data) == [TOPOLOGY_KEY]
    assert json.loads(cfg.data[TOPOLOGY_KEY])["metadata"]["name"] == "demo"


def test_publish_and_read_back_round_trip(api):
    original = _rich_cluster()
    TopologyPublisher(api).publish(original)

    restored = load_topology(api, "swift")
    assert restored == original
    assert restored.spec.storage_nodes[0].devices == ["/dev/sdb", "/dev/sdc"]
    assert restored.spec.options["zones"] == ["a", "b"]


def test_publish_is_not_republished(api, cluster):
    pub = TopologyPublisher(api)
    pub.publish(cluster)
    pub.publish(_rich_cluster().model_copy(update={"metadata": cluster.metadata}))
    assert load_topology(api, "swift") == cluster


def test_load_topology_missing(api):
    with pytest.raises(NotFound):
        load_topology(api, "swift")


def test_load_topology_without_key(api):
    from swift_driver.descriptors import ConfigDescriptor
    api.create_config(ConfigDescriptor(name=TOPOLOGY_CONFIGMAP, namespace="swift", data={}))
    with pytest.raises(TopologyUnreadable) as exc:
        load_topology(api, "swift")
    assert isinstance(exc.value, DriverError)
    assert TOPOLOGY_KEY in str(exc.value)


def test_load_topology_with_garbage(api):
    from swift_driver.descriptors import ConfigDescriptor
    api.create_config(ConfigDescriptor(name=TOPOLOGY_CONFIGMAP, namespace="swift", data={TOPOLOGY_KEY: "not json"}))
    with pytest.raises(TopologyUnreadable):
        load_topology(api, "swift")
