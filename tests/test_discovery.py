"""Tests for cluster discovery."""

import pytest

from kubectl_multi.shared.cluster import (
    ClusterInfo,
    ClusterInventory,
    ClusterRole,
    discover,
    discover_clusters,
    get_target_namespace,
)
from kubectl_multi.shared.errors import ConfigError, DiscoveryError


def test_discovery_classifies_in_configuration_order(kubeconfig_factory):
    path = kubeconfig_factory(["a", "wds-1", "its-hub", "b"], current="wds-1")

    clusters = discover_clusters(path, "its-hub")

    assert clusters == [
        ClusterInfo("a", ClusterRole.UNCLASSIFIED),
        ClusterInfo("wds-1", ClusterRole.WORKLOAD),
        ClusterInfo("its-hub", ClusterRole.CONTROL_PLANE),
        ClusterInfo("b", ClusterRole.UNCLASSIFIED),
    ]


def test_discovery_carries_current_context(kubeconfig_factory):
    path = kubeconfig_factory(["a", "wds-1"], current="wds-1")

    inventory = discover(path, "its1")

    assert inventory.current_context == "wds-1"
    assert inventory.current == ClusterInfo("wds-1", ClusterRole.WORKLOAD)
    assert inventory.control_plane is None
    assert set(inventory.by_context) == {"a", "wds-1"}


def test_discovery_honours_context_override(kubeconfig_factory):
    path = kubeconfig_factory(["a", "b"], current="a")
    assert discover(path, "", context_override="b").current_context == "b"


def test_current_context_not_in_config_is_unmatched(kubeconfig_factory):
    path = kubeconfig_factory(["a", "b"], current="gone")
    inventory = discover(path)
    assert inventory.current_context == "gone"
    assert inventory.current is None


def test_discovery_is_repeatable(kubeconfig_factory):
    path = kubeconfig_factory(["c3", "wds2", "c1", "its1"], current="c1")
    assert discover_clusters(path, "its1") == discover_clusters(path, "its1")


def test_discovery_wraps_config_errors(tmp_path):
    with pytest.raises(DiscoveryError) as excinfo:
        discover(str(tmp_path / "missing"), "its1")
    assert isinstance(excinfo.value.__cause__, ConfigError)
    assert str(excinfo.value).startswith("failed to discover clusters:")


def test_discovery_wraps_undecodable_kubeconfig(tmp_path):
    path = tmp_path / "config"
    path.write_bytes(b"contexts:\n- name: caf\xff\n")
    with pytest.raises(DiscoveryError) as excinfo:
        discover(str(path), "its1")
    assert isinstance(excinfo.value.__cause__, ConfigError)


def test_empty_configuration_discovers_nothing(tmp_path):
    path = tmp_path / "config"
    path.write_text("apiVersion: v1\nkind: Config\ncontexts: []\n")
    assert discover_clusters(str(path), "its1") == []


def test_inventory_rejects_duplicate_contexts():
    with pytest.raises(ValueError):
        ClusterInventory(clusters=[ClusterInfo("a"), ClusterInfo("a")])


@pytest.mark.parametrize(
    "namespace, expected",
    [("", "default"), ("kube-system", "kube-system"), (" myns ", " myns ")],
)
def test_get_target_namespace(namespace, expected):
    assert get_target_namespace(namespace) == expected
