"""Tests for extracting running versions from a cluster response."""

import pytest

from cluster.state import ObservedCluster, ObservedImage, observed_from_cluster


def _pool(name, image_name="flatcar", version="3815.2.1"):
    return {"name": name, "machine": {"image": {"name": image_name, "version": version}}}


def test_ok():
    observed = observed_from_cluster({
        "kubernetes": {"version": "1.25.2"},
        "nodepools": [_pool("foo"), _pool("bar", "ubuntu", "2204.1.0")],
    })
    assert observed.kubernetes_version == "1.25.2"
    assert observed.node_pool_images == {
        "foo": ObservedImage(name="flatcar", version="3815.2.1"),
        "bar": ObservedImage(name="ubuntu", version="2204.1.0"),
    }


@pytest.mark.parametrize("response", [None, {}])
def test_missing_cluster(response):
    assert observed_from_cluster(response) == ObservedCluster()


def test_missing_kubernetes():
    observed = observed_from_cluster({"nodepools": [_pool("foo")]})
    assert observed.kubernetes_version is None
    assert "foo" in observed.node_pool_images


def test_missing_nodepools():
    observed = observed_from_cluster({"kubernetes": {"version": "1.25.2"}})
    assert observed.node_pool_images == {}


@pytest.mark.parametrize("pool", [
    {"machine": {"image": {"name": "flatcar", "version": "1.0.0"}}},
    {"name": "foo"},
    {"name": "foo", "machine": {}},
    {"name": "foo", "machine": {"image": {"version": "1.0.0"}}},
])
def test_incomplete_pools_are_skipped(pool):
    assert observed_from_cluster({"nodepools": [pool]}).node_pool_images == {}


def test_pool_without_image_version_is_kept():
    observed = observed_from_cluster({"nodepools": [_pool("foo", version=None)]})
    assert observed.image_for("foo") == ObservedImage(name="flatcar", version=None)


def test_image_for_unknown_pool():
    assert ObservedCluster().image_for("new-pool") is None
