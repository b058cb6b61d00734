"""Running-version extraction from an observed cluster.

The cluster response is the API shape: ``kubernetes.version`` for the control
plane and ``nodepools[].machine.image`` for each pool.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ObservedImage:
    """Machine image running on a node pool."""
    name: str
    version: Optional[str]


@dataclass(frozen=True)
class ObservedCluster:
    """Versions already running before this operation."""
    kubernetes_version: Optional[str] = None
    node_pool_images: Dict[str, ObservedImage] = field(default_factory=dict)

    def image_for(self, pool_name: str) -> Optional[ObservedImage]:
        """Return the image of a named pool; new or renamed pools have none."""
        return self.node_pool_images.get(pool_name)


def _get(mapping: Any, key: str) -> Any:
    if isinstance(mapping, Mapping):
        return mapping.get(key)
    return None


def observed_from_cluster(response: Optional[Mapping[str, Any]]) -> ObservedCluster:
    """Extract the running control-plane version and per-pool images.

    A missing response means the cluster does not exist yet. Pools without a
    name, machine, image or image name are skipped.
    """
    if not response:
        return ObservedCluster()

    kubernetes_version = _get(_get(response, "kubernetes"), "version")
    images: Dict[str, ObservedImage] = {}
    for pool in _get(response, "nodepools") or []:
        name = _get(pool, "name")
        image = _get(_get(pool, "machine"), "image")
        image_name = _get(image, "name")
        if not name or not image_name:
            continue
        images[name] = ObservedImage(name=image_name, version=_get(image, "version"))
    return ObservedCluster(kubernetes_version=kubernetes_version, node_pool_images=images)
