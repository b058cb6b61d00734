"""Resolve every version a cluster create/update request needs.

Runs the control-plane resolution once and the machine image resolution once
per node pool, and gathers the warnings the caller should show the user.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from versioning.errors import VersionResolutionError
from versioning.models import ResolutionResult, VersionConstraint, VersionRecord
from versioning.parser import constraint_from_fields, parse_constraint
from versioning.resolvers import KubernetesVersionResolver, MachineImageVersionResolver

from .state import ObservedCluster

logger = logging.getLogger(__name__)


class DuplicateNodePool(VersionResolutionError):
    """Raised when two node pools in one cluster share a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"node pool name {name!r} is used more than once")


class PlanningError(VersionResolutionError):
    """Raised when any entity of the cluster cannot be resolved.

    ``cause`` is the underlying resolution error; ``entity`` names the
    control plane or the node pool.
    """

    def __init__(self, entity: str, cause: VersionResolutionError):
        self.entity = entity
        self.cause = cause
        super().__init__(f"getting latest matching {entity} version: {cause}")


@dataclass
class NodePoolSpec:
    """Node pool version settings from user configuration.

    ``os_version`` is the deprecated predecessor of ``os_version_min``.
    """
    name: str
    os_name: str
    os_version_min: Optional[str] = None
    os_version: Optional[str] = None

    def constraint(self) -> VersionConstraint:
        return constraint_from_fields(
            self.os_version_min, self.os_version, f"node_pool {self.name!r}",
            field="os_version_min", legacy_field="os_version",
        )


@dataclass
class ClusterSpec:
    """Cluster version settings from user configuration."""
    name: str
    kubernetes_version_min: Optional[str] = None
    node_pools: List[NodePoolSpec] = field(default_factory=list)


@dataclass
class VersionPlan:
    """Resolved versions for the outgoing payload plus user-facing warnings."""
    kubernetes: ResolutionResult
    node_pools: Dict[str, ResolutionResult] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def deprecated_image_versions(self) -> List[str]:
        return [r.version for r in self.node_pools.values() if r.deprecated]


def plan_versions(
    spec: ClusterSpec,
    kubernetes_catalog: Optional[Iterable[VersionRecord]],
    machine_catalog: Optional[Iterable[VersionRecord]],
    observed: Optional[ObservedCluster] = None,
) -> VersionPlan:
    """Resolve control-plane and node pool versions for one cluster.

    Args:
        spec: User configuration.
        kubernetes_catalog: Control-plane catalog.
        machine_catalog: Machine image catalog of every family.
        observed: Running versions; None when the cluster is being created.

    Returns:
        VersionPlan with one result per node pool, in configuration order.

    Raises:
        PlanningError: any entity failed, including a pool that sets both
            version fields or reuses another pool's name; nothing is
            partially planned.
    """
    observed = observed or ObservedCluster()
    kubernetes_catalog = list(kubernetes_catalog or [])
    machine_catalog = list(machine_catalog or [])

    with Timer() as t:
        try:
            kubernetes = KubernetesVersionResolver().resolve_for(
                kubernetes_catalog,
                parse_constraint(spec.kubernetes_version_min),
                observed.kubernetes_version,
            )
        except VersionResolutionError as err:
            raise PlanningError("kubernetes", err) from err

        plan = VersionPlan(kubernetes=kubernetes)
        if kubernetes.deprecated:
            plan.warnings.append(Constants.WARN_DEPRECATED_KUBERNETES.format(version=kubernetes.version))
        if kubernetes.preview:
            plan.warnings.append(Constants.WARN_PREVIEW_SELECTED.format(version=kubernetes.version))

        image_resolver = MachineImageVersionResolver()
        seen = set()
        for pool in spec.node_pools:
            image = observed.image_for(pool.name)
            try:
                if pool.name in seen:
                    raise DuplicateNodePool(pool.name)
                seen.add(pool.name)
                result = image_resolver.resolve_for(
                    machine_catalog,
                    pool.os_name,
                    pool.constraint(),
                    current_image_name=image.name if image else None,
                    current_version=image.version if image else None,
                )
            except VersionResolutionError as err:
                raise PlanningError(f"machine image ({pool.name})", err) from err
            plan.node_pools[pool.name] = result
            if result.preview:
                plan.warnings.append(Constants.WARN_PREVIEW_SELECTED.format(version=result.version))

        deprecated = plan.deprecated_image_versions
        if deprecated:
            plan.warnings.append(Constants.WARN_DEPRECATED_MACHINE_IMAGES.format(versions=",".join(deprecated)))

    if is_debug_enabled(logger):
        logger.debug("Planned cluster versions", extra=extra_context(
            event="function_exit", component="plan", action="plan_versions",
            outcome="success", cluster=spec.name, target=kubernetes.version,
            count=len(plan.node_pools), warnings=len(plan.warnings),
            duration_ms=t.duration_ms()
        ))
    return plan
