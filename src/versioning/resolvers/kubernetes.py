"""Kubernetes control-plane version resolver."""

from typing import Iterable, Optional

from ..models import Domain, ResolutionResult, VersionConstraint, VersionRecord
from .base import CurrentVersion, VersionResolver


class KubernetesVersionResolver(VersionResolver):
    """Resolver for the cluster control plane.

    The control-plane catalog is global, so no family filtering applies and
    the running version comes from the cluster as a whole.
    """

    @property
    def domain(self) -> Domain:
        """Return Kubernetes domain."""
        return Domain.KUBERNETES

    def resolve_for(
        self,
        catalog: Optional[Iterable[VersionRecord]],
        constraint: VersionConstraint,
        current_version: CurrentVersion = None,
    ) -> ResolutionResult:
        """Resolve the control-plane version for one cluster."""
        return self.resolve(catalog, constraint, current_version)
