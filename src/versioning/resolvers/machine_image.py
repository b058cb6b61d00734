"""Node pool machine image version resolver."""

import logging
from typing import Iterable, Optional

from common.logging_utils import extra_context, is_debug_enabled

from ..catalog import filter_by_family
from ..models import Domain, ResolutionResult, VersionConstraint, VersionRecord
from .base import VersionResolver

logger = logging.getLogger(__name__)


class MachineImageVersionResolver(VersionResolver):
    """Resolver for node pool OS images.

    Each OS name is its own family; version numbers of different families are
    not comparable.
    """

    @property
    def domain(self) -> Domain:
        """Return machine image domain."""
        return Domain.MACHINE_IMAGE

    def resolve_for(
        self,
        catalog: Optional[Iterable[VersionRecord]],
        os_name: str,
        constraint: VersionConstraint,
        current_image_name: Optional[str] = None,
        current_version: Optional[str] = None,
    ) -> ResolutionResult:
        """Resolve the image version for one node pool.

        Args:
            catalog: Machine image records of every family.
            os_name: Configured OS image name for the pool.
            constraint: Pool's version constraint.
            current_image_name: Image name running on the pool, if any.
            current_version: Image version running on the pool, if any.
        """
        current = current_version
        if current is not None and current_image_name != os_name:
            # the pool switched OS; the old version says nothing about the new family
            if is_debug_enabled(logger):
                logger.debug("Ignoring running version of another image family", extra=extra_context(
                    event="decision", component="resolver", action="family_check",
                    outcome="mismatch", family=os_name, previous_family=current_image_name,
                    target=current_version
                ))
            current = None
        return self.resolve(filter_by_family(catalog or [], os_name), constraint, current, family=os_name)
