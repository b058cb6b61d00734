"""Shared version resolution algorithm for every resolved component."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

import semantic_version

from common.logging_utils import Timer, extra_context, is_debug_enabled

from ..catalog import available_versions, filter_by_state
from ..errors import NoAvailableVersions, NoSupportedVersion, VersionNotAvailable
from ..models import (
    ConstraintKind,
    Domain,
    LifecycleState,
    ResolutionResult,
    VersionConstraint,
    VersionRecord,
)
from ..parser import describe, parse_version, same_minor

logger = logging.getLogger(__name__)

CurrentVersion = Optional[Union[str, semantic_version.Version]]


class VersionResolver(ABC):
    """Resolve a concrete version from a catalog, a user constraint and the running version.

    Resolvers hold no state between calls; one instance may be shared freely.
    """

    @property
    @abstractmethod
    def domain(self) -> Domain:
        """Component this resolver serves."""

    def resolve(
        self,
        catalog: Optional[Iterable[VersionRecord]],
        constraint: VersionConstraint,
        current: CurrentVersion = None,
        family: Optional[str] = None,
    ) -> ResolutionResult:
        """Select the version to request for one entity.

        Args:
            catalog: Candidate records, already filtered to one family where applicable.
            constraint: User constraint (Full, Partial or Unset).
            current: Version already running for this entity, if any.
            family: Family name used in errors and log records only.

        Returns:
            ResolutionResult for the selected record.

        Raises:
            NoAvailableVersions: catalog is empty or None.
            NoSupportedVersion: default pick found no supported record.
            VersionNotAvailable: the effective floor matches no record.
            InvalidVersionFormat: ``current`` is not ``X.Y.Z``.
        """
        records = list(catalog or [])
        with Timer() as t:
            if not records:
                raise NoAvailableVersions(family)
            current_version = self._normalize_current(current)

            if not constraint.is_set:
                if current_version is None:
                    selected = self.pick_latest(records, family=family)
                    self._trace("default_latest", selected, family, t)
                    return ResolutionResult(version=selected.label, deprecated=False, state=selected.state)
                floor = VersionConstraint.full(current_version)
            else:
                floor = constraint

            if current_version is not None:
                floor = self._guard_downgrade(records, floor, current_version)

            if floor.kind == ConstraintKind.FULL:
                selected = self._pick_exact(records, floor)
            else:
                selected = self._pick_partial(records, floor)
            if selected is None:
                raise VersionNotAvailable(str(floor), available_versions(records))

            self._trace(describe(floor), selected, family, t)
            return self._to_result(selected)

    def pick_latest(self, catalog: Iterable[VersionRecord], family: Optional[str] = None) -> VersionRecord:
        """Return the greatest supported record; preview and deprecated never qualify."""
        latest: Optional[VersionRecord] = None
        for record in filter_by_state(catalog or [], LifecycleState.SUPPORTED):
            if latest is None or record.version > latest.version:
                latest = record
        if latest is None:
            raise NoSupportedVersion(family)
        return latest

    def _pick_exact(self, records: List[VersionRecord], floor: VersionConstraint) -> Optional[VersionRecord]:
        """First record equal to the pinned version, in any state."""
        for record in records:
            if record.version == floor.version:
                return record
        return None

    def _pick_partial(self, records: List[VersionRecord], floor: VersionConstraint) -> Optional[VersionRecord]:
        """Greatest non-preview patch on the floor's major.minor line."""
        best: Optional[VersionRecord] = None
        for record in records:
            if record.state == LifecycleState.PREVIEW:
                continue
            if not same_minor(record.version, floor.version):
                continue
            if best is None or record.version > best.version:
                best = record
        return best

    def _guard_downgrade(
        self,
        records: List[VersionRecord],
        floor: VersionConstraint,
        current: semantic_version.Version,
    ) -> VersionConstraint:
        """Replace a floor that would resolve below the running version with Full(current)."""
        pinned = VersionConstraint.full(current)
        if floor.kind == ConstraintKind.FULL:
            lower = floor.version < current
        elif (floor.version.major, floor.version.minor) < (current.major, current.minor):
            lower = True
        elif same_minor(floor.version, current):
            candidate = self._pick_partial(records, floor)
            lower = candidate is None or candidate.version < current
        else:
            lower = False
        if lower:
            logger.info(
                "Requested %s version %s is lower than running version %s, keeping %s",
                self.domain.value, floor, current, current,
                extra=extra_context(event="decision", component="resolver", action="downgrade_guard",
                                    outcome="pinned_current", domain=self.domain.value),
            )
            return pinned
        return floor

    @staticmethod
    def _normalize_current(current: CurrentVersion) -> Optional[semantic_version.Version]:
        if current is None or isinstance(current, semantic_version.Version):
            return current
        return parse_version(current)

    @staticmethod
    def _to_result(record: VersionRecord) -> ResolutionResult:
        return ResolutionResult(
            version=record.label,
            deprecated=record.state == LifecycleState.DEPRECATED,
            preview=record.state == LifecycleState.PREVIEW,
            state=record.state,
        )

    def _trace(self, rule: str, selected: VersionRecord, family: Optional[str], t: Timer) -> None:
        if is_debug_enabled(logger):
            logger.debug("Resolved version", extra=extra_context(
                event="function_exit", component="resolver", action="resolve",
                outcome="success", domain=self.domain.value, family=family, rule=rule,
                target=selected.label, state=selected.state.value,
                duration_ms=t.duration_ms()
            ))
