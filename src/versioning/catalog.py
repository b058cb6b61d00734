"""Build version catalogs from provider options data.

Catalogs are plain lists of ``VersionRecord`` in provider order. They are
built fresh for every call and never cached.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .errors import InvalidCatalog, VersionResolutionError
from .models import LifecycleState, VersionRecord
from .parser import parse_lifecycle_state, parse_version

logger = logging.getLogger(__name__)


def catalog_from_entries(entries: Optional[Iterable[Mapping[str, Any]]], family: Optional[str] = None) -> List[VersionRecord]:
    """Build records from ``{"version": ..., "state": ...}`` entries.

    Entries with a missing version, a missing or unknown state, or a version
    that is not ``X.Y.Z`` are skipped.

    Args:
        entries: Provider version entries, in provider order.
        family: Family tag for every record (OS image name), or None.

    Returns:
        List of VersionRecord in input order.
    """
    records: List[VersionRecord] = []
    for entry in entries or []:
        if not isinstance(entry, Mapping):
            continue
        raw_version = entry.get(Constants.KEY_VERSION)
        state = parse_lifecycle_state(entry.get(Constants.KEY_STATE))
        if raw_version is None or state is None:
            if is_debug_enabled(logger):
                logger.debug("Skipping catalog entry without version or state", extra=extra_context(
                    event="decision", component="catalog", action="skip_entry",
                    outcome="incomplete", family=family, target=raw_version
                ))
            continue
        try:
            version = parse_version(raw_version)
        except VersionResolutionError:
            if is_debug_enabled(logger):
                logger.debug("Skipping catalog entry with unparseable version", extra=extra_context(
                    event="decision", component="catalog", action="skip_entry",
                    outcome="invalid_version", family=family, target=raw_version
                ))
            continue
        records.append(VersionRecord(version=version, state=state, family=family, raw=raw_version.strip()))
    return records


def catalogs_from_provider_options(options: Mapping[str, Any]) -> Tuple[List[VersionRecord], List[VersionRecord]]:
    """Split a provider options payload into control-plane and machine-image catalogs.

    Returns:
        Tuple of (kubernetes_catalog, machine_image_catalog). Machine image
        records carry their image name as family.
    """
    if not isinstance(options, Mapping):
        raise InvalidCatalog("provider options payload is not a mapping")
    kubernetes_versions = options.get(Constants.KEY_KUBERNETES_VERSIONS)
    if kubernetes_versions is None:
        raise InvalidCatalog("API response has nil kubernetesVersions")
    machine_images = options.get(Constants.KEY_MACHINE_IMAGES)
    if machine_images is None:
        raise InvalidCatalog("API response has nil machine images")

    kubernetes_catalog = catalog_from_entries(kubernetes_versions)
    machine_catalog: List[VersionRecord] = []
    for image in machine_images:
        if not isinstance(image, Mapping):
            continue
        name = image.get(Constants.KEY_NAME)
        if not name:
            continue
        machine_catalog.extend(catalog_from_entries(image.get(Constants.KEY_VERSIONS), family=name))
    return kubernetes_catalog, machine_catalog


def filter_by_family(catalog: Iterable[VersionRecord], family: str) -> List[VersionRecord]:
    """Keep records of one family, preserving order."""
    return [r for r in catalog if r.family == family]


def filter_by_state(catalog: Iterable[VersionRecord], state: Optional[LifecycleState]) -> List[VersionRecord]:
    """Keep records in the given state; None keeps everything."""
    if state is None:
        return list(catalog)
    return [r for r in catalog if r.state == state]


def available_versions(catalog: Iterable[VersionRecord]) -> List[str]:
    """Return version strings in catalog order for diagnostics."""
    return [r.label for r in catalog]
