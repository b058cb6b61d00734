"""Version and constraint parsing utilities."""

import re
from typing import Optional

import semantic_version

from .errors import ConflictingVersionFields, InvalidVersionFormat
from .models import ConstraintKind, LifecycleState, VersionConstraint

_FULL_RE = re.compile(r'^(\d+)\.(\d+)\.(\d+)$', re.ASCII)
_PARTIAL_RE = re.compile(r'^(\d+)\.(\d+)$', re.ASCII)


def parse_version(raw: Optional[str]) -> semantic_version.Version:
    """Parse a full ``X.Y.Z`` version.

    Pre-release and build metadata are not accepted.
    """
    m = _FULL_RE.match(raw.strip()) if isinstance(raw, str) else None
    if not m:
        raise InvalidVersionFormat(raw, expected="X.Y.Z")
    major, minor, patch = (int(g) for g in m.groups())
    return semantic_version.Version(major=major, minor=minor, patch=patch)


def parse_constraint(raw: Optional[str]) -> VersionConstraint:
    """Classify a user-supplied version string as Full, Partial or Unset.

    ``None`` and blank strings are Unset; ``X.Y.Z`` is Full; ``X.Y`` is Partial.
    """
    if raw is None:
        return VersionConstraint.unset()
    if not isinstance(raw, str):
        raise InvalidVersionFormat(raw)
    s = raw.strip()
    if s == '':
        return VersionConstraint.unset()
    if _FULL_RE.match(s):
        return VersionConstraint.full(parse_version(s), raw=s)
    m = _PARTIAL_RE.match(s)
    if m:
        return VersionConstraint.partial(int(m.group(1)), int(m.group(2)), raw=s)
    raise InvalidVersionFormat(raw)


def same_minor(a: semantic_version.Version, b: semantic_version.Version) -> bool:
    """Return True when both versions share major.minor."""
    return (a.major, a.minor) == (b.major, b.minor)


def parse_lifecycle_state(raw: Optional[str]) -> Optional[LifecycleState]:
    """Map a provider state literal to LifecycleState, case-insensitively.

    Returns None for missing or unknown states.
    """
    if not isinstance(raw, str):
        return None
    try:
        return LifecycleState(raw.strip().lower())
    except ValueError:
        return None


def constraint_from_fields(
    value: Optional[str],
    legacy_value: Optional[str],
    entity: str,
    field: str = "os_version_min",
    legacy_field: str = "os_version",
) -> VersionConstraint:
    """Fold a current field and its deprecated predecessor into one constraint.

    The legacy value is used as the floor when it is the only one set.
    """
    has_value = value is not None
    has_legacy = legacy_value is not None
    if has_value and has_legacy:
        raise ConflictingVersionFields(entity, field, legacy_field)
    return parse_constraint(legacy_value if has_legacy else value)


def describe(constraint: VersionConstraint) -> str:
    """Short label used in log records."""
    if constraint.kind == ConstraintKind.UNSET:
        return "unset"
    return f"{constraint.kind.value}:{constraint.raw}"
