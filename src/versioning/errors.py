"""Errors raised while parsing constraints and resolving versions."""

from typing import Iterable, List, Optional


class VersionResolutionError(ValueError):
    """Base class for every caller-input failure in version resolution."""


class InvalidVersionFormat(VersionResolutionError):
    """Raised when a version string is neither ``X.Y`` nor ``X.Y.Z``."""

    def __init__(self, raw: Optional[str], expected: str = "X.Y or X.Y.Z"):
        self.raw = raw
        super().__init__(f"provided version {raw!r} is invalid, expected {expected}")


class NoAvailableVersions(VersionResolutionError):
    """Raised when the catalog (after family filtering) is empty."""

    def __init__(self, family: Optional[str] = None):
        self.family = family
        if family:
            msg = f"there are no available versions for the provided machine image name {family}"
        else:
            msg = "there are no available versions"
        super().__init__(msg)


class NoSupportedVersion(VersionResolutionError):
    """Raised when no record is in the ``supported`` state for a default pick."""

    def __init__(self, family: Optional[str] = None):
        self.family = family
        super().__init__(f"no supported {family + ' ' if family else ''}version found")


class VersionNotAvailable(VersionResolutionError):
    """Raised when an explicit constraint matches no catalog record.

    ``available_versions`` lists every catalog version so users can self-correct.
    """

    def __init__(self, requested: str, available_versions: Iterable[str]):
        self.requested = requested
        self.available_versions: List[str] = list(available_versions)
        super().__init__(
            f"provided version {requested} is not one of the available versions, "
            f"available versions are: {','.join(self.available_versions)}"
        )


class ConflictingVersionFields(VersionResolutionError):
    """Raised when both the current and the deprecated legacy field are set."""

    def __init__(self, entity: str, field: str, legacy_field: str):
        self.entity = entity
        super().__init__(
            f"both `{legacy_field}` and `{field}` are set for {entity}. "
            f"Please use `{field}` only, `{legacy_field}` is deprecated"
        )


class InvalidCatalog(VersionResolutionError):
    """Raised when a provider options payload lacks a required section."""
