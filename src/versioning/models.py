"""Data models for version catalogs, constraints and resolution results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import semantic_version


class Domain(Enum):
    """Enum for the components whose versions get resolved."""
    KUBERNETES = "kubernetes"
    MACHINE_IMAGE = "machine_image"


class LifecycleState(Enum):
    """Lifecycle state of a catalog version."""
    SUPPORTED = "supported"
    PREVIEW = "preview"
    DEPRECATED = "deprecated"


class ConstraintKind(Enum):
    """Shape of the user-supplied version string."""
    FULL = "full"
    PARTIAL = "partial"
    UNSET = "unset"


@dataclass(frozen=True)
class VersionConstraint:
    """Normalized user constraint.

    For PARTIAL constraints ``version`` holds ``major.minor.0``; only the
    major and minor fields are meaningful.
    """
    kind: ConstraintKind
    version: Optional[semantic_version.Version] = None
    raw: Optional[str] = None

    @classmethod
    def full(cls, version: semantic_version.Version, raw: Optional[str] = None) -> "VersionConstraint":
        return cls(ConstraintKind.FULL, version, raw if raw is not None else str(version))

    @classmethod
    def partial(cls, major: int, minor: int, raw: Optional[str] = None) -> "VersionConstraint":
        version = semantic_version.Version(major=major, minor=minor, patch=0)
        return cls(ConstraintKind.PARTIAL, version, raw if raw is not None else f"{major}.{minor}")

    @classmethod
    def unset(cls) -> "VersionConstraint":
        return cls(ConstraintKind.UNSET)

    @property
    def is_set(self) -> bool:
        return self.kind != ConstraintKind.UNSET

    def __str__(self) -> str:
        return self.raw or "<unset>"


@dataclass(frozen=True)
class VersionRecord:
    """One catalog entry: a concrete version and its lifecycle state."""
    version: semantic_version.Version
    state: LifecycleState
    family: Optional[str] = None  # OS image name; None for the control plane
    raw: Optional[str] = None

    @property
    def label(self) -> str:
        """Version literal as the provider listed it."""
        return self.raw if self.raw is not None else str(self.version)


@dataclass(frozen=True)
class ResolutionResult:
    """Resolution outcome fed to the payload builder and warning collector."""
    version: str
    deprecated: bool
    preview: bool = False
    state: LifecycleState = LifecycleState.SUPPORTED
