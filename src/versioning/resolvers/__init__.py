"""Version resolvers for the cluster components."""

from .base import VersionResolver
from .kubernetes import KubernetesVersionResolver
from .machine_image import MachineImageVersionResolver

__all__ = [
    "VersionResolver",
    "KubernetesVersionResolver",
    "MachineImageVersionResolver",
]
