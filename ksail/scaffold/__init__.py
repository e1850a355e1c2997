"""Cluster project scaffolding.

Generates ksail.yaml, the distribution config (kind/k3d/eks) and a
kustomization from a single ClusterSpec.
"""

from .core import ScaffoldManager
from .emitter import EventAction, FileEmitter, ScaffoldEvent
from .errors import (
    DistributionConfigCleanupError,
    EKSConfigGenerationError,
    GenerationError,
    K3dConfigGenerationError,
    KindConfigGenerationError,
    KSailConfigGenerationError,
    KustomizationGenerationError,
    ScaffoldError,
    UnknownDistributionError,
)

__all__ = [
    "ScaffoldManager",
    "FileEmitter",
    "ScaffoldEvent",
    "EventAction",
    "ScaffoldError",
    "GenerationError",
    "KSailConfigGenerationError",
    "KindConfigGenerationError",
    "K3dConfigGenerationError",
    "EKSConfigGenerationError",
    "KustomizationGenerationError",
    "UnknownDistributionError",
    "DistributionConfigCleanupError",
]
