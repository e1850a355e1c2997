"""Data models for KSail."""
from ksail.models.cluster import (
    CNI,
    ClusterConfigError,
    ClusterSpec,
    Distribution,
    MetricsServer,
)
from ksail.models.distributions import (
    EKSClusterConfig,
    EKSNodeGroup,
    K3dSimpleConfig,
    K3sArg,
    KindCluster,
    Kustomization,
)

__all__ = [
    'CNI',
    'ClusterConfigError',
    'ClusterSpec',
    'Distribution',
    'MetricsServer',
    'EKSClusterConfig',
    'EKSNodeGroup',
    'K3dSimpleConfig',
    'K3sArg',
    'KindCluster',
    'Kustomization',
]
