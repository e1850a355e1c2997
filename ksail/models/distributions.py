"""Distribution-specific configuration documents.

Each model renders the YAML document expected by the distribution's own
tooling (kind, k3d, eksctl, kustomize).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class KindCluster:
    """kind.x-k8s.io/v1alpha4 Cluster."""
    name: str = "kind"
    disable_default_cni: bool = False
    containerd_config_patches: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "kind": "Cluster",
            "apiVersion": "kind.x-k8s.io/v1alpha4",
            "name": self.name,
        }
        if self.disable_default_cni:
            doc["networking"] = {"disableDefaultCNI": True}
        if self.containerd_config_patches:
            doc["containerdConfigPatches"] = list(self.containerd_config_patches)
        return doc


@dataclass
class K3sArg:
    """Extra k3s server/agent argument scoped by node filters."""
    arg: str
    node_filters: List[str] = field(default_factory=lambda: ["server:*"])

    def to_dict(self) -> Dict[str, Any]:
        return {"arg": self.arg, "nodeFilters": list(self.node_filters)}


@dataclass
class K3dSimpleConfig:
    """k3d.io/v1alpha5 Simple config."""
    name: str = "k3d-default"
    extra_args: List[K3sArg] = field(default_factory=list)
    registries_config: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "apiVersion": "k3d.io/v1alpha5",
            "kind": "Simple",
            "metadata": {"name": self.name},
        }
        if self.extra_args:
            doc["options"] = {
                "k3s": {"extraArgs": [arg.to_dict() for arg in self.extra_args]}
            }
        if self.registries_config:
            doc["registries"] = {"config": self.registries_config}
        return doc


@dataclass
class EKSNodeGroup:
    """Managed node group in an eksctl ClusterConfig."""
    name: str = "default-ng"
    instance_type: str = "m5.large"
    min_size: int = 1
    max_size: int = 3
    desired_capacity: int = 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "instanceType": self.instance_type,
            "minSize": self.min_size,
            "maxSize": self.max_size,
            "desiredCapacity": self.desired_capacity,
        }


@dataclass
class EKSClusterConfig:
    """eksctl.io/v1alpha5 ClusterConfig."""
    name: str
    region: str
    node_groups: List[EKSNodeGroup] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "apiVersion": "eksctl.io/v1alpha5",
            "kind": "ClusterConfig",
            "metadata": {"name": self.name, "region": self.region},
        }
        if self.node_groups:
            doc["managedNodeGroups"] = [group.to_dict() for group in self.node_groups]
        return doc


@dataclass
class Kustomization:
    """kustomize.config.k8s.io/v1beta1 Kustomization."""
    resources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiVersion": "kustomize.config.k8s.io/v1beta1",
            "kind": "Kustomization",
            "resources": list(self.resources),
        }
