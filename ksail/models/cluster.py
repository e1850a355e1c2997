"""KSail cluster specification model (ksail.yaml)."""
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

API_VERSION = "ksail.dev/v1alpha1"
KIND = "Cluster"
DEFAULT_SOURCE_DIRECTORY = "k8s"

_E = TypeVar("_E", bound=Enum)


class ClusterConfigError(Exception):
    """Raised when a ksail.yaml document cannot be loaded."""


class Distribution(str, Enum):
    """Kubernetes distribution a cluster is scaffolded for."""

    KIND = "Kind"
    K3D = "K3d"
    EKS = "EKS"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Distribution":
        """Case-insensitive lookup; unrecognised names become UNKNOWN."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.UNKNOWN


class CNI(str, Enum):
    """Container network interface installed into the cluster."""

    DEFAULT = "Default"
    CILIUM = "Cilium"
    CALICO = "Calico"
    FLANNEL = "Flannel"


class MetricsServer(str, Enum):
    """Whether the distribution's bundled metrics-server is kept."""

    ENABLED = "Enabled"
    DISABLED = "Disabled"


def _parse_choice(enum_cls: Type[_E], value: Any) -> _E:
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    valid = ", ".join(member.value for member in enum_cls)
    raise ValueError(f"'{value}' is not a valid {enum_cls.__name__} (valid options: {valid})")


class ClusterSpec(BaseModel):
    """Logical cluster specification that drives scaffolding.

    The model is frozen: defaulting produces a copy through ``model_copy``
    and the caller's instance is never modified.
    """

    model_config = ConfigDict(extra='forbid', frozen=True)

    distribution: Distribution = Distribution.KIND
    distribution_config: str = Field("", description="Distribution config file name or path")
    context: str = Field("", description="Kubeconfig context used to reach the cluster")
    source_directory: str = Field(DEFAULT_SOURCE_DIRECTORY, description="Directory holding Kubernetes manifests")
    cni: CNI = CNI.DEFAULT
    metrics_server: MetricsServer = MetricsServer.ENABLED
    mirror_registries: List[str] = Field(
        default_factory=list,
        description="Mirror registries in 'host=upstream' form",
    )

    @field_validator('distribution', mode='before')
    @classmethod
    def parse_distribution(cls, v):
        return Distribution.parse(v)

    @field_validator('cni', mode='before')
    @classmethod
    def parse_cni(cls, v):
        return _parse_choice(CNI, v)

    @field_validator('metrics_server', mode='before')
    @classmethod
    def parse_metrics_server(cls, v):
        return _parse_choice(MetricsServer, v)

    def to_manifest(self) -> Dict[str, Any]:
        """Render the ksail.yaml document for this spec."""
        spec: Dict[str, Any] = {"distribution": self.distribution.value}

        distribution_config = self.distribution_config.strip()
        if distribution_config:
            spec["distributionConfig"] = distribution_config
        if self.source_directory:
            spec["sourceDirectory"] = self.source_directory
        if self.context:
            spec["connection"] = {"context": self.context}

        spec["cni"] = self.cni.value
        spec["metricsServer"] = self.metrics_server.value

        if self.mirror_registries:
            spec["mirrorRegistries"] = list(self.mirror_registries)

        return {"apiVersion": API_VERSION, "kind": KIND, "spec": spec}

    @classmethod
    def from_manifest(cls, data: Any) -> "ClusterSpec":
        """Build a spec from a parsed ksail.yaml document."""
        if not isinstance(data, dict):
            raise ClusterConfigError("KSail config must be a mapping")

        kind = data.get("kind", KIND)
        if kind != KIND:
            raise ClusterConfigError(f"Unexpected kind '{kind}', expected '{KIND}'")

        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise ClusterConfigError("'spec' must be a mapping")

        connection = spec.get("connection") or {}
        if not isinstance(connection, dict):
            raise ClusterConfigError("'spec.connection' must be a mapping")

        try:
            return cls(
                distribution=spec.get("distribution") or Distribution.KIND,
                distribution_config=spec.get("distributionConfig") or "",
                context=connection.get("context") or "",
                source_directory=spec.get("sourceDirectory") or DEFAULT_SOURCE_DIRECTORY,
                cni=spec.get("cni") or CNI.DEFAULT,
                metrics_server=spec.get("metricsServer") or MetricsServer.ENABLED,
                mirror_registries=spec.get("mirrorRegistries") or [],
            )
        except ValidationError as exc:
            raise ClusterConfigError(f"Invalid KSail config: {exc}") from exc

    @classmethod
    def load(cls, path: Path) -> "ClusterSpec":
        """Load a spec from a ksail.yaml file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ClusterConfigError(f"Could not parse {path}: {exc}") from exc

        if not data:
            raise ClusterConfigError(f"Config file is empty: {path}")

        return cls.from_manifest(data)
