"""Core scaffolding functionality for KSail cluster projects."""
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO, Type

from ksail.core.config import get_config
from ksail.core.logger import get_logger
from ksail.models.cluster import CNI, ClusterSpec, Distribution, MetricsServer
from ksail.models.distributions import (
    EKSClusterConfig,
    EKSNodeGroup,
    K3dSimpleConfig,
    K3sArg,
    KindCluster,
    Kustomization,
)
from ksail.scaffold.defaults import (
    EKS_CONFIG_FILE,
    K3D_CONFIG_FILE,
    K3D_DEFAULT_CLUSTER_NAME,
    KIND_CONFIG_FILE,
    KIND_DEFAULT_CLUSTER_NAME,
    KSAIL_CONFIG_FILE,
    KUSTOMIZATION_FILE,
    apply_defaults,
    expected_distribution_config_name,
)
from ksail.scaffold.emitter import EventSink, FileEmitter, ScaffoldEvent
from ksail.scaffold.errors import (
    DistributionConfigCleanupError,
    EKSConfigGenerationError,
    K3dConfigGenerationError,
    KindConfigGenerationError,
    KSailConfigGenerationError,
    KustomizationGenerationError,
    ScaffoldError,
    UnknownDistributionError,
)
from ksail.scaffold.generators import (
    EKSGenerator,
    Generator,
    K3dGenerator,
    KindGenerator,
    KSailGenerator,
    KustomizationGenerator,
)
from ksail.scaffold.mirrors import containerd_patches, k3d_registry_config

logger = get_logger(__name__)


def build_kind_config(spec: ClusterSpec) -> KindCluster:
    """Kind cluster document for ``spec``."""
    return KindCluster(
        name=KIND_DEFAULT_CLUSTER_NAME,
        disable_default_cni=spec.cni != CNI.DEFAULT,
        containerd_config_patches=containerd_patches(spec.mirror_registries),
    )


def build_k3d_config(spec: ClusterSpec) -> K3dSimpleConfig:
    """K3d simple config for ``spec``.

    Flannel is switched off for CNIs that bring their own dataplane, and the
    bundled metrics-server is disabled on request.
    """
    extra_args = []
    if spec.cni in (CNI.CILIUM, CNI.CALICO):
        extra_args.append(K3sArg("--flannel-backend=none"))
        extra_args.append(K3sArg("--disable-network-policy"))
    if spec.metrics_server == MetricsServer.DISABLED:
        extra_args.append(K3sArg("--disable=metrics-server"))

    return K3dSimpleConfig(
        name=K3D_DEFAULT_CLUSTER_NAME,
        extra_args=extra_args,
        registries_config=k3d_registry_config(spec.mirror_registries) or None,
    )


def build_eks_config(spec: ClusterSpec) -> EKSClusterConfig:
    """eksctl cluster config using the runtime EKS settings."""
    settings = get_config()
    return EKSClusterConfig(
        name=settings.eks_cluster_name,
        region=settings.eks_region,
        node_groups=[EKSNodeGroup(instance_type=settings.eks_instance_type)],
    )


@dataclass(frozen=True)
class DistributionTarget:
    """How one distribution's config file is built and written."""
    file_name: str
    build: Callable[[ClusterSpec], Any]
    generator: Generator
    error_cls: Type[ScaffoldError]


class ScaffoldManager:
    """Scaffolds ksail.yaml, the distribution config and a kustomization.

    Not safe for concurrent use against the same output directory.
    """

    def __init__(
        self,
        spec: ClusterSpec,
        writer: Optional[TextIO] = None,
        on_event: Optional[EventSink] = None,
        ksail_generator: Optional[Generator] = None,
        kustomization_generator: Optional[Generator] = None,
        distribution_generators: Optional[Dict[Distribution, Generator]] = None,
    ):
        """Initialize the scaffolder.

        Args:
            spec: Cluster specification (never modified)
            writer: Optional text stream receiving one line per event
            on_event: Optional callback receiving each event as it happens
            ksail_generator: Override for the ksail.yaml generator
            kustomization_generator: Override for the kustomization generator
            distribution_generators: Per-distribution generator overrides
        """
        self.spec = spec
        self.writer = writer
        self.on_event = on_event
        self.ksail_generator = ksail_generator or KSailGenerator()
        self.kustomization_generator = kustomization_generator or KustomizationGenerator()

        overrides = distribution_generators or {}
        self.targets: Dict[Distribution, DistributionTarget] = {
            Distribution.KIND: DistributionTarget(
                KIND_CONFIG_FILE,
                build_kind_config,
                overrides.get(Distribution.KIND) or KindGenerator(),
                KindConfigGenerationError,
            ),
            Distribution.K3D: DistributionTarget(
                K3D_CONFIG_FILE,
                build_k3d_config,
                overrides.get(Distribution.K3D) or K3dGenerator(),
                K3dConfigGenerationError,
            ),
            Distribution.EKS: DistributionTarget(
                EKS_CONFIG_FILE,
                build_eks_config,
                overrides.get(Distribution.EKS) or EKSGenerator(),
                EKSConfigGenerationError,
            ),
        }

    def scaffold(self, output_dir: Path, force: bool = False) -> List[ScaffoldEvent]:
        """Generate all project files into ``output_dir``.

        Steps run in order and stop at the first failure; files written by
        earlier steps stay on disk. Running again is the way to recover.

        Args:
            output_dir: Project directory
            force: Overwrite existing files

        Returns:
            Events in the order they happened

        Raises:
            ScaffoldError: The subclass matching the failed step
        """
        output_dir = Path(output_dir)
        previous_config = self.spec.distribution_config.strip()
        events: List[ScaffoldEvent] = []

        def record(event: ScaffoldEvent) -> None:
            events.append(event)
            if self.on_event is not None:
                self.on_event(event)
            if self.writer is not None:
                self.writer.write(event.message + "\n")

        emitter = FileEmitter(sink=record)

        logger.debug(f"Scaffolding {self.spec.distribution.value} project into {output_dir}")

        self._generate_ksail_config(emitter, output_dir, force)

        target = self.targets.get(self.spec.distribution)
        if target is None:
            raise UnknownDistributionError()

        replaced_mtime_ns = None
        if force:
            replaced_mtime_ns = self._remove_former_distribution_config(output_dir, previous_config)

        emitter.emit(
            target.generator,
            target.build(self.spec),
            output_dir / target.file_name,
            target.file_name,
            force,
            target.error_cls,
            replaced_mtime_ns=replaced_mtime_ns,
        )

        self._generate_kustomization(emitter, output_dir, force)

        return events

    def _generate_ksail_config(self, emitter: FileEmitter, output_dir: Path, force: bool) -> None:
        emitter.emit(
            self.ksail_generator,
            apply_defaults(self.spec),
            output_dir / KSAIL_CONFIG_FILE,
            KSAIL_CONFIG_FILE,
            force,
            KSailConfigGenerationError,
        )

    def _generate_kustomization(self, emitter: FileEmitter, output_dir: Path, force: bool) -> None:
        relative = Path(self.spec.source_directory) / KUSTOMIZATION_FILE
        emitter.emit(
            self.kustomization_generator,
            Kustomization(),
            output_dir / relative,
            relative.as_posix(),
            force,
            KustomizationGenerationError,
        )

    def _remove_former_distribution_config(self, output_dir: Path, previous: str) -> Optional[int]:
        """Delete the previous distribution config if it sits where the new one goes.

        A previous config under a different name or location is left alone.

        Returns:
            mtime (ns) of the removed file, or None if nothing was removed
        """
        if not previous:
            return None

        new_path = output_dir / expected_distribution_config_name(self.spec.distribution)
        previous_path = Path(previous)
        if not previous_path.is_absolute():
            previous_path = output_dir / previous_path

        if os.path.abspath(previous_path) != os.path.abspath(new_path):
            return None

        try:
            info = previous_path.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise DistributionConfigCleanupError(exc) from exc

        if not stat.S_ISREG(info.st_mode):
            return None

        try:
            previous_path.unlink()
        except OSError as exc:
            raise DistributionConfigCleanupError(exc) from exc

        logger.debug(f"Removed previous distribution config {previous_path}")
        return info.st_mtime_ns
