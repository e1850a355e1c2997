"""Document generators: render a model to YAML and write it out."""
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple, Type

import yaml

from ksail.models.cluster import ClusterSpec
from ksail.models.distributions import (
    EKSClusterConfig,
    K3dSimpleConfig,
    KindCluster,
    Kustomization,
)
from ksail.scaffold.errors import GenerationError


@dataclass
class GeneratorOptions:
    """Where and how a generator writes its output.

    Attributes:
        output: File path to write; empty means return content only
        force: Overwrite an existing file
    """
    output: str = ""
    force: bool = False


class Generator(ABC):
    """Capability that turns a model into file content."""

    @abstractmethod
    def generate(self, model: Any, options: GeneratorOptions) -> str:
        """Render ``model`` and write it to ``options.output``.

        Returns:
            The rendered content
        """
        pass


class _BlockStyleDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_BlockStyleDumper.add_representer(str, _represent_str)


def write_file(content: str, output: str, force: bool) -> str:
    """Write ``content`` to ``output`` unless it exists and ``force`` is off.

    Parent directories are created as needed.
    """
    if not output:
        raise GenerationError("output path is empty")

    path = Path(os.path.normpath(output))
    if not force and path.exists():
        return content

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    except OSError as exc:
        raise GenerationError(f"failed to write file {path}: {exc}") from exc

    return content


class YAMLGenerator(Generator):
    """Marshal a model to YAML and write it through :func:`write_file`."""

    model_types: Tuple[Type, ...] = (object,)

    def generate(self, model: Any, options: GeneratorOptions) -> str:
        content = self.marshal(model)
        if not options.output:
            return content
        return write_file(content, options.output, options.force)

    def marshal(self, model: Any) -> str:
        if not isinstance(model, self.model_types):
            expected = ", ".join(t.__name__ for t in self.model_types)
            raise GenerationError(
                f"{type(self).__name__} cannot render {type(model).__name__} (expected {expected})"
            )
        self.validate(model)

        try:
            return yaml.dump(
                self.to_document(model),
                Dumper=_BlockStyleDumper,
                sort_keys=False,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            raise GenerationError(f"failed to marshal {type(model).__name__}: {exc}") from exc

    def to_document(self, model: Any) -> Dict[str, Any]:
        if isinstance(model, dict):
            return model
        return model.to_dict()

    def validate(self, model: Any) -> None:
        """Hook for model-specific checks before marshalling."""


class KSailGenerator(YAMLGenerator):
    """Writes ksail.yaml."""

    model_types = (ClusterSpec,)

    def to_document(self, model: ClusterSpec) -> Dict[str, Any]:
        return model.to_manifest()


class KindGenerator(YAMLGenerator):
    """Writes kind.yaml."""

    model_types = (KindCluster,)


class K3dGenerator(YAMLGenerator):
    """Writes k3d.yaml."""

    model_types = (K3dSimpleConfig,)


class EKSGenerator(YAMLGenerator):
    """Writes eks.yaml (eksctl ClusterConfig)."""

    model_types = (EKSClusterConfig,)

    def validate(self, model: EKSClusterConfig) -> None:
        if not model.name:
            raise GenerationError("cluster name is required")
        if not model.region:
            raise GenerationError("cluster region is required")


class KustomizationGenerator(YAMLGenerator):
    """Writes kustomization.yaml."""

    model_types = (Kustomization,)
