"""Canonical names and defaulting rules shared by the generated files."""
from ksail.core.logger import get_logger
from ksail.models.cluster import ClusterSpec, Distribution

logger = get_logger(__name__)

KSAIL_CONFIG_FILE = "ksail.yaml"
KIND_CONFIG_FILE = "kind.yaml"
K3D_CONFIG_FILE = "k3d.yaml"
EKS_CONFIG_FILE = "eks.yaml"
KUSTOMIZATION_FILE = "kustomization.yaml"

KIND_DEFAULT_CLUSTER_NAME = "kind"
K3D_DEFAULT_CLUSTER_NAME = "k3d-default"

_CONFIG_FILES = {
    Distribution.KIND: KIND_CONFIG_FILE,
    Distribution.K3D: K3D_CONFIG_FILE,
    Distribution.EKS: EKS_CONFIG_FILE,
}


def expected_context_name(distribution: Distribution) -> str:
    """Return the kubeconfig context the scaffolded cluster will use.

    Empty for distributions whose context cannot be known up front.
    """
    if distribution == Distribution.KIND:
        return f"kind-{KIND_DEFAULT_CLUSTER_NAME}"
    if distribution == Distribution.K3D:
        return f"k3d-{K3D_DEFAULT_CLUSTER_NAME}"
    return ""


def expected_distribution_config_name(distribution: Distribution) -> str:
    """Return the canonical distribution config file name (kind.yaml fallback)."""
    return _CONFIG_FILES.get(distribution, KIND_CONFIG_FILE)


def apply_defaults(spec: ClusterSpec) -> ClusterSpec:
    """Return a copy of ``spec`` with context and distribution config defaulted.

    ``distribution_config`` equal to ``kind.yaml`` is treated as unset, so a
    non-Kind distribution always gets its own canonical file name.
    """
    updates = {}

    if not spec.context:
        context = expected_context_name(spec.distribution)
        if context:
            updates["context"] = context

    if spec.distribution_config in ("", KIND_CONFIG_FILE):
        updates["distribution_config"] = expected_distribution_config_name(spec.distribution)

    if updates:
        logger.debug(f"Applying scaffold defaults: {updates}")

    return spec.model_copy(update=updates)
