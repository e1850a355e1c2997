"""Tests for the ClusterSpec model and ksail.yaml round-tripping."""
import pytest
from pydantic import ValidationError

from ksail.models.cluster import (
    CNI,
    ClusterConfigError,
    ClusterSpec,
    Distribution,
    MetricsServer,
)


class TestEnums:
    """Case-insensitive enum parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("kind", Distribution.KIND),
        ("K3D", Distribution.K3D),
        ("eks", Distribution.EKS),
        ("unknown", Distribution.UNKNOWN),
        ("talos", Distribution.UNKNOWN),
    ])
    def test_distribution_parse(self, raw, expected):
        assert Distribution.parse(raw) == expected

    def test_spec_accepts_lowercase_choices(self):
        spec = ClusterSpec(distribution="k3d", cni="calico", metrics_server="disabled")

        assert spec.distribution == Distribution.K3D
        assert spec.cni == CNI.CALICO
        assert spec.metrics_server == MetricsServer.DISABLED

    def test_invalid_cni_rejected(self):
        with pytest.raises(ValidationError, match="not a valid CNI"):
            ClusterSpec(cni="weave")

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            ClusterSpec(nodes=3)

    def test_spec_is_frozen(self):
        spec = ClusterSpec()

        with pytest.raises(ValidationError):
            spec.context = "changed"


class TestManifest:
    """ksail.yaml rendering and loading."""

    def test_defaults(self):
        manifest = ClusterSpec().to_manifest()

        assert manifest == {
            "apiVersion": "ksail.dev/v1alpha1",
            "kind": "Cluster",
            "spec": {
                "distribution": "Kind",
                "sourceDirectory": "k8s",
                "cni": "Default",
                "metricsServer": "Enabled",
            },
        }

    def test_round_trip(self):
        spec = ClusterSpec(
            distribution="K3d",
            distribution_config="k3d.yaml",
            context="k3d-k3d-default",
            source_directory="manifests",
            cni="Cilium",
            metrics_server="Disabled",
            mirror_registries=["docker.io=https://registry-1.docker.io"],
        )

        assert ClusterSpec.from_manifest(spec.to_manifest()) == spec

    def test_load_file(self, tmp_path):
        path = tmp_path / "ksail.yaml"
        path.write_text(
            "apiVersion: ksail.dev/v1alpha1\n"
            "kind: Cluster\n"
            "spec:\n"
            "  distribution: K3d\n"
            "  distributionConfig: k3d.yaml\n"
        )

        spec = ClusterSpec.load(path)

        assert spec.distribution == Distribution.K3D
        assert spec.distribution_config == "k3d.yaml"
        assert spec.source_directory == "k8s"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ClusterSpec.load(tmp_path / "ksail.yaml")

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "ksail.yaml"
        path.write_text("")

        with pytest.raises(ClusterConfigError, match="empty"):
            ClusterSpec.load(path)

    def test_wrong_kind_rejected(self):
        with pytest.raises(ClusterConfigError, match="Unexpected kind"):
            ClusterSpec.from_manifest({"kind": "Simple"})

    def test_invalid_values_rejected(self):
        with pytest.raises(ClusterConfigError, match="Invalid KSail config"):
            ClusterSpec.from_manifest({"kind": "Cluster", "spec": {"cni": "weave"}})
