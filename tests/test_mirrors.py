"""Tests for mirror registry translation."""
import yaml

from ksail.scaffold.mirrors import (
    MirrorSpec,
    container_name,
    containerd_patches,
    extract_port,
    k3d_registry_config,
    parse_mirror_spec,
    parse_mirror_specs,
)


class TestParsing:
    """Parsing of host=upstream entries."""

    def test_invalid_entries_are_dropped(self):
        specs = parse_mirror_specs([
            "docker.io=https://registry-1.docker.io",
            "bad-spec",
            "ghcr.io=https://ghcr.io",
        ])

        assert specs == [
            MirrorSpec("docker.io", "https://registry-1.docker.io"),
            MirrorSpec("ghcr.io", "https://ghcr.io"),
        ]

    def test_splits_on_first_equals_only(self):
        spec = parse_mirror_spec("registry.local=http://proxy:5001/path?a=b")

        assert spec == MirrorSpec("registry.local", "http://proxy:5001/path?a=b")

    def test_empty_sides_rejected(self):
        assert parse_mirror_spec("=missing") is None
        assert parse_mirror_spec("missing=") is None
        assert parse_mirror_spec("invalid") is None

    def test_whitespace_is_stripped(self):
        assert parse_mirror_spec(" docker.io = https://registry-1.docker.io ") == MirrorSpec(
            "docker.io", "https://registry-1.docker.io"
        )
        assert parse_mirror_spec(" =x") is None
        assert containerd_patches([" =x", "x= "]) == []
        assert k3d_registry_config([" =x"]) == ""


class TestPortExtraction:
    """Port detection from upstream URLs."""

    def test_explicit_port(self):
        assert extract_port("http://localhost:5001") == "5001"

    def test_default_port(self):
        assert extract_port("https://registry-1.docker.io") == "5000"

    def test_port_followed_by_path(self):
        assert extract_port("https://mirror.example.com:8443/v2/") == "8443"


class TestContainerdPatches:
    """Kind containerd mirror patches."""

    def test_patch_format(self):
        patches = containerd_patches(["docker.io=https://registry-1.docker.io"])

        assert patches == [
            '[plugins."io.containerd.grpc.v1.cri".registry.mirrors."docker.io"]\n'
            '  endpoint = ["http://kind-docker-io:5000"]'
        ]

    def test_uses_upstream_port(self):
        patches = containerd_patches(["localhost=http://localhost:5001"])

        assert 'endpoint = ["http://kind-localhost:5001"]' in patches[0]

    def test_one_patch_per_valid_entry(self):
        patches = containerd_patches([
            "docker.io=https://registry-1.docker.io",
            "bad-spec",
            "ghcr.io=https://ghcr.io",
        ])

        assert len(patches) == 2
        assert 'mirrors."ghcr.io"' in patches[1]

    def test_empty_input(self):
        assert containerd_patches([]) == []
        assert containerd_patches(["nope", "=x"]) == []

    def test_container_name(self):
        assert container_name("registry.k8s.io") == "kind-registry-k8s-io"


class TestK3dRegistryConfig:
    """Aggregated k3d registries.config block."""

    def test_block_format(self):
        config = k3d_registry_config([
            "docker.io=https://registry-1.docker.io",
            "ghcr.io=https://ghcr.io",
        ])

        assert config == (
            "mirrors:\n"
            '  "docker.io":\n'
            "    endpoint:\n"
            "      - https://registry-1.docker.io\n"
            '  "ghcr.io":\n'
            "    endpoint:\n"
            "      - https://ghcr.io\n"
        )

    def test_first_occurrence_wins(self):
        config = k3d_registry_config([
            "docker.io=https://first.example.com",
            "docker.io=https://second.example.com",
        ])

        parsed = yaml.safe_load(config)
        assert parsed == {"mirrors": {"docker.io": {"endpoint": ["https://first.example.com"]}}}

    def test_empty_when_nothing_valid(self):
        assert k3d_registry_config([]) == ""
        assert k3d_registry_config(["bad-spec"]) == ""
