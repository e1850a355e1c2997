"""Shared test fixtures for KSail tests."""
import pytest

from ksail.core.config import set_config
from ksail.models.cluster import ClusterSpec, Distribution
from ksail.scaffold.generators import Generator


@pytest.fixture(autouse=True)
def reset_settings():
    """Reload runtime settings from the environment for every test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def kind_spec():
    """Kind cluster spec with all defaults."""
    return ClusterSpec(distribution=Distribution.KIND)


@pytest.fixture
def k3d_spec():
    """K3d cluster spec with all defaults."""
    return ClusterSpec(distribution=Distribution.K3D)


class RecordingGenerator(Generator):
    """Generator that records calls and optionally writes a fixed payload."""

    def __init__(self, payload: str = "generated: true\n", write: bool = True):
        self.payload = payload
        self.write = write
        self.calls = []

    def generate(self, model, options):
        self.calls.append((model, options))
        if self.write:
            with open(options.output, "w") as f:
                f.write(self.payload)
        return self.payload


class FailingGenerator(Generator):
    """Generator that always raises."""

    def __init__(self, error: Exception = None):
        self.error = error or RuntimeError("disk on fire")

    def generate(self, model, options):
        raise self.error


@pytest.fixture
def recording_generator():
    return RecordingGenerator()
