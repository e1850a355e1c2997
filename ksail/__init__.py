"""KSail - scaffold consistent Kubernetes cluster projects."""

__version__ = "0.1.0"
