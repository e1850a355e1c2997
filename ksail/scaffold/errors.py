"""Scaffolding error hierarchy.

Each artifact kind has its own error class so callers can tell which step
failed; the underlying exception is kept as ``cause`` and ``__cause__``.
"""
from typing import Optional


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""

    message = "scaffolding failed"

    def __init__(self, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(f"{self.message}: {cause}" if cause is not None else self.message)


class KSailConfigGenerationError(ScaffoldError):
    message = "failed to generate KSail configuration"


class KindConfigGenerationError(ScaffoldError):
    message = "failed to generate Kind configuration"


class K3dConfigGenerationError(ScaffoldError):
    message = "failed to generate K3d configuration"


class EKSConfigGenerationError(ScaffoldError):
    message = "failed to generate EKS configuration"


class KustomizationGenerationError(ScaffoldError):
    message = "failed to generate kustomization configuration"


class UnknownDistributionError(ScaffoldError):
    message = "provided distribution is unknown"


class DistributionConfigCleanupError(ScaffoldError):
    message = "failed to remove previous distribution config"


class GenerationError(Exception):
    """Raised by generators when a document cannot be rendered or written."""
