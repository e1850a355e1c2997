"""KSail runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class KSailSettings:
    """Runtime configuration for KSail scaffolding.

    Attributes:
        eks_cluster_name: Cluster name written to scaffolded eks.yaml (default: eks-default)
        eks_region: AWS region written to scaffolded eks.yaml (default: eu-north-1)
        eks_instance_type: Instance type of the default node group (default: m5.large)
        mtime_step_ms: Minimum mtime advance after a forced overwrite (default: 1)
        log_file: Optional log file path used by the CLI
        log_level: Console log level (default: WARNING)
    """

    # EKS scaffold defaults
    eks_cluster_name: str = "eks-default"
    eks_region: str = "eu-north-1"
    eks_instance_type: str = "m5.large"

    # Forced overwrites always move mtime forward by at least this much
    mtime_step_ms: int = 1

    log_file: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "KSailSettings":
        """Create settings from environment variables.

        Environment variables:
            KSAIL_EKS_CLUSTER_NAME: EKS cluster name
            KSAIL_EKS_REGION: EKS region
            KSAIL_EKS_INSTANCE_TYPE: EKS node group instance type
            KSAIL_MTIME_STEP_MS: mtime advance in milliseconds
            KSAIL_LOG_FILE: Log file path
            KSAIL_LOG_LEVEL: Console log level name

        Returns:
            KSailSettings instance with values from environment or defaults
        """
        return cls(
            eks_cluster_name=os.getenv("KSAIL_EKS_CLUSTER_NAME", cls.eks_cluster_name),
            eks_region=os.getenv("KSAIL_EKS_REGION", cls.eks_region),
            eks_instance_type=os.getenv("KSAIL_EKS_INSTANCE_TYPE", cls.eks_instance_type),
            mtime_step_ms=int(os.getenv("KSAIL_MTIME_STEP_MS", cls.mtime_step_ms)),
            log_file=os.getenv("KSAIL_LOG_FILE") or None,
            log_level=os.getenv("KSAIL_LOG_LEVEL", cls.log_level),
        )


# Global settings instance (can be overridden)
_config: Optional[KSailSettings] = None


def get_config() -> KSailSettings:
    """Get the global KSail settings.

    Returns:
        KSailSettings instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = KSailSettings.from_env()
    return _config


def set_config(config: Optional[KSailSettings]):
    """Set the global KSail settings.

    Args:
        config: KSailSettings instance to use globally, or None to reload from environment
    """
    global _config
    _config = config
