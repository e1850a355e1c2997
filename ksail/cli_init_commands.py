"""Init CLI command - scaffold a new cluster project."""
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from ksail.cli_support import (
    handle_cli_error,
    print_error,
    print_event,
    print_warning,
    setup_file_logging,
)
from ksail.core.logger import get_logger
from ksail.models.cluster import DEFAULT_SOURCE_DIRECTORY, ClusterConfigError, ClusterSpec
from ksail.scaffold import ScaffoldError, ScaffoldManager
from ksail.scaffold.defaults import KSAIL_CONFIG_FILE

logger = get_logger(__name__)


def _previous_distribution_config(output: Path, console: Console) -> str:
    """Read distributionConfig from an existing ksail.yaml, if any."""
    existing = output / KSAIL_CONFIG_FILE
    if not existing.exists():
        return ""

    try:
        return ClusterSpec.load(existing).distribution_config
    except (ClusterConfigError, OSError) as exc:
        print_warning(console, f"Ignoring unreadable {existing}: {exc}")
        return ""


def register_init_commands(app: typer.Typer, console: Console) -> None:
    """Attach the init command to the main CLI."""

    @app.command("init")
    def init(
        distribution: str = typer.Option("Kind", "--distribution", "-d",
                                         help="Distribution: Kind, K3d or EKS"),
        distribution_config: Optional[str] = typer.Option(
            None, "--distribution-config",
            help="Distribution config file (defaults to the distribution's canonical name)"),
        context: str = typer.Option("", "--context", "-c",
                                    help="Kubeconfig context (defaults per distribution)"),
        source_directory: str = typer.Option(DEFAULT_SOURCE_DIRECTORY, "--source-directory", "-s",
                                             help="Directory for Kubernetes manifests"),
        cni: str = typer.Option("Default", "--cni",
                                help="CNI: Default, Cilium, Calico or Flannel"),
        metrics_server: str = typer.Option("Enabled", "--metrics-server",
                                           help="Metrics server: Enabled or Disabled"),
        mirror_registry: Optional[List[str]] = typer.Option(
            None, "--mirror-registry", "-m",
            help="Mirror registry as host=upstream (repeatable)", metavar="HOST=UPSTREAM"),
        output: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
        force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
    ):
        """Scaffold ksail.yaml, a distribution config and a kustomization.

        Existing files are kept unless --force is given.

        Examples:
            ksail init                               # Kind project here
            ksail init -d K3d --metrics-server Disabled
            ksail init -d EKS -o clusters/prod
            ksail init -m docker.io=https://registry-1.docker.io -m ghcr.io=https://ghcr.io
        """
        setup_file_logging(log_file=log_file, verbose=verbose)

        if distribution_config is None:
            distribution_config = _previous_distribution_config(output, console)

        try:
            spec = ClusterSpec(
                distribution=distribution,
                distribution_config=distribution_config,
                context=context,
                source_directory=source_directory,
                cni=cni,
                metrics_server=metrics_server,
                mirror_registries=mirror_registry or [],
            )
        except ValidationError as exc:
            for error in exc.errors():
                field = ".".join(str(part) for part in error["loc"])
                print_error(console, f"{field}: {error['msg']}")
            raise typer.Exit(2)

        manager = ScaffoldManager(spec, on_event=lambda event: print_event(console, event))
        try:
            manager.scaffold(output, force=force)
        except ScaffoldError as exc:
            logger.debug(f"Scaffolding failed: {exc}")
            handle_cli_error(exc, console, verbose=verbose)
