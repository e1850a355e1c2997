#!/usr/bin/env python3
"""KSail CLI - Scaffold consistent Kubernetes cluster projects."""

import typer
from rich.console import Console

from ksail import __version__
from ksail.cli_init_commands import register_init_commands

app = typer.Typer(
    name="ksail",
    help="""KSail - Scaffold consistent Kubernetes cluster projects

One spec. ksail.yaml + distribution config + kustomization.

Quick start:
  ksail init                         # Kind project in the current directory
  ksail init -d K3d --cni Cilium     # K3d with Cilium
  ksail init -m docker.io=https://registry-1.docker.io
  ksail init --force                 # Regenerate existing files

More commands: ksail --help
""",
    add_completion=False,
)

console = Console()

register_init_commands(app, console)


@app.command()
def version():
    """Show the KSail version."""
    console.print(f"ksail {__version__}")


if __name__ == "__main__":
    app()
