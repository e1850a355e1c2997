"""Mirror registry parsing and translation.

Mirror registries are given as ``host=upstream`` strings, e.g.
``docker.io=https://registry-1.docker.io``. Malformed entries are dropped
rather than rejected so one bad value never blocks scaffolding. Whitespace
around the host and the upstream is stripped before the emptiness check, so
``" =x"`` is dropped for every distribution.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ksail.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_REGISTRY_PORT = "5000"


@dataclass(frozen=True)
class MirrorSpec:
    """A parsed mirror registry entry."""
    host: str
    upstream: str


def parse_mirror_spec(raw: str) -> Optional[MirrorSpec]:
    """Parse ``host=upstream``; returns None when either side is empty."""
    host, sep, upstream = raw.partition("=")
    host = host.strip()
    upstream = upstream.strip()
    if not sep or not host or not upstream:
        logger.debug(f"Ignoring invalid mirror registry spec '{raw}'")
        return None
    return MirrorSpec(host=host, upstream=upstream)


def parse_mirror_specs(raws: Iterable[str]) -> List[MirrorSpec]:
    """Parse all entries in order, dropping invalid ones."""
    specs = []
    for raw in raws:
        spec = parse_mirror_spec(raw)
        if spec is not None:
            specs.append(spec)
    return specs


def extract_port(upstream: str) -> str:
    """Return the port of an upstream URL, or 5000 when none is given."""
    for scheme in ("http://", "https://"):
        if upstream.startswith(scheme):
            upstream = upstream[len(scheme):]
            break

    if ":" not in upstream:
        return DEFAULT_REGISTRY_PORT

    port = upstream.rsplit(":", 1)[1]
    return port.split("/", 1)[0]


def container_name(host: str) -> str:
    """Name of the mirror container on the kind network (docker.io -> kind-docker-io)."""
    return "kind-" + host.replace(".", "-")


def containerd_patches(raws: Iterable[str]) -> List[str]:
    """Build one containerd mirror patch per valid entry (Kind)."""
    patches = []
    for spec in parse_mirror_specs(raws):
        endpoint = f"http://{container_name(spec.host)}:{extract_port(spec.upstream)}"
        patches.append(
            f'[plugins."io.containerd.grpc.v1.cri".registry.mirrors."{spec.host}"]\n'
            f'  endpoint = ["{endpoint}"]'
        )
    return patches


def k3d_registry_config(raws: Iterable[str]) -> str:
    """Build the aggregated ``mirrors:`` block for k3d's registries.config.

    One entry per distinct host, first occurrence wins. Empty string when
    there is nothing valid to emit.
    """
    seen = set()
    lines = []
    for spec in parse_mirror_specs(raws):
        if spec.host in seen:
            continue
        seen.add(spec.host)
        lines.extend([
            f'  "{spec.host}":',
            "    endpoint:",
            f"      - {spec.upstream}",
        ])

    if not lines:
        return ""

    return "\n".join(["mirrors:"] + lines) + "\n"
