"""Per-file emission with skip/force semantics and change notifications."""
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Type

from ksail.core.config import get_config
from ksail.core.logger import get_logger
from ksail.scaffold.errors import ScaffoldError
from ksail.scaffold.generators import Generator, GeneratorOptions

logger = get_logger(__name__)


class EventAction(str, Enum):
    """What happened to a scaffolded file."""

    CREATED = "created"
    OVERWROTE = "overwrote"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ScaffoldEvent:
    """Notification for a single scaffolded artifact."""

    action: EventAction
    artifact: str

    @property
    def message(self) -> str:
        if self.action == EventAction.SKIPPED:
            return f"skipped '{self.artifact}', file exists use --force to overwrite"
        return f"{self.action.value} '{self.artifact}'"


EventSink = Callable[[ScaffoldEvent], None]


def _stat_if_exists(path: Path) -> Optional[os.stat_result]:
    """Stat ``path``; any failure counts as "does not exist"."""
    try:
        return path.stat()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.debug(f"Treating {path} as missing after stat error: {exc}")
        return None


class FileEmitter:
    """Runs one generator per artifact and reports the outcome."""

    def __init__(self, sink: Optional[EventSink] = None, mtime_step_ms: Optional[int] = None):
        """Initialize emitter.

        Args:
            sink: Called synchronously with every event
            mtime_step_ms: Minimum mtime advance after a forced overwrite
                (defaults to the runtime setting)
        """
        self.sink = sink
        step_ms = get_config().mtime_step_ms if mtime_step_ms is None else mtime_step_ms
        self.mtime_step_ns = max(step_ms, 1) * 1_000_000

    def emit(
        self,
        generator: Generator,
        model: Any,
        output_path: Path,
        display_name: str,
        force: bool,
        error_cls: Type[ScaffoldError] = ScaffoldError,
        replaced_mtime_ns: Optional[int] = None,
    ) -> ScaffoldEvent:
        """Generate one artifact.

        Args:
            generator: Generator used to render and write the model
            model: Document model handed to the generator
            output_path: Target file
            display_name: Name used in notifications
            force: Overwrite an existing file
            error_cls: Error raised (chained) when generation fails
            replaced_mtime_ns: mtime of a file at ``output_path`` that was
                removed just before this call; it is treated as the
                previous version of the file

        Returns:
            The event that was emitted

        Raises:
            ScaffoldError: ``error_cls`` wrapping the generator or mtime failure
        """
        path = Path(output_path)
        info = _stat_if_exists(path)

        if info is not None and not force:
            return self._notify(ScaffoldEvent(EventAction.SKIPPED, display_name))

        previous_mtime_ns = info.st_mtime_ns if info is not None else replaced_mtime_ns

        try:
            generator.generate(model, GeneratorOptions(output=str(path), force=force))
        except Exception as exc:
            raise error_cls(exc) from exc

        if force and previous_mtime_ns is not None:
            try:
                self._ensure_mtime_advanced(path, previous_mtime_ns)
            except OSError as exc:
                raise error_cls(exc) from exc

        action = EventAction.OVERWROTE if previous_mtime_ns is not None else EventAction.CREATED
        return self._notify(ScaffoldEvent(action, display_name))

    def _ensure_mtime_advanced(self, path: Path, previous_mtime_ns: int) -> None:
        current = path.stat().st_mtime_ns
        if current > previous_mtime_ns:
            return

        target = max(previous_mtime_ns + self.mtime_step_ns, time.time_ns())
        os.utime(path, ns=(target, target))
        logger.debug(f"Advanced mtime of {path} to {target}ns")

    def _notify(self, event: ScaffoldEvent) -> ScaffoldEvent:
        logger.debug(event.message)
        if self.sink is not None:
            self.sink(event)
        return event
