"""
Realization driver.

Walks a Synthesis through a FrameRealizationAdapter in the order the host
needs (frames, sequence, edges) and reports the outcome as one StatusEvent.

Error handling
--------------
- Invalid configuration: rejected before the adapter is touched.
- Adapter failure at any stage: logged, reported as ``success=False`` with a
  human-readable message.  Nothing is retried and no partial result is
  returned.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Mapping

from tqdm import tqdm

from typeloop.adapters.base import FrameRealizationAdapter
from typeloop.config import config_from_record
from typeloop.exceptions import TypeLoopError
from typeloop.synthesis import Synthesis, synthesize
from typeloop.types import AnimationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusEvent:
    """Outbound status reported after synthesis completes or fails."""
    success: bool
    frame_count: int | None = None
    error: str | None = None
    warnings: tuple[str, ...] = field(default=())
    output: Any = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{success, frameCount?, error?, warnings?}``."""
        record: dict[str, Any] = {"success": self.success}
        if self.frame_count is not None:
            record["frameCount"] = self.frame_count
        if self.error is not None:
            record["error"] = self.error
        if self.warnings:
            record["warnings"] = list(self.warnings)
        return record


# ---------------------------------------------------------------------------
# Progress reporting
# ---------------------------------------------------------------------------

class ProgressReporter:
    """Thin wrapper around a tqdm bar on stderr."""

    def __init__(self, total: int, description: str = "Realizing", enabled: bool = True) -> None:
        self.total = total
        self.completed = 0
        self._bar = tqdm(
            total=total, desc=description, unit="frame",
            file=sys.stderr, dynamic_ncols=True, disable=not enabled,
        )

    def update(self, n: int = 1) -> None:
        self.completed += n
        self._bar.update(n)

    def close(self) -> None:
        self._bar.close()


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

def realize(
    synthesis: Synthesis,
    adapter: FrameRealizationAdapter,
    progress: bool = False,
) -> StatusEvent:
    """Materialize *synthesis* through *adapter*."""
    stage = "frame creation"
    try:
        reporter = ProgressReporter(
            total=synthesis.frame_count,
            description=f"Realizing ({adapter.name})",
            enabled=progress,
        )
        handles: list[Any] = []
        try:
            for descriptor in synthesis.frames:
                handles.append(adapter.create_frame_node(descriptor))
                reporter.update()
        finally:
            reporter.close()

        stage = "sequence assembly"
        sequence = adapter.combine_frames_into_sequence(handles)

        stage = "transition registration"
        for edge in sorted(synthesis.graph.edges, key=lambda e: e.from_frame):
            adapter.register_timed_transition(
                handles[edge.from_frame], handles[edge.to_frame], edge,
            )

        stage = "finalization"
        output = adapter.finish(sequence, synthesis.graph)
    except Exception as exc:
        message = f"{adapter.name} failed during {stage}: {exc}"
        logger.error(message, exc_info=True)
        return StatusEvent(success=False, error=message)

    logger.info(
        "Realized %d frames and %d transitions with %s",
        synthesis.frame_count, len(synthesis.graph), adapter.name,
    )
    return StatusEvent(
        success=True,
        frame_count=synthesis.frame_count,
        warnings=synthesis.warnings,
        output=output,
    )


def run_request(
    request: AnimationConfig | Mapping[str, Any],
    adapter: FrameRealizationAdapter,
    progress: bool = False,
) -> StatusEvent:
    """Parse, synthesize and realize one request; never raises TypeLoopError."""
    try:
        config = request if isinstance(request, AnimationConfig) else config_from_record(request)
        synthesis = synthesize(config)
    except TypeLoopError as exc:
        logger.warning("Rejected animation request: %s", exc)
        return StatusEvent(success=False, error=str(exc))
    return realize(synthesis, adapter, progress=progress)
