"""
Top-level synthesis pipeline.

    config  -->  frame count  -->  frames (reveal)  +  timing  -->  graph

synthesize() is pure: the same config always produces equal frames, timing
and graph.  It validates everything up front and either returns a complete
Synthesis or raises; no partial frame set ever leaves this module.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any

from typeloop.config import config_to_record, validate_config
from typeloop.exceptions import InvalidConfigError, TimingBudgetWarning
from typeloop.frame_count import compute_frame_count
from typeloop.graph import build_graph
from typeloop.reveal import render_frames
from typeloop.timing import allocate_timing, check_timing_budget
from typeloop.types import (
    AnimationConfig,
    FrameDescriptor,
    ReactionGraph,
    TimingEntry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Synthesis:
    """Result of one synthesis request."""
    config: AnimationConfig
    frames: tuple[FrameDescriptor, ...]
    timing: tuple[TimingEntry, ...]
    graph: ReactionGraph
    warnings: tuple[str, ...] = field(default=())

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view of frames and edges."""
        return {
            "config": config_to_record(self.config),
            "frameCount": self.frame_count,
            "cyclic": self.graph.cyclic,
            "frames": [
                {
                    "index": f.index,
                    "text": f.visible_text,
                    "opacity": f.opacity,
                    "relativeFontScale": f.relative_font_scale,
                    "offset": list(f.offset),
                }
                for f in self.frames
            ],
            "edges": [
                {
                    "from": e.from_frame,
                    "to": e.to_frame,
                    "waitMs": e.wait_ms,
                    "transitionMs": e.transition_ms,
                    "kind": e.kind.value,
                    "easing": e.easing.value,
                }
                for e in self.graph.edges
            ],
            "warnings": list(self.warnings),
        }


def synthesize(config: AnimationConfig) -> Synthesis:
    """
    Compute frames, timing and reaction graph for *config*.

    Raises
    ------
    InvalidConfigError
        If the config is invalid or the text yields no transition.
    """
    config = validate_config(config)

    frame_count = compute_frame_count(config.style, config.reveal_unit, config.text)
    if frame_count < 2:
        raise InvalidConfigError("Text must not be empty.")

    frames = render_frames(config, frame_count)
    timing = allocate_timing(
        config.style, config.total_duration_ms, frame_count, config.direction,
    )
    graph = build_graph(frame_count, timing, config.style)

    notes: list[str] = []
    report = check_timing_budget(timing, config.total_duration_ms)
    if report is not None:
        message = report.message()
        logger.warning(message)
        warnings.warn(message, TimingBudgetWarning, stacklevel=2)
        notes.append(message)

    logger.info(
        "Synthesized %d frames for %r (%s/%s/%s, %.0f ms)",
        frame_count, config.text, config.style.value,
        config.reveal_unit.value, config.direction.value,
        config.total_duration_ms,
    )
    return Synthesis(
        config=config,
        frames=frames,
        timing=timing,
        graph=graph,
        warnings=tuple(notes),
    )
