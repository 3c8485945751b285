"""
In-memory host model.

Records what a document-editing host would build: one variant per frame
(named ``State=1``, ``State=2``, ...), a variant set stacking the variants in
a column, and a timed reaction on each variant.  Text extents are estimated
from the font size, so no font files are needed.  The result serializes to
plain JSON for inspection or for a host bridge to replay.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from typeloop.adapters.base import FrameRealizationAdapter
from typeloop.layout import BoundingBox, enclosing_box, frame_box_size, stack_vertically
from typeloop.types import FrameDescriptor, ReactionGraph, TimingEdge

logger = logging.getLogger(__name__)

BASE_FONT_SIZE = 16.0
CHAR_WIDTH_EM = 0.6
LINE_HEIGHT_EM = 1.2


@dataclass
class RecordedFrame:
    node_id: str
    name: str
    descriptor: FrameDescriptor
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    transitions: list[RecordedTransition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = self.descriptor
        return {
            "id": self.node_id,
            "name": self.name,
            "text": d.visible_text,
            "opacity": d.opacity,
            "fontSize": BASE_FONT_SIZE * d.relative_font_scale,
            "offset": list(d.offset),
            "color": d.color.to_hex(),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "reactions": [t.to_dict() for t in self.transitions],
        }


@dataclass(frozen=True)
class RecordedTransition:
    source_id: str
    target_id: str
    wait_ms: float
    transition_ms: float
    kind: str
    easing: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "destinationId": self.target_id,
            "timeoutMs": self.wait_ms,
            "transition": {
                "type": self.kind,
                "durationMs": self.transition_ms,
                "easing": self.easing,
            },
        }


@dataclass
class RecordedSequence:
    name: str
    frames: list[RecordedFrame]
    bounds: BoundingBox
    looping: bool = False

    @property
    def transitions(self) -> list[RecordedTransition]:
        return [t for frame in self.frames for t in frame.transitions]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "looping": self.looping,
            "width": self.bounds.width,
            "height": self.bounds.height,
            "variants": [frame.to_dict() for frame in self.frames],
        }


def estimate_text_size(text: str, font_size: float) -> tuple[float, float]:
    """Rough extent of a single line of text."""
    return (len(text) * font_size * CHAR_WIDTH_EM, font_size * LINE_HEIGHT_EM)


class RecordingAdapter(FrameRealizationAdapter):
    """Adapter that builds an in-memory variant set."""

    name = "recording"

    def __init__(self, sequence_name: str = "Text Animation") -> None:
        self.sequence_name = sequence_name
        self.frames: list[RecordedFrame] = []
        self.sequence: RecordedSequence | None = None
        self._ids = itertools.count(1)

    def create_frame_node(self, descriptor: FrameDescriptor) -> RecordedFrame:
        font_size = BASE_FONT_SIZE * descriptor.relative_font_scale
        width, height = frame_box_size(*estimate_text_size(descriptor.visible_text, font_size))
        frame = RecordedFrame(
            node_id=f"node-{next(self._ids)}",
            name=f"State={descriptor.index + 1}",
            descriptor=descriptor,
            width=width,
            height=height,
        )
        self.frames.append(frame)
        logger.debug("Recorded %s (%r)", frame.name, descriptor.visible_text)
        return frame

    def combine_frames_into_sequence(self, handles: Sequence[RecordedFrame]) -> RecordedSequence:
        frames = list(handles)
        boxes = stack_vertically([(f.width, f.height) for f in frames])
        for frame, box in zip(frames, boxes):
            frame.x, frame.y = box.x_min, box.y_min
        self.sequence = RecordedSequence(
            name=self.sequence_name,
            frames=frames,
            bounds=enclosing_box(boxes),
        )
        return self.sequence

    def register_timed_transition(
        self,
        source: RecordedFrame,
        target: RecordedFrame,
        edge: TimingEdge,
    ) -> None:
        source.transitions.append(RecordedTransition(
            source_id=source.node_id,
            target_id=target.node_id,
            wait_ms=edge.wait_ms,
            transition_ms=edge.transition_ms,
            kind=edge.kind.value,
            easing=edge.easing.value,
        ))

    def finish(self, sequence: RecordedSequence, graph: ReactionGraph) -> RecordedSequence:
        sequence.looping = graph.cyclic
        return sequence
