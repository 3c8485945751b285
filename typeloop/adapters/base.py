"""
Frame realization adapter interface.

An adapter materializes a Synthesis on some host surface: a document
editor, an image file, a storyboard.  The realization driver
(typeloop.realize) calls it in a fixed order:

    create_frame_node()            once per frame, ascending index
    combine_frames_into_sequence() once, with every handle
    register_timed_transition()    once per edge, ascending source frame
    finish()                       once

Adapters may raise any exception; the driver reports it as a single
failure event.  Adapters never retry.
"""

from __future__ import annotations

import abc
from typing import Any, Sequence

from typeloop.types import FrameDescriptor, ReactionGraph, TimingEdge


class FrameRealizationAdapter(abc.ABC):
    """Base class for host surfaces."""

    name: str = "adapter"

    @abc.abstractmethod
    def create_frame_node(self, descriptor: FrameDescriptor) -> Any:
        """Materialize one frame and return a handle to it."""

    @abc.abstractmethod
    def combine_frames_into_sequence(self, handles: Sequence[Any]) -> Any:
        """Group realized frames into one navigable unit."""

    @abc.abstractmethod
    def register_timed_transition(self, source: Any, target: Any, edge: TimingEdge) -> None:
        """Register one timed edge between two realized frames."""

    def finish(self, sequence: Any, graph: ReactionGraph) -> Any:
        """Called after every edge is registered; returns the adapter's output."""
        return sequence
