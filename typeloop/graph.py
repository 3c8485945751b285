"""
Reaction graph construction.

Chains frames with timed edges.  Every style except scale walks frames in
ascending order and wraps from the last frame back to frame 0, so the host
loops indefinitely.  Scale is a single terminal edge 0 -> 1 that plays once.

Direction never changes the topology: it is already baked into what each
frame contains.
"""

from __future__ import annotations

import logging
from typing import Sequence

from typeloop.exceptions import InsufficientFramesError
from typeloop.types import (
    AnimationStyle,
    ReactionGraph,
    TimingEdge,
    TimingEntry,
)

logger = logging.getLogger(__name__)


def is_cyclic_style(style: AnimationStyle) -> bool:
    return style is not AnimationStyle.SCALE


def edge_pairs(frame_count: int, cyclic: bool) -> list[tuple[int, int]]:
    """(from, to) index pairs in registration order."""
    if cyclic:
        return [(i, (i + 1) % frame_count) for i in range(frame_count)]
    return [(i, i + 1) for i in range(frame_count - 1)]


def build_graph(
    frame_count: int,
    timing_entries: Sequence[TimingEntry],
    style: AnimationStyle,
) -> ReactionGraph:
    """
    Build the reaction graph for *frame_count* frames.

    Raises
    ------
    InsufficientFramesError
        If fewer than two frames exist.
    ValueError
        If the number of timing entries does not match the number of edges.
    """
    if frame_count < 2:
        raise InsufficientFramesError(
            f"Insufficient frames for a transition graph: {frame_count}."
        )

    cyclic = is_cyclic_style(style)
    if style is AnimationStyle.SCALE:
        pairs = [(0, 1)]
    else:
        pairs = edge_pairs(frame_count, cyclic)

    if len(timing_entries) != len(pairs):
        raise ValueError(
            f"Expected {len(pairs)} timing entries for {frame_count} frames "
            f"({style.value}), got {len(timing_entries)}."
        )

    edges = tuple(
        TimingEdge(
            from_frame=src,
            to_frame=dst,
            wait_ms=entry.wait_ms,
            transition_ms=entry.transition_ms,
            kind=entry.kind,
            easing=entry.easing,
        )
        for (src, dst), entry in zip(pairs, timing_entries)
    )

    logger.debug(
        "Built %s graph: %d frames, %d edges",
        "cyclic" if cyclic else "terminal", frame_count, len(edges),
    )
    return ReactionGraph(frame_count=frame_count, edges=edges, cyclic=cyclic)
