"""
Text revelation engine.

Maps (config, frame index, frame count) to a FrameDescriptor: which part of
the text is visible in that keyframe and how it looks (opacity, relative
font size, slide displacement).

Every style is handled by a pure function selected from a closed lookup
table keyed on AnimationStyle.  Frames never depend on each other, so any
single frame can be recomputed from its index alone.

Progress runs from 0 at the first frame to 1 at the last:

    progress = frame_index / (frame_count - 1)       (1 when frame_count == 1)

Rotate is simulated (hosts cannot rotate text through the interaction
model) as a spiral reveal around the centre of the text:

    q < 0.3          seed      centre unit(s) only
    0.3 <= q < 0.5   outward   units within distance reach*q of the centre
    q >= 0.5         fill      inner core plus remaining letters in reading order
    q >= 0.7                   text reaches full size

Word rotate ranks words purely by distance from the centre.  Backwards
rotate evaluates the forward rule at q = 1 - progress, so the edges
collapse first and the centre disappears last.
"""

from __future__ import annotations

import math
from typing import Callable

from typeloop.frame_count import split_words
from typeloop.types import (
    AnimationConfig,
    AnimationStyle,
    Direction,
    FrameDescriptor,
    RevealUnit,
)

MIN_FONT_SCALE = 0.1
FADE_RATE = 1.2
ROTATE_OPACITY_RATE = 1.5

SPIRAL_SEED_END = 0.3
SPIRAL_FILL_START = 0.5
SPIRAL_FULL_SIZE = 0.7
SPIRAL_SEED_RADIUS = 0.5

# Guards floor/ceil against k / n * n landing just off an integer.
_EPS = 1e-9

StyleHandler = Callable[[AnimationConfig, int, int], FrameDescriptor]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def frame_progress(frame_index: int, frame_count: int) -> float:
    """Normalized position of a frame in [0, 1]."""
    if frame_count <= 1:
        return 1.0
    return min(max(frame_index / (frame_count - 1), 0.0), 1.0)


def _descriptor(
    config: AnimationConfig,
    frame_index: int,
    visible_text: str,
    opacity: float = 1.0,
    scale: float = 1.0,
    offset: tuple[float, float] = (0.0, 0.0),
) -> FrameDescriptor:
    return FrameDescriptor(
        index=frame_index,
        visible_text=visible_text,
        opacity=min(max(opacity, 0.0), 1.0),
        relative_font_scale=min(max(scale, MIN_FONT_SCALE), 1.0),
        offset=offset,
        color=config.color,
    )


def _units(config: AnimationConfig) -> list[str]:
    if config.reveal_unit is RevealUnit.LETTER:
        return list(config.text)
    return split_words(config.text)


def _join(config: AnimationConfig, units: list[str]) -> str:
    separator = "" if config.reveal_unit is RevealUnit.LETTER else " "
    return separator.join(units)


# ---------------------------------------------------------------------------
# Typing
# ---------------------------------------------------------------------------

def _typing(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    units = _units(config)
    k = min(frame_index, len(units))
    if config.direction is Direction.FORWARD:
        shown = units[:k]
    else:
        shown = units[len(units) - k:]
    return _descriptor(config, frame_index, _join(config, shown))


# ---------------------------------------------------------------------------
# Fade
# ---------------------------------------------------------------------------

def _fade_in(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    progress = frame_progress(frame_index, frame_count)
    return _descriptor(
        config, frame_index, config.text,
        opacity=min(progress * FADE_RATE, 1.0),
    )


def _fade_out(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    progress = frame_progress(frame_index, frame_count)
    return _descriptor(
        config, frame_index, config.text,
        opacity=max(1.0 - progress * FADE_RATE, 0.0),
    )


# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------

def _scale(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    progress = frame_progress(frame_index, frame_count)
    if config.direction is Direction.BACKWARDS:
        progress = 1.0 - progress
    return _descriptor(
        config, frame_index, config.text,
        opacity=progress,
        scale=max(progress, MIN_FONT_SCALE),
    )


# ---------------------------------------------------------------------------
# Slide
# ---------------------------------------------------------------------------

# Unit vector pointing from the resting position towards where the text
# starts.  Screen coordinates: +y is down.
_SLIDE_ORIGIN: dict[AnimationStyle, tuple[float, float]] = {
    AnimationStyle.SLIDE_LEFT: (1.0, 0.0),
    AnimationStyle.SLIDE_RIGHT: (-1.0, 0.0),
    AnimationStyle.SLIDE_UP: (0.0, 1.0),
    AnimationStyle.SLIDE_DOWN: (0.0, -1.0),
}


def _slide(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    progress = frame_progress(frame_index, frame_count)
    ox, oy = _SLIDE_ORIGIN[config.style]
    remaining = 1.0 - progress
    offset = (ox * remaining, oy * remaining)
    if config.reveal_unit is RevealUnit.LETTER:
        visible = math.floor(progress * len(config.text) + _EPS)
        text = config.text[:visible]
    else:
        # Word slides move the whole line; the host positions it.
        text = config.text
    return _descriptor(config, frame_index, text, offset=offset)


# ---------------------------------------------------------------------------
# Rotate (spiral reveal)
# ---------------------------------------------------------------------------

def spiral_letter_indices(n: int, q: float) -> list[int]:
    """Indices of letters visible at spiral progress *q*, in reading order."""
    if n == 0 or q <= 0.0:
        return []
    centre = (n - 1) / 2
    reach = centre
    distance = [abs(i - centre) for i in range(n)]

    if q < SPIRAL_SEED_END:
        radius = SPIRAL_SEED_RADIUS
        return [i for i in range(n) if distance[i] <= radius]
    if q < SPIRAL_FILL_START:
        radius = max(SPIRAL_SEED_RADIUS, reach * q)
        return [i for i in range(n) if distance[i] <= radius]

    core_radius = max(SPIRAL_SEED_RADIUS, reach * SPIRAL_FILL_START)
    core = [i for i in range(n) if distance[i] <= core_radius]
    remaining = [i for i in range(n) if distance[i] > core_radius]
    fill_fraction = (q - SPIRAL_FILL_START) / (1.0 - SPIRAL_FILL_START)
    fill = min(len(remaining), math.floor(fill_fraction * len(remaining) + 0.5 + _EPS))
    return sorted(core + remaining[:fill])


def spiral_word_indices(n: int, q: float) -> list[int]:
    """Indices of words visible at spiral progress *q*, in reading order.

    Words appear centre first, then by increasing distance from the centre
    (left before right on ties).
    """
    if n == 0 or q <= 0.0:
        return []
    centre = (n - 1) / 2
    ranked = sorted(range(n), key=lambda i: (abs(i - centre), i))
    count = min(n, max(0, math.ceil(q * n - _EPS)))
    return sorted(ranked[:count])


def _spiral_appearance(q: float) -> tuple[float, float]:
    """(opacity, relative font scale) at spiral progress *q*."""
    opacity = min(q * ROTATE_OPACITY_RATE, 1.0)
    scale = min(max(q / SPIRAL_FULL_SIZE, MIN_FONT_SCALE), 1.0)
    return opacity, scale


def _rotate(config: AnimationConfig, frame_index: int, frame_count: int) -> FrameDescriptor:
    progress = frame_progress(frame_index, frame_count)
    q = progress if config.direction is Direction.FORWARD else 1.0 - progress
    units = _units(config)
    if config.reveal_unit is RevealUnit.LETTER:
        indices = spiral_letter_indices(len(units), q)
    else:
        indices = spiral_word_indices(len(units), q)
    opacity, scale = _spiral_appearance(q)
    return _descriptor(
        config, frame_index, _join(config, [units[i] for i in indices]),
        opacity=opacity, scale=scale,
    )


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

STYLE_HANDLERS: dict[AnimationStyle, StyleHandler] = {
    AnimationStyle.TYPING: _typing,
    AnimationStyle.FADE_IN: _fade_in,
    AnimationStyle.FADE_OUT: _fade_out,
    AnimationStyle.SLIDE_LEFT: _slide,
    AnimationStyle.SLIDE_RIGHT: _slide,
    AnimationStyle.SLIDE_UP: _slide,
    AnimationStyle.SLIDE_DOWN: _slide,
    AnimationStyle.SCALE: _scale,
    AnimationStyle.ROTATE: _rotate,
}


def render_frame(
    config: AnimationConfig,
    frame_index: int,
    frame_count: int,
) -> FrameDescriptor:
    """
    Compute the descriptor for a single frame.

    Raises
    ------
    ValueError
        If *frame_index* is outside ``0 .. frame_count - 1``.
    """
    if frame_count < 1 or not 0 <= frame_index < frame_count:
        raise ValueError(
            f"Frame index {frame_index} out of range for {frame_count} frame(s)."
        )
    return STYLE_HANDLERS[config.style](config, frame_index, frame_count)


def render_frames(config: AnimationConfig, frame_count: int) -> tuple[FrameDescriptor, ...]:
    """Compute descriptors for every frame, in index order."""
    return tuple(render_frame(config, i, frame_count) for i in range(frame_count))
