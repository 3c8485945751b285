"""
Core data structures shared by the synthesis engine and the adapters.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator


class AnimationStyle(enum.Enum):
    """Closed set of supported text animation styles."""
    TYPING = "typing"
    FADE_IN = "fade-in"
    FADE_OUT = "fade-out"
    SLIDE_LEFT = "slide-left"
    SLIDE_RIGHT = "slide-right"
    SLIDE_UP = "slide-up"
    SLIDE_DOWN = "slide-down"
    SCALE = "scale"
    ROTATE = "rotate"


class RevealUnit(enum.Enum):
    """Granularity of progressive disclosure."""
    LETTER = "letter"
    WORD = "word"


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARDS = "backwards"


class TransitionKind(enum.Enum):
    """How the host moves from one frame to the next."""
    INSTANT = "instant"               # Hard cut, no tween.
    DISSOLVE = "dissolve"             # Cross-fade.
    SMART_ANIMATE = "smart-animate"   # Host interpolates matching layers.


class Easing(enum.Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_AND_OUT = "ease-in-and-out"


@dataclass(frozen=True)
class RGB:
    """Colour with channels normalized to [0, 1]."""
    r: float
    g: float
    b: float

    def to_bytes(self) -> tuple[int, int, int]:
        return (
            round(self.r * 255),
            round(self.g * 255),
            round(self.b * 255),
        )

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.to_bytes())


WHITE = RGB(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class AnimationConfig:
    """Fully validated input for one synthesis request."""
    text: str
    style: AnimationStyle
    reveal_unit: RevealUnit = RevealUnit.LETTER
    direction: Direction = Direction.FORWARD
    total_duration_ms: float = 1000.0
    color: RGB = WHITE


@dataclass(frozen=True)
class FrameDescriptor:
    """Everything a host needs to materialize one keyframe."""
    index: int                          # 0-based frame number
    visible_text: str
    opacity: float                      # [0, 1]
    relative_font_scale: float          # (0, 1]
    offset: tuple[float, float] = (0.0, 0.0)  # Slide displacement, fraction of frame size
    color: RGB = WHITE


@dataclass(frozen=True)
class TimingEntry:
    """Timing for the single outgoing transition of one frame."""
    wait_ms: float
    transition_ms: float
    kind: TransitionKind
    easing: Easing = Easing.LINEAR

    @property
    def total_ms(self) -> float:
        return self.wait_ms + self.transition_ms


@dataclass(frozen=True)
class TimingEdge:
    """A timed transition between two frames of the reaction graph."""
    from_frame: int
    to_frame: int
    wait_ms: float
    transition_ms: float
    kind: TransitionKind
    easing: Easing = Easing.LINEAR

    @property
    def total_ms(self) -> float:
        return self.wait_ms + self.transition_ms


@dataclass(frozen=True)
class ReactionGraph:
    """Ordered, immutable set of timed edges over frames 0..N-1.

    A cyclic graph has an edge out of every frame (including N-1 -> 0) and
    loops indefinitely.  A terminal graph has no edge out of its last frame
    and plays once.
    """
    frame_count: int
    edges: tuple[TimingEdge, ...]
    cyclic: bool

    def __iter__(self) -> Iterator[TimingEdge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def outgoing(self, frame: int) -> TimingEdge | None:
        """Return the edge leaving *frame*, or None for a terminal frame."""
        for edge in self.edges:
            if edge.from_frame == frame:
                return edge
        return None

    @property
    def terminal_frame(self) -> int | None:
        if self.cyclic:
            return None
        return self.frame_count - 1

    @property
    def cycle_duration_ms(self) -> float:
        """Total time to walk every edge once."""
        return sum(edge.total_ms for edge in self.edges)

    def frame_hold_ms(self, frame: int, terminal_hold_ms: float = 0.0) -> float:
        """How long *frame* stays on screen before the next one is shown."""
        edge = self.outgoing(frame)
        if edge is None:
            return terminal_hold_ms
        return edge.total_ms
