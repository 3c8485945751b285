"""
typeloop -- Text animation frame synthesis and timing.

Turns a line of text and an animation style into discrete keyframes, a
per-frame timing plan, and a reaction graph that chains the frames into a
looping (or one-shot) animation on a host surface.
"""

__version__ = "0.1.0"

from typeloop.config import config_from_record, make_config
from typeloop.synthesis import Synthesis, synthesize
from typeloop.types import (
    RGB,
    AnimationConfig,
    AnimationStyle,
    Direction,
    Easing,
    FrameDescriptor,
    ReactionGraph,
    RevealUnit,
    TimingEdge,
    TimingEntry,
    TransitionKind,
)

__all__ = [
    "RGB",
    "AnimationConfig",
    "AnimationStyle",
    "Direction",
    "Easing",
    "FrameDescriptor",
    "ReactionGraph",
    "RevealUnit",
    "Synthesis",
    "TimingEdge",
    "TimingEntry",
    "TransitionKind",
    "config_from_record",
    "make_config",
    "synthesize",
]
