"""
Frame count calculation.

The number of keyframes is one more than the number of reveal units, so
that frame 0 can hold the "nothing revealed" state.  Scale animations are
a binary start/end pair regardless of text length.
"""

from __future__ import annotations

from typeloop.types import AnimationStyle, RevealUnit

SCALE_FRAME_COUNT = 2


def split_words(text: str) -> list[str]:
    """Split on single spaces.  Consecutive spaces yield empty words."""
    return text.split(" ")


def unit_count(text: str, reveal_unit: RevealUnit) -> int:
    """Number of reveal units in *text*; 0 for empty or blank text."""
    if not text.strip():
        return 0
    if reveal_unit is RevealUnit.LETTER:
        return len(text)
    return len(split_words(text))


def compute_frame_count(
    style: AnimationStyle,
    reveal_unit: RevealUnit,
    text: str,
) -> int:
    """
    Decide how many frames an animation has.

    Returns 1 for blank text; callers must treat a single frame as a
    rejection because no transition exists.
    """
    if style is AnimationStyle.SCALE:
        return SCALE_FRAME_COUNT
    return unit_count(text, reveal_unit) + 1
