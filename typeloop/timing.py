"""
Timing allocation.

Distributes the requested total duration across the outgoing transition of
every frame.  Three policies:

  - scale:   one smart-animate transition lasting the whole duration.
  - typing:  equal instant cuts, no tween (typewriter cadence).
  - others:  equal slots; 20% of each slot is a dissolve, the rest is wait.

The dissolve has a 50 ms floor and the wait a 10 ms floor.  At very short
durations the floors push the realized total above the request; that is
accepted and reported through check_timing_budget().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from typeloop.types import (
    AnimationStyle,
    Direction,
    Easing,
    TimingEntry,
    TransitionKind,
)

logger = logging.getLogger(__name__)

SCALE_START_DELAY_MS = 1.0
TRANSITION_SHARE = 0.2
MIN_TRANSITION_MS = 50.0
MIN_WAIT_MS = 10.0

# Relative slack allowed before an overrun is reported.
BUDGET_TOLERANCE = 1e-6


def easing_for(style: AnimationStyle, direction: Direction = Direction.FORWARD) -> Easing:
    """Easing curve the host should apply to transitions of *style*."""
    if style is AnimationStyle.TYPING:
        return Easing.LINEAR
    if style is AnimationStyle.ROTATE:
        return Easing.EASE_IN_AND_OUT
    if style is AnimationStyle.SCALE and direction is Direction.BACKWARDS:
        return Easing.EASE_IN
    return Easing.EASE_OUT


def allocate_timing(
    style: AnimationStyle,
    total_duration_ms: float,
    frame_count: int,
    direction: Direction = Direction.FORWARD,
) -> tuple[TimingEntry, ...]:
    """
    Compute one TimingEntry per outgoing edge.

    Returns a single entry for scale, otherwise *frame_count* entries
    (one per frame, including the wrap-around edge).
    """
    if total_duration_ms <= 0:
        raise ValueError(f"Total duration must be positive, got {total_duration_ms}.")
    if frame_count < 1:
        raise ValueError(f"Frame count must be at least 1, got {frame_count}.")

    easing = easing_for(style, direction)

    if style is AnimationStyle.SCALE:
        return (TimingEntry(
            wait_ms=SCALE_START_DELAY_MS,
            transition_ms=float(total_duration_ms),
            kind=TransitionKind.SMART_ANIMATE,
            easing=easing,
        ),)

    slot_ms = total_duration_ms / frame_count

    if style is AnimationStyle.TYPING:
        entry = TimingEntry(
            wait_ms=slot_ms,
            transition_ms=0.0,
            kind=TransitionKind.INSTANT,
            easing=easing,
        )
    else:
        transition_ms = max(slot_ms * TRANSITION_SHARE, MIN_TRANSITION_MS)
        entry = TimingEntry(
            wait_ms=max(slot_ms - transition_ms, MIN_WAIT_MS),
            transition_ms=transition_ms,
            kind=TransitionKind.DISSOLVE,
            easing=easing,
        )

    logger.debug(
        "Allocated %d x (wait %.2f ms, transition %.2f ms, %s) for %s",
        frame_count, entry.wait_ms, entry.transition_ms,
        entry.kind.value, style.value,
    )
    return (entry,) * frame_count


# ---------------------------------------------------------------------------
# Budget check
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimingBudgetReport:
    """Advisory report: realized duration exceeds the request."""
    requested_ms: float
    realized_ms: float

    @property
    def overrun_ms(self) -> float:
        return self.realized_ms - self.requested_ms

    def message(self) -> str:
        return (
            f"Realized duration {self.realized_ms:.1f} ms exceeds requested "
            f"{self.requested_ms:.1f} ms by {self.overrun_ms:.1f} ms "
            f"(minimum transition/wait floors applied)."
        )


def realized_duration_ms(entries: tuple[TimingEntry, ...]) -> float:
    return sum(e.total_ms for e in entries)


def check_timing_budget(
    entries: tuple[TimingEntry, ...],
    total_duration_ms: float,
) -> TimingBudgetReport | None:
    """Return a report when the floors pushed the total over the request.

    A scale entry carries a small start delay on top of the full duration;
    that delay is not counted as an overrun.
    """
    realized = realized_duration_ms(entries)
    if len(entries) == 1 and entries[0].kind is TransitionKind.SMART_ANIMATE:
        realized = entries[0].transition_ms
    if realized > total_duration_ms * (1.0 + BUDGET_TOLERANCE):
        return TimingBudgetReport(requested_ms=total_duration_ms, realized_ms=realized)
    return None
