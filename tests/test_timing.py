"""
Tests for timing allocation and the budget check.
"""

from __future__ import annotations

import pytest

from typeloop.timing import (
    MIN_TRANSITION_MS,
    MIN_WAIT_MS,
    SCALE_START_DELAY_MS,
    allocate_timing,
    check_timing_budget,
    easing_for,
    realized_duration_ms,
)
from typeloop.types import AnimationStyle, Direction, Easing, TransitionKind


# ---------------------------------------------------------------------------
# Allocation
# ---------------------------------------------------------------------------

class TestTypingTiming:
    def test_equal_instant_slots(self):
        entries = allocate_timing(AnimationStyle.TYPING, 900, 3)
        assert len(entries) == 3
        for e in entries:
            assert e.wait_ms == pytest.approx(300)
            assert e.transition_ms == 0.0
            assert e.kind is TransitionKind.INSTANT
            assert e.easing is Easing.LINEAR

    def test_sum_matches_even_for_short_durations(self):
        entries = allocate_timing(AnimationStyle.TYPING, 60, 12)
        assert realized_duration_ms(entries) == pytest.approx(60)


class TestDissolveTiming:
    def test_twenty_percent_transition(self):
        entries = allocate_timing(AnimationStyle.FADE_IN, 2000, 5)
        for e in entries:
            assert e.transition_ms == pytest.approx(80)
            assert e.wait_ms == pytest.approx(320)
            assert e.kind is TransitionKind.DISSOLVE

    @pytest.mark.parametrize("style", [
        AnimationStyle.FADE_IN, AnimationStyle.FADE_OUT,
        AnimationStyle.SLIDE_LEFT, AnimationStyle.ROTATE,
    ])
    @pytest.mark.parametrize("total, n", [(1000, 4), (3000, 12), (2500, 10)])
    def test_sum_matches_when_slots_are_long(self, style, total, n):
        assert total / n >= 250
        entries = allocate_timing(style, total, n)
        assert realized_duration_ms(entries) == pytest.approx(total)

    def test_floors_apply(self):
        entries = allocate_timing(AnimationStyle.FADE_IN, 100, 10)
        assert entries[0].transition_ms == MIN_TRANSITION_MS
        assert entries[0].wait_ms == MIN_WAIT_MS


class TestScaleTiming:
    def test_single_smart_animate_entry(self):
        (entry,) = allocate_timing(AnimationStyle.SCALE, 500, 2)
        assert entry.wait_ms == SCALE_START_DELAY_MS
        assert entry.transition_ms == 500
        assert entry.kind is TransitionKind.SMART_ANIMATE

    def test_easing_follows_direction(self):
        (grow,) = allocate_timing(AnimationStyle.SCALE, 500, 2, Direction.FORWARD)
        (shrink,) = allocate_timing(AnimationStyle.SCALE, 500, 2, Direction.BACKWARDS)
        assert grow.easing is Easing.EASE_OUT
        assert shrink.easing is Easing.EASE_IN


class TestEasing:
    def test_table(self):
        assert easing_for(AnimationStyle.TYPING) is Easing.LINEAR
        assert easing_for(AnimationStyle.ROTATE) is Easing.EASE_IN_AND_OUT
        assert easing_for(AnimationStyle.FADE_IN) is Easing.EASE_OUT
        assert easing_for(AnimationStyle.SLIDE_DOWN) is Easing.EASE_OUT


class TestInvalidInput:
    @pytest.mark.parametrize("total", [0, -10])
    def test_non_positive_duration(self, total):
        with pytest.raises(ValueError):
            allocate_timing(AnimationStyle.TYPING, total, 3)

    def test_zero_frames(self):
        with pytest.raises(ValueError):
            allocate_timing(AnimationStyle.FADE_IN, 1000, 0)


# ---------------------------------------------------------------------------
# Budget check
# ---------------------------------------------------------------------------

class TestTimingBudget:
    def test_no_report_within_budget(self):
        entries = allocate_timing(AnimationStyle.FADE_IN, 1000, 4)
        assert check_timing_budget(entries, 1000) is None

    def test_overrun_reported(self):
        entries = allocate_timing(AnimationStyle.FADE_IN, 100, 10)
        report = check_timing_budget(entries, 100)
        assert report is not None
        assert report.realized_ms == pytest.approx(600)
        assert report.overrun_ms == pytest.approx(500)
        assert "exceeds requested" in report.message()

    def test_scale_start_delay_is_not_an_overrun(self):
        entries = allocate_timing(AnimationStyle.SCALE, 500, 2)
        assert check_timing_budget(entries, 500) is None
