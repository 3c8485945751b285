"""
Tests for the text revelation engine.
"""

from __future__ import annotations

import pytest

from typeloop.frame_count import compute_frame_count
from typeloop.reveal import (
    MIN_FONT_SCALE,
    frame_progress,
    render_frame,
    render_frames,
    spiral_letter_indices,
    spiral_word_indices,
)
from typeloop.types import AnimationStyle, RevealUnit


def _texts(config, n=None):
    n = n or compute_frame_count(config.style, config.reveal_unit, config.text)
    return [f.visible_text for f in render_frames(config, n)]


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

class TestFrameProgress:
    def test_endpoints(self):
        assert frame_progress(0, 5) == 0.0
        assert frame_progress(4, 5) == 1.0

    def test_midpoint(self):
        assert frame_progress(2, 5) == pytest.approx(0.5)

    def test_single_frame_is_complete(self):
        assert frame_progress(0, 1) == 1.0


# ---------------------------------------------------------------------------
# Typing
# ---------------------------------------------------------------------------

class TestTyping:
    def test_letter_forward_is_prefix(self, make):
        config = make("Hello")
        texts = _texts(config)
        assert texts == ["Hello"[:k] for k in range(6)]

    def test_word_forward(self, make):
        config = make("Hi there", unit="word")
        assert _texts(config) == ["", "Hi", "Hi there"]

    def test_letter_backwards_is_suffix(self, make):
        config = make("abc", direction="backwards")
        assert _texts(config) == ["", "c", "bc", "abc"]

    def test_word_backwards(self, make):
        config = make("one two three", unit="word", direction="backwards")
        assert _texts(config) == ["", "three", "two three", "one two three"]

    @pytest.mark.parametrize("text", ["abc", "Hello world", "xy z"])
    def test_backwards_mirrors_forward_on_reversed_text(self, make, text):
        back = _texts(make(text, direction="backwards"))
        forward_reversed = _texts(make(text[::-1]))
        assert back == [t[::-1] for t in forward_reversed]

    def test_typing_is_fully_opaque_at_full_size(self, make):
        for f in render_frames(make("Hey"), 4):
            assert f.opacity == 1.0
            assert f.relative_font_scale == 1.0
            assert f.offset == (0.0, 0.0)


# ---------------------------------------------------------------------------
# Fade
# ---------------------------------------------------------------------------

class TestFade:
    def test_fade_in_rises_to_opaque(self, make):
        frames = render_frames(make("Hello", style="fade-in"), 6)
        assert frames[0].opacity == 0.0
        assert frames[-1].opacity == 1.0
        assert frames[4].opacity == pytest.approx(0.96)
        opacities = [f.opacity for f in frames]
        assert opacities == sorted(opacities)

    def test_fade_out_falls_to_transparent(self, make):
        frames = render_frames(make("Hello", style="fade-out"), 6)
        assert frames[0].opacity == 1.0
        assert frames[-1].opacity == 0.0
        opacities = [f.opacity for f in frames]
        assert opacities == sorted(opacities, reverse=True)

    def test_fade_shows_full_text(self, make):
        assert set(_texts(make("Hi there", style="fade-in", unit="word"))) == {"Hi there"}

    def test_direction_is_ignored(self, make):
        fwd = render_frames(make("Hello", style="fade-in"), 6)
        back = render_frames(make("Hello", style="fade-in", direction="backwards"), 6)
        assert fwd == back


# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------

class TestScale:
    def test_forward_grows(self, make):
        start, end = render_frames(make("AB", style="scale"), 2)
        assert start.opacity == 0.0
        assert start.relative_font_scale == MIN_FONT_SCALE
        assert end.opacity == 1.0
        assert end.relative_font_scale == 1.0

    def test_backwards_shrinks(self, make):
        start, end = render_frames(make("AB", style="scale", direction="backwards"), 2)
        assert start.opacity == 1.0
        assert start.relative_font_scale == 1.0
        assert end.opacity == 0.0
        assert end.relative_font_scale == MIN_FONT_SCALE

    def test_full_text_in_both_frames(self, make):
        assert _texts(make("Hello world", style="scale")) == ["Hello world"] * 2


# ---------------------------------------------------------------------------
# Slide
# ---------------------------------------------------------------------------

class TestSlide:
    @pytest.mark.parametrize("style, origin", [
        ("slide-left", (1.0, 0.0)),
        ("slide-right", (-1.0, 0.0)),
        ("slide-up", (0.0, 1.0)),
        ("slide-down", (0.0, -1.0)),
    ])
    def test_starts_displaced_and_settles(self, make, style, origin):
        frames = render_frames(make("abcd", style=style), 5)
        assert frames[0].offset == origin
        assert frames[-1].offset == (0.0, 0.0)

    def test_letter_slide_reveals_prefix(self, make):
        frames = render_frames(make("abcd", style="slide-left"), 5)
        assert [f.visible_text for f in frames] == ["", "a", "ab", "abc", "abcd"]
        assert frames[2].offset == pytest.approx((0.5, 0.0))

    def test_word_slide_moves_whole_line(self, make):
        config = make("Hi there", style="slide-up", unit="word")
        assert _texts(config) == ["Hi there"] * 3


# ---------------------------------------------------------------------------
# Rotate (spiral)
# ---------------------------------------------------------------------------

class TestSpiralLetters:
    def test_nothing_at_zero(self):
        assert spiral_letter_indices(5, 0.0) == []

    def test_seed_odd_length(self):
        assert spiral_letter_indices(5, 0.1) == [2]

    def test_seed_even_length(self):
        assert spiral_letter_indices(4, 0.1) == [1, 2]

    def test_outward_phase_grows_around_centre(self):
        assert spiral_letter_indices(9, 0.4) == [3, 4, 5]

    def test_fill_phase_starts_with_core(self):
        assert spiral_letter_indices(9, 0.5) == [2, 3, 4, 5, 6]

    def test_fill_phase_adds_in_reading_order(self):
        assert spiral_letter_indices(9, 0.75) == [0, 1, 2, 3, 4, 5, 6]

    def test_everything_at_one(self):
        assert spiral_letter_indices(9, 1.0) == list(range(9))

    def test_monotonic(self):
        steps = [spiral_letter_indices(11, k / 10) for k in range(11)]
        for earlier, later in zip(steps, steps[1:]):
            assert set(earlier) <= set(later)


class TestSpiralWords:
    def test_centre_word_first(self):
        assert spiral_word_indices(3, 1 / 3) == [1]

    def test_left_before_right_on_ties(self):
        assert spiral_word_indices(3, 2 / 3) == [0, 1]

    def test_all_words_at_one(self):
        assert spiral_word_indices(4, 1.0) == [0, 1, 2, 3]


class TestRotate:
    def test_forward_starts_empty_and_ends_full(self, make):
        frames = render_frames(make("Hello", style="rotate"), 6)
        assert frames[0].visible_text == ""
        assert frames[0].opacity == 0.0
        assert frames[0].relative_font_scale == MIN_FONT_SCALE
        assert frames[-1].visible_text == "Hello"
        assert frames[-1].opacity == 1.0
        assert frames[-1].relative_font_scale == 1.0

    def test_backwards_collapses(self, make):
        frames = render_frames(make("Hello", style="rotate", direction="backwards"), 6)
        assert frames[0].visible_text == "Hello"
        assert frames[-1].visible_text == ""

    def test_word_rotate(self, make):
        config = make("one two three", style="rotate", unit="word")
        assert _texts(config) == ["", "two", "one two", "one two three"]


# ---------------------------------------------------------------------------
# Dispatch and bounds
# ---------------------------------------------------------------------------

class TestRenderFrame:
    @pytest.mark.parametrize("index", [-1, 6])
    def test_index_out_of_range(self, make, index):
        with pytest.raises(ValueError):
            render_frame(make("Hello"), index, 6)

    def test_single_frame_equals_batch(self, make):
        config = make("Hello world", style="rotate")
        batch = render_frames(config, 12)
        assert all(render_frame(config, i, 12) == batch[i] for i in range(12))

    def test_color_is_carried(self, make):
        frame = render_frame(make("Hi", color="#ff0000"), 1, 3)
        assert frame.color.to_hex() == "#ff0000"

    @pytest.mark.parametrize("style", list(AnimationStyle))
    @pytest.mark.parametrize("unit", list(RevealUnit))
    @pytest.mark.parametrize("direction", ["forward", "backwards"])
    def test_appearance_within_bounds(self, make, style, unit, direction):
        config = make("Hello big world", style=style.value, unit=unit.value, direction=direction)
        for i, f in enumerate(render_frames(config, 6)):
            assert f.index == i
            assert 0.0 <= f.opacity <= 1.0
            assert MIN_FONT_SCALE <= f.relative_font_scale <= 1.0
