"""
Edge case tests for typeloop.

These tests verify that synthesis handles degenerate and boundary-condition
inputs with clear errors or well-defined output rather than crashes or
silently inconsistent frames.

Run with:
    pytest tests/edge_cases/ -v
"""

from __future__ import annotations

import pytest

from typeloop.adapters import RecordingAdapter
from typeloop.config import make_config
from typeloop.exceptions import InvalidConfigError, TimingBudgetWarning
from typeloop.realize import run_request
from typeloop.synthesis import synthesize
from typeloop.types import AnimationStyle, RevealUnit


# ---------------------------------------------------------------------------
# Text shape
# ---------------------------------------------------------------------------

class TestDegenerateText:
    def test_single_letter(self):
        s = synthesize(make_config("A", "typing"))
        assert [f.visible_text for f in s.frames] == ["", "A"]
        assert [(e.from_frame, e.to_frame) for e in s.graph] == [(0, 1), (1, 0)]

    def test_single_word(self):
        s = synthesize(make_config("Hello", "fade-in", "word"))
        assert s.frame_count == 2

    def test_double_space_yields_empty_word(self):
        s = synthesize(make_config("a  b", "typing", "word"))
        assert [f.visible_text for f in s.frames] == ["", "a", "a ", "a  b"]

    def test_leading_and_trailing_spaces_are_letters(self):
        s = synthesize(make_config(" a ", "typing"))
        assert s.frame_count == 4
        assert s.frames[-1].visible_text == " a "

    def test_unicode_letters(self):
        s = synthesize(make_config("héllo wörld", "rotate"))
        assert s.frames[-1].visible_text == "héllo wörld"

    @pytest.mark.parametrize("text", ["", " ", "   ", "\n"])
    def test_blank_text_rejected(self, text):
        with pytest.raises(InvalidConfigError, match="Text must not be empty"):
            synthesize(make_config(text, "typing"))

    def test_long_text(self):
        text = "x" * 500
        s = synthesize(make_config(text, "typing", total_duration_ms=50_000))
        assert s.frame_count == 501
        assert s.graph.cycle_duration_ms == pytest.approx(50_000)


# ---------------------------------------------------------------------------
# Duration extremes
# ---------------------------------------------------------------------------

class TestDurationExtremes:
    def test_tiny_dissolve_duration_uses_floors(self):
        with pytest.warns(TimingBudgetWarning):
            s = synthesize(make_config("Hello", "slide-down", total_duration_ms=1))
        assert all(e.transition_ms == 50 and e.wait_ms == 10 for e in s.graph)

    def test_tiny_typing_duration_has_no_floor(self):
        s = synthesize(make_config("Hello", "typing", total_duration_ms=6))
        assert all(e.wait_ms == pytest.approx(1) for e in s.graph)
        assert s.warnings == ()

    def test_tiny_scale_duration(self):
        s = synthesize(make_config("Hi", "scale", total_duration_ms=0.5))
        (edge,) = s.graph.edges
        assert edge.transition_ms == 0.5
        assert s.warnings == ()

    def test_huge_duration(self):
        s = synthesize(make_config("Hi", "rotate", total_duration_ms=3.6e6))
        assert s.graph.cycle_duration_ms == pytest.approx(3.6e6)


# ---------------------------------------------------------------------------
# Exhaustive style matrix
# ---------------------------------------------------------------------------

class TestStyleMatrix:
    @pytest.mark.parametrize("style", list(AnimationStyle))
    @pytest.mark.parametrize("unit", list(RevealUnit))
    @pytest.mark.parametrize("direction", ["forward", "backwards"])
    def test_every_combination_realizes(self, style, unit, direction):
        status = run_request(
            {"text": "Hi there you", "style": style.value,
             "revealUnit": unit.value, "direction": direction},
            RecordingAdapter(),
        )
        assert status.success, status.error
        expected = 2 if style is AnimationStyle.SCALE else (
            13 if unit is RevealUnit.LETTER else 4
        )
        assert status.frame_count == expected

    @pytest.mark.parametrize("style", list(AnimationStyle))
    def test_first_and_last_frames_differ(self, style):
        s = synthesize(make_config("Hello", style))
        assert s.frames[0] != s.frames[-1]
