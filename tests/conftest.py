"""
Shared fixtures for the typeloop test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from typeloop.config import make_config
from typeloop.presets import PresetRegistry


@pytest.fixture
def make():
    """Shorthand for building a validated config."""
    def _make(text="Hello", style="typing", unit="letter", direction="forward",
              duration=1000, color="#ffffff"):
        return make_config(text, style, unit, direction, duration, color)
    return _make


@pytest.fixture
def preset_dir(tmp_path: Path) -> Path:
    """A preset directory holding one custom preset."""
    d = tmp_path / "presets"
    d.mkdir()
    (d / "slow-type.yaml").write_text(
        "name: slow-type\n"
        "description: Very slow typing.\n"
        "style: typing\n"
        "revealUnit: word\n"
        "totalDurationMs: 5000\n",
        encoding="utf-8",
    )
    return d


@pytest.fixture
def isolated_registry(preset_dir: Path, monkeypatch, tmp_path: Path) -> PresetRegistry:
    """Registry that sees only the built-ins and *preset_dir*."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TYPELOOP_PRESET_PATH", raising=False)
    monkeypatch.setattr("typeloop.presets._USER_CONFIG_DIR", tmp_path / "no-user-dir")
    return PresetRegistry(extra_dirs=[preset_dir])
