"""
Animation presets -- named partial configurations stored as YAML.

A preset file looks like::

    name: typewriter
    description: Letter-by-letter typing, one second per loop.
    style: typing
    revealUnit: letter
    direction: forward
    totalDurationMs: 1000
    color: "#ffffff"

Presets are discovered from four sources (later sources are overridden by
earlier ones):
1. Project-local presets (./.typeloop/presets/)
2. Directories listed in TYPELOOP_PRESET_PATH (colon separated)
3. User presets (~/.config/typeloop/presets/)
4. Built-in presets shipped with the package
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from typeloop.config import DEFAULT_DURATION_MS, make_config
from typeloop.exceptions import InvalidConfigError, PresetError
from typeloop.types import AnimationConfig

logger = logging.getLogger(__name__)

_BUILTIN_DIR = Path(__file__).parent / "builtin_presets"
_USER_CONFIG_DIR = Path.home() / ".config" / "typeloop" / "presets"
_LOCAL_DIR_NAME = ".typeloop/presets"
_PRESET_SUFFIXES = (".yaml", ".yml")


@dataclass(frozen=True)
class Preset:
    """A stored configuration without text."""
    name: str
    style: str
    description: str = ""
    reveal_unit: str = "letter"
    direction: str = "forward"
    total_duration_ms: float = DEFAULT_DURATION_MS
    color: str = "#ffffff"
    source_path: Path | None = None

    def to_config(self, text: str, **overrides: Any) -> AnimationConfig:
        """Build a validated config for *text*; keyword overrides win."""
        fields: dict[str, Any] = {
            "style": self.style,
            "reveal_unit": self.reveal_unit,
            "direction": self.direction,
            "total_duration_ms": self.total_duration_ms,
            "color": self.color,
        }
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return make_config(text=text, **fields)


def parse_preset(yaml_text: str, source_path: Path | None = None) -> Preset:
    """Parse one preset document."""
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as exc:
        raise PresetError(f"Invalid YAML in preset {source_path or ''}: {exc}") from exc
    if not isinstance(data, dict):
        raise PresetError(f"Preset {source_path or ''} must be a mapping.")
    if "name" not in data or "style" not in data:
        raise PresetError(f"Preset {source_path or ''} needs 'name' and 'style'.")

    preset = Preset(
        name=str(data["name"]),
        style=str(data["style"]),
        description=str(data.get("description", "")),
        reveal_unit=str(data.get("revealUnit", data.get("reveal_unit", "letter"))),
        direction=str(data.get("direction", "forward")),
        total_duration_ms=data.get(
            "totalDurationMs", data.get("total_duration_ms", DEFAULT_DURATION_MS)
        ),
        color=str(data.get("color", "#ffffff")),
        source_path=source_path,
    )
    # Validate eagerly with placeholder text so broken presets fail at load.
    try:
        preset.to_config("preset")
    except InvalidConfigError as exc:
        raise PresetError(f"Preset '{preset.name}': {exc}") from exc
    return preset


def _env_preset_dirs() -> list[Path]:
    raw = os.environ.get("TYPELOOP_PRESET_PATH", "")
    if not raw:
        return []
    return [Path(p) for p in raw.split(":") if p]


def preset_search_dirs() -> list[Path]:
    dirs: list[Path] = []
    local = Path.cwd() / _LOCAL_DIR_NAME
    if local.is_dir():
        dirs.append(local)
    dirs.extend(d for d in _env_preset_dirs() if d.is_dir())
    if _USER_CONFIG_DIR.is_dir():
        dirs.append(_USER_CONFIG_DIR)
    dirs.append(_BUILTIN_DIR)
    return dirs


class PresetRegistry:
    """Discovers, caches, and serves Preset objects."""

    def __init__(self, extra_dirs: list[Path] | None = None) -> None:
        self._cache: dict[str, Preset] = {}
        self._extra_dirs = extra_dirs or []
        self._scanned = False

    def _scan_dir(self, directory: Path) -> dict[str, Preset]:
        found: dict[str, Preset] = {}
        if not directory.is_dir():
            return found
        for path in sorted(directory.iterdir()):
            if path.name.startswith(".") or path.suffix not in _PRESET_SUFFIXES:
                continue
            try:
                preset = parse_preset(path.read_text(encoding="utf-8"), source_path=path)
            except (OSError, PresetError) as exc:
                logger.warning("Skipping preset %s: %s", path, exc)
                continue
            found[preset.name] = preset
        return found

    def scan(self, force: bool = False) -> None:
        if self._scanned and not force:
            return
        self._cache.clear()
        search = preset_search_dirs()
        for ed in reversed(self._extra_dirs):
            if ed.is_dir():
                search.insert(0, ed)
        for d in reversed(search):
            self._cache.update(self._scan_dir(d))
        self._scanned = True
        logger.debug("Loaded %d presets from %d directories", len(self._cache), len(search))

    def list_presets(self) -> list[Preset]:
        self.scan()
        return sorted(self._cache.values(), key=lambda p: p.name)

    def get(self, name: str) -> Preset:
        self.scan()
        if name not in self._cache:
            raise PresetError(
                f"Preset '{name}' not found.  "
                f"Available: {', '.join(sorted(self._cache))}"
            )
        return self._cache[name]

    def register(self, preset: Preset) -> None:
        self.scan()
        self._cache[preset.name] = preset


_default_registry: PresetRegistry | None = None


def get_registry() -> PresetRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = PresetRegistry()
    return _default_registry
