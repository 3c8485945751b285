"""
Configuration parsing and validation.

Turns the flat record sent by a host UI into a validated AnimationConfig:

    {"text": "Hello", "revealUnit": "letter", "direction": "forward",
     "style": "typing", "totalDurationMs": 900, "color": "#ff8800"}

snake_case keys are accepted as well, plus the legacy ``typeBy`` key and
``duration`` in seconds.  The legacy styles ``scale-grow`` and
``scale-shrink`` map to scale forward / backwards.  Everything is rejected
with InvalidConfigError before any frame is computed.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Any, Mapping, TypeVar

from typeloop.exceptions import InvalidConfigError
from typeloop.types import (
    RGB,
    WHITE,
    AnimationConfig,
    AnimationStyle,
    Direction,
    RevealUnit,
)

DEFAULT_DURATION_MS = 1000.0

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

# Legacy style names that also imply a direction.
STYLE_ALIASES: dict[str, tuple[AnimationStyle, Direction]] = {
    "scale-grow": (AnimationStyle.SCALE, Direction.FORWARD),
    "scale-shrink": (AnimationStyle.SCALE, Direction.BACKWARDS),
}

E = TypeVar("E", bound=enum.Enum)


def parse_hex_color(value: Any) -> RGB:
    """Parse ``#RRGGBB`` (hash optional).  Anything else becomes opaque white."""
    if isinstance(value, RGB):
        return value
    if not isinstance(value, str):
        return WHITE
    m = _HEX_RE.match(value.strip())
    if m is None:
        return WHITE
    r, g, b = (int(part, 16) / 255 for part in m.groups())
    return RGB(r, g, b)


def _parse_enum(enum_cls: type[E], raw: Any, field_name: str) -> E:
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls(raw.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(member.value for member in enum_cls)
    raise InvalidConfigError(
        f"Unknown {field_name} {raw!r}. Expected one of: {choices}."
    )


def parse_style(raw: Any) -> tuple[AnimationStyle, Direction | None]:
    """Resolve a style name; aliases also return the direction they imply."""
    if isinstance(raw, str) and raw.strip().lower() in STYLE_ALIASES:
        return STYLE_ALIASES[raw.strip().lower()]
    return _parse_enum(AnimationStyle, raw, "style"), None


def _parse_duration(raw: Any) -> float:
    if isinstance(raw, bool):
        raise InvalidConfigError(f"Duration must be a number, got {raw!r}.")
    if not isinstance(raw, (int, float)):
        try:
            raw = float(raw)
        except (TypeError, ValueError):
            raise InvalidConfigError(f"Duration must be a number, got {raw!r}.") from None
    if not math.isfinite(raw) or raw <= 0:
        raise InvalidConfigError(f"Duration must be positive, got {raw!r}.")
    return float(raw)


def make_config(
    text: Any,
    style: Any,
    reveal_unit: Any = RevealUnit.LETTER,
    direction: Any = Direction.FORWARD,
    total_duration_ms: Any = DEFAULT_DURATION_MS,
    color: Any = WHITE,
) -> AnimationConfig:
    """Validate loose inputs and build an AnimationConfig."""
    if not isinstance(text, str):
        raise InvalidConfigError(f"Text must be a string, got {type(text).__name__}.")
    if not text.strip():
        raise InvalidConfigError("Text must not be empty.")

    parsed_style, implied_direction = parse_style(style)
    parsed_direction = _parse_enum(Direction, direction, "direction")
    if implied_direction is not None:
        parsed_direction = implied_direction

    return AnimationConfig(
        text=text,
        style=parsed_style,
        reveal_unit=_parse_enum(RevealUnit, reveal_unit, "reveal unit"),
        direction=parsed_direction,
        total_duration_ms=_parse_duration(total_duration_ms),
        color=parse_hex_color(color),
    )


def validate_config(config: AnimationConfig) -> AnimationConfig:
    """Re-check a directly constructed AnimationConfig."""
    return make_config(
        config.text,
        config.style,
        config.reveal_unit,
        config.direction,
        config.total_duration_ms,
        config.color,
    )


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def config_from_record(record: Mapping[str, Any]) -> AnimationConfig:
    """Build a validated config from a flat host record."""
    if not isinstance(record, Mapping):
        raise InvalidConfigError(f"Config record must be a mapping, got {type(record).__name__}.")

    style = _first(record, "style")
    if style is None:
        raise InvalidConfigError("Config record has no 'style'.")

    duration_ms = _first(record, "totalDurationMs", "total_duration_ms")
    if duration_ms is None:
        seconds = _first(record, "duration")
        duration_ms = _parse_duration(seconds) * 1000 if seconds is not None else DEFAULT_DURATION_MS

    return make_config(
        text=_first(record, "text"),
        style=style,
        reveal_unit=_first(record, "revealUnit", "reveal_unit", "typeBy") or RevealUnit.LETTER,
        direction=_first(record, "direction") or Direction.FORWARD,
        total_duration_ms=duration_ms,
        color=_first(record, "color") or WHITE,
    )


def config_to_record(config: AnimationConfig) -> dict[str, Any]:
    """Inverse of config_from_record, using the camelCase keys."""
    return {
        "text": config.text,
        "style": config.style.value,
        "revealUnit": config.reveal_unit.value,
        "direction": config.direction.value,
        "totalDurationMs": config.total_duration_ms,
        "color": config.color.to_hex(),
    }
