"""
CLI commands for animation presets.

Usage:
    typeloop presets list
    typeloop presets show <name>
"""

from __future__ import annotations

import argparse
import sys

from ..exceptions import PresetError
from ..presets import Preset, get_registry


def _format_preset_table(presets: list[Preset]) -> str:
    if not presets:
        return "  (no presets found)\n"
    name_w = max(len(p.name) for p in presets)
    style_w = max(len(p.style) for p in presets)
    lines = []
    header = f"  {'Name':<{name_w}}   {'Style':<{style_w}}   Description"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for p in presets:
        lines.append(f"  {p.name:<{name_w}}   {p.style:<{style_w}}   {p.description[:60]}")
    return "\n".join(lines) + "\n"


def cmd_list(args: argparse.Namespace) -> int:
    print(_format_preset_table(get_registry().list_presets()), end="")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    try:
        preset = get_registry().get(args.name)
    except PresetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Name:        {preset.name}")
    print(f"Description: {preset.description}")
    print(f"Style:       {preset.style}")
    print(f"Unit:        {preset.reveal_unit}")
    print(f"Direction:   {preset.direction}")
    print(f"Duration:    {float(preset.total_duration_ms):.0f} ms")
    print(f"Color:       {preset.color}")
    if preset.source_path is not None:
        print(f"Source:      {preset.source_path}")
    return 0


def build_presets_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``presets`` subcommand group."""
    p = subparsers.add_parser("presets", help="Browse animation presets")
    sub = p.add_subparsers(dest="presets_command")
    p.set_defaults(func=None)

    ls = sub.add_parser("list", help="List available presets")
    ls.set_defaults(func=cmd_list)

    show = sub.add_parser("show", help="Show one preset")
    show.add_argument("name", help="Preset name")
    show.set_defaults(func=cmd_show)
