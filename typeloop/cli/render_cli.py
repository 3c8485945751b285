"""
CLI commands for planning and rendering an animation.

Usage:
    typeloop plan "Hello there" --style typing --unit word --duration 900
    typeloop plan "Hi" --preset pop-in --json
    typeloop render "Hello" --style fade-in -o hello.gif
    typeloop render "Hello" --preset spiral -o hello.svg
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ..adapters import (
    RasterAdapter,
    RasterConfig,
    RasterFormat,
    RecordingAdapter,
    StoryboardAdapter,
)
from ..adapters.base import FrameRealizationAdapter
from ..config import DEFAULT_DURATION_MS, STYLE_ALIASES, make_config
from ..exceptions import TypeLoopError
from ..presets import get_registry
from ..realize import run_request
from ..synthesis import synthesize
from ..types import AnimationConfig, AnimationStyle, Direction, RevealUnit


_SUFFIX_FORMATS = {
    ".gif": "gif",
    ".png": "apng",
    ".apng": "apng",
    ".svg": "svg",
    ".json": "json",
}

_STYLE_CHOICES = sorted({s.value for s in AnimationStyle} | set(STYLE_ALIASES))


def config_from_args(args: argparse.Namespace) -> AnimationConfig:
    """Merge a preset (if any) with the explicit command line options."""
    overrides = {
        "style": args.style,
        "reveal_unit": args.unit,
        "direction": args.direction,
        "total_duration_ms": args.duration,
        "color": args.color,
    }
    if args.preset:
        preset = get_registry().get(args.preset)
        return preset.to_config(args.text, **overrides)
    return make_config(
        text=args.text,
        style=args.style or AnimationStyle.TYPING.value,
        reveal_unit=args.unit or RevealUnit.LETTER.value,
        direction=args.direction or Direction.FORWARD.value,
        total_duration_ms=args.duration if args.duration is not None else DEFAULT_DURATION_MS,
        color=args.color or "#ffffff",
    )


def _format_plan_table(synthesis) -> str:
    lines = []
    text_w = max(4, max(len(repr(f.visible_text)) for f in synthesis.frames))
    header = f"  {'#':>3}   {'Text':<{text_w}}   Opacity   Scale   Offset"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for f in synthesis.frames:
        offset = f"({f.offset[0]:+.2f}, {f.offset[1]:+.2f})"
        lines.append(
            f"  {f.index:>3}   {repr(f.visible_text):<{text_w}}   "
            f"{f.opacity:>7.2f}   {f.relative_font_scale:>5.2f}   {offset}"
        )
    lines.append("")
    kind = "loop" if synthesis.graph.cyclic else "one-shot"
    lines.append(f"  Edges ({kind}, {synthesis.graph.cycle_duration_ms:.1f} ms):")
    for e in synthesis.graph.edges:
        lines.append(
            f"  {e.from_frame:>3} -> {e.to_frame:<3}  wait {e.wait_ms:>8.1f} ms   "
            f"{e.kind.value} {e.transition_ms:.1f} ms ({e.easing.value})"
        )
    return "\n".join(lines) + "\n"


def cmd_plan(args: argparse.Namespace) -> int:
    """Handler for ``typeloop plan``."""
    try:
        synthesis = synthesize(config_from_args(args))
    except TypeLoopError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(synthesis.to_dict(), indent=2))
    else:
        print(_format_plan_table(synthesis), end="")
        for note in synthesis.warnings:
            print(f"Warning: {note}", file=sys.stderr)
    return 0


def output_kind(path: Path, explicit: str | None) -> str:
    if explicit:
        return explicit
    try:
        return _SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Cannot infer output format from '{path.name}'; use --format."
        ) from None


def _make_adapter(kind: str, args: argparse.Namespace) -> FrameRealizationAdapter:
    if kind in ("gif", "apng"):
        return RasterAdapter(RasterConfig(
            output_path=Path(args.output),
            format=RasterFormat(kind),
            font_path=Path(args.font) if args.font else None,
            font_size=args.font_size,
        ))
    if kind == "svg":
        return StoryboardAdapter()
    return RecordingAdapter()


def cmd_render(args: argparse.Namespace) -> int:
    """Handler for ``typeloop render``."""
    output_path = Path(args.output)
    try:
        kind = output_kind(output_path, args.format)
        config = config_from_args(args)
    except (TypeLoopError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    adapter = _make_adapter(kind, args)
    status = run_request(config, adapter, progress=args.progress)
    if not status.success:
        print(f"Error: {status.error}", file=sys.stderr)
        return 1
    for note in status.warnings:
        print(f"Warning: {note}", file=sys.stderr)

    # Raster output is written by the adapter; the others return data.
    if kind == "svg":
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(status.output, encoding="utf-8")
    elif kind == "json":
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(status.output.to_dict(), indent=2), encoding="utf-8")

    print(f"Done! {status.frame_count} frames -> {output_path}")
    return 0


def add_animation_arguments(p: argparse.ArgumentParser) -> None:
    """Options shared by ``plan`` and ``render``."""
    p.add_argument("text", help="Text to animate")
    p.add_argument(
        "--style", choices=_STYLE_CHOICES, default=None,
        help="Animation style (default: typing, or the preset's)",
    )
    p.add_argument(
        "--unit", choices=[u.value for u in RevealUnit], default=None,
        help="Reveal unit (default: letter)",
    )
    p.add_argument(
        "--direction", choices=[d.value for d in Direction], default=None,
        help="Playback direction (default: forward)",
    )
    p.add_argument(
        "--duration", type=float, default=None,
        help=f"Total duration in milliseconds (default: {DEFAULT_DURATION_MS:.0f})",
    )
    p.add_argument(
        "--color", default=None,
        help="Text color as #rrggbb (default: #ffffff)",
    )
    p.add_argument(
        "--preset", default=None,
        help="Start from a named preset; explicit options override it",
    )


def build_plan_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``plan`` subcommand."""
    p = subparsers.add_parser(
        "plan",
        help="Show the frames and timed transitions for a text",
        description="Synthesize an animation and print its frames and reaction graph.",
    )
    add_animation_arguments(p)
    p.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    p.set_defaults(func=cmd_plan)


def build_render_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``render`` subcommand."""
    p = subparsers.add_parser(
        "render",
        help="Render a text animation to a file",
        description="Realize an animation as an animated GIF or APNG, an SVG storyboard, or a JSON variant set.",
    )
    add_animation_arguments(p)
    p.add_argument(
        "-o", "--output", required=True,
        help="Output file; the format follows the extension (.gif, .png, .apng, .svg, .json)",
    )
    p.add_argument(
        "--format", choices=["gif", "apng", "svg", "json"], default=None,
        help="Override the format inferred from the output extension",
    )
    p.add_argument(
        "--font", default=None,
        help="TrueType font file for raster output (default: Pillow's bundled font)",
    )
    p.add_argument(
        "--font-size", type=int, default=48,
        help="Base font size for raster output (default: 48)",
    )
    p.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar while frames are realized",
    )
    p.set_defaults(func=cmd_render)
