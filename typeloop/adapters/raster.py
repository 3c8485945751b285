"""
Raster adapter: realize frames as images and write an animated GIF or APNG.

Each frame is drawn with Pillow onto a shared canvas sized to the largest
frame.  Per-frame display time comes from the reaction graph: a frame is
shown for the wait plus transition time of its outgoing edge.  Transitions
are cuts; there is no tweening between keyframes.  Cyclic graphs loop
forever, terminal graphs play once and hold the last frame.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from typeloop.adapters.base import FrameRealizationAdapter
from typeloop.layout import centered_origin, frame_box_size
from typeloop.types import FrameDescriptor, ReactionGraph, TimingEdge

logger = logging.getLogger(__name__)


class RasterFormat(enum.Enum):
    GIF = "gif"
    APNG = "apng"


@dataclass
class RasterConfig:
    """Rendering and output options."""
    output_path: Path = Path("animation.gif")
    format: RasterFormat = RasterFormat.GIF
    font_path: Path | None = None          # None = Pillow's bundled font
    font_size: int = 48
    background: tuple[int, int, int, int] = (0, 0, 0, 0)
    matte: tuple[int, int, int] = (24, 24, 24)  # GIF has no alpha channel
    terminal_hold_ms: int = 1000           # Display time for a frame with no outgoing edge


@dataclass
class RasterFrame:
    """A rendered glyph layer, not yet placed on the canvas."""
    descriptor: FrameDescriptor
    layer: Image.Image
    canvas: Image.Image | None = None
    hold_ms: float | None = None


@dataclass
class RasterSequence:
    frames: list[RasterFrame]
    size: tuple[int, int]
    looping: bool = False

    @property
    def images(self) -> list[Image.Image]:
        return [f.canvas for f in self.frames if f.canvas is not None]

    @property
    def durations_ms(self) -> list[int]:
        return [max(1, round(f.hold_ms or 0)) for f in self.frames]


def apply_opacity(layer: Image.Image, opacity: float) -> Image.Image:
    """Scale the alpha channel of an RGBA layer."""
    if opacity >= 1.0:
        return layer
    pixels = np.array(layer.convert("RGBA"), dtype=np.float32)
    pixels[..., 3] *= max(opacity, 0.0)
    return Image.fromarray(np.round(pixels).astype(np.uint8))


class RasterAdapter(FrameRealizationAdapter):
    """Adapter that renders frames with Pillow and saves an animation file."""

    name = "raster"

    def __init__(self, config: RasterConfig | None = None) -> None:
        self.cfg = config or RasterConfig()
        self._fonts: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if size not in self._fonts:
            if self.cfg.font_path is not None:
                self._fonts[size] = ImageFont.truetype(str(self.cfg.font_path), size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def render_layer(self, descriptor: FrameDescriptor) -> Image.Image:
        """Draw the visible text, tightly cropped, at the frame's size and opacity."""
        text = descriptor.visible_text
        if not text.strip():
            return Image.new("RGBA", (1, 1), (0, 0, 0, 0))
        size = max(1, round(self.cfg.font_size * descriptor.relative_font_scale))
        font = self._font(size)
        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        left, top, right, bottom = probe.textbbox((0, 0), text, font=font)
        layer = Image.new("RGBA", (max(1, right - left), max(1, bottom - top)), (0, 0, 0, 0))
        ImageDraw.Draw(layer).text(
            (-left, -top), text, font=font,
            fill=(*descriptor.color.to_bytes(), 255),
        )
        return apply_opacity(layer, descriptor.opacity)

    def create_frame_node(self, descriptor: FrameDescriptor) -> RasterFrame:
        return RasterFrame(descriptor=descriptor, layer=self.render_layer(descriptor))

    def combine_frames_into_sequence(self, handles: Sequence[RasterFrame]) -> RasterSequence:
        frames = list(handles)
        if not frames:
            raise ValueError("Cannot build an animation from zero frames.")
        widest = max(f.layer.width for f in frames)
        tallest = max(f.layer.height for f in frames)
        box_w, box_h = frame_box_size(widest, tallest)
        size = (math.ceil(box_w), math.ceil(box_h))

        for frame in frames:
            canvas = Image.new("RGBA", size, self.cfg.background)
            x, y = centered_origin(size, frame.layer.size)
            dx, dy = frame.descriptor.offset
            position = (round(x + dx * size[0]), round(y + dy * size[1]))
            canvas.paste(frame.layer, position, frame.layer)
            frame.canvas = canvas

        logger.debug("Composed %d frames on a %dx%d canvas", len(frames), *size)
        return RasterSequence(frames=frames, size=size)

    def register_timed_transition(
        self,
        source: RasterFrame,
        target: RasterFrame,
        edge: TimingEdge,
    ) -> None:
        source.hold_ms = edge.total_ms

    def finish(self, sequence: RasterSequence, graph: ReactionGraph) -> Path:
        sequence.looping = graph.cyclic
        for frame in sequence.frames:
            if frame.hold_ms is None:
                frame.hold_ms = self.cfg.terminal_hold_ms

        output = Path(self.cfg.output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        if self.cfg.format is RasterFormat.GIF:
            self._save_gif(sequence, output)
        else:
            self._save_apng(sequence, output)
        logger.info("Wrote %s (%d frames)", output, len(sequence.frames))
        return output

    # ---- writers ----------------------------------------------------------

    def _save_gif(self, sequence: RasterSequence, output: Path) -> None:
        flattened = []
        for image in sequence.images:
            matte = Image.new("RGBA", image.size, (*self.cfg.matte, 255))
            matte.alpha_composite(image)
            flattened.append(matte.convert("RGB").quantize(colors=256))
        options = {}
        if sequence.looping:
            options["loop"] = 0  # 0 = infinite
        flattened[0].save(
            str(output),
            format="GIF",
            save_all=True,
            append_images=flattened[1:],
            duration=sequence.durations_ms,
            disposal=2,
            **options,
        )

    def _save_apng(self, sequence: RasterSequence, output: Path) -> None:
        images = sequence.images
        images[0].save(
            str(output),
            format="PNG",
            save_all=True,
            append_images=images[1:],
            duration=sequence.durations_ms,
            loop=0 if sequence.looping else 1,
            default_image=False,
        )

