"""
Geometry helpers for placing realized frames on a host canvas.

Frames are sized to their text with a margin and a minimum footprint, then
stacked vertically (variant column) or laid out in a row (storyboard).  The
enclosing box adds a uniform padding around everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

FRAME_MARGIN = 20.0
MIN_FRAME_WIDTH = 100.0
MIN_FRAME_HEIGHT = 50.0
STACK_SPACING = 20.0
ROW_GAP = 50.0
SET_PADDING = 10.0


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in canvas units, y growing downwards."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> BoundingBox:
        return cls(x_min=x, y_min=y, x_max=x + width, y_max=y + height)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def union(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box enclosing both boxes."""
        return BoundingBox(
            x_min=min(self.x_min, other.x_min),
            y_min=min(self.y_min, other.y_min),
            x_max=max(self.x_max, other.x_max),
            y_max=max(self.y_max, other.y_max),
        )

    def padded(self, padding: float = SET_PADDING) -> BoundingBox:
        """Return a new box expanded by the given padding on all sides."""
        return BoundingBox(
            x_min=self.x_min - padding,
            y_min=self.y_min - padding,
            x_max=self.x_max + padding,
            y_max=self.y_max + padding,
        )


def frame_box_size(text_width: float, text_height: float) -> tuple[float, float]:
    """Size of the frame that holds a text block of the given size."""
    return (
        max(text_width + FRAME_MARGIN, MIN_FRAME_WIDTH),
        max(text_height + FRAME_MARGIN, MIN_FRAME_HEIGHT),
    )


def centered_origin(
    container: tuple[float, float],
    content: tuple[float, float],
) -> tuple[float, float]:
    """Top-left position that centres *content* inside *container*."""
    return (
        (container[0] - content[0]) / 2,
        (container[1] - content[1]) / 2,
    )


def stack_vertically(
    sizes: Sequence[tuple[float, float]],
    spacing: float = STACK_SPACING,
) -> list[BoundingBox]:
    """Place frames in a column starting at the origin."""
    boxes: list[BoundingBox] = []
    y = 0.0
    for width, height in sizes:
        boxes.append(BoundingBox.from_size(0.0, y, width, height))
        y += height + spacing
    return boxes


def row_positions(
    sizes: Sequence[tuple[float, float]],
    gap: float = ROW_GAP,
) -> list[BoundingBox]:
    """Place frames left to right starting at the origin."""
    boxes: list[BoundingBox] = []
    x = 0.0
    for width, height in sizes:
        boxes.append(BoundingBox.from_size(x, 0.0, width, height))
        x += width + gap
    return boxes


def enclosing_box(
    boxes: Sequence[BoundingBox],
    padding: float = SET_PADDING,
) -> BoundingBox:
    """Padded box around every frame.

    Raises
    ------
    ValueError
        If *boxes* is empty.
    """
    if not boxes:
        raise ValueError("Cannot enclose an empty set of frames.")
    envelope = boxes[0]
    for box in boxes[1:]:
        envelope = envelope.union(box)
    return envelope.padded(padding)
