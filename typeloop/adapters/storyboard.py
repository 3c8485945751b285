"""
Storyboard adapter: a whiteboard-style SVG of the whole animation.

Every frame becomes a rounded card in a left-to-right row; each edge
becomes a labelled connector.  The wrap-around edge of a looping animation
is drawn as a return arc under the row.  The SVG is produced from a Jinja2
template so the markup stays readable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from jinja2 import Environment

from typeloop.adapters.base import FrameRealizationAdapter
from typeloop.exceptions import RealizationError
from typeloop.layout import BoundingBox, enclosing_box, frame_box_size, row_positions
from typeloop.types import FrameDescriptor, ReactionGraph, TimingEdge

logger = logging.getLogger(__name__)

CARD_FONT_SIZE = 16.0
CARD_COLOR = "#0066ff"
CARD_MIN_OPACITY = 0.3
CARD_OPACITY_STEP = 0.1
RETURN_ARC_DROP = 40.0


@dataclass
class StoryCard:
    descriptor: FrameDescriptor
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0

    @property
    def fill_opacity(self) -> float:
        """Cards fade along the row so the reading order is visible."""
        return max(1.0 - self.descriptor.index * CARD_OPACITY_STEP, CARD_MIN_OPACITY)

    @property
    def font_size(self) -> float:
        return CARD_FONT_SIZE * self.descriptor.relative_font_scale


@dataclass(frozen=True)
class Connector:
    start: tuple[float, float]
    end: tuple[float, float]
    label: str
    wraps: bool = False


@dataclass
class Storyboard:
    cards: list[StoryCard]
    bounds: BoundingBox
    connectors: list[Connector] = field(default_factory=list)


_SVG_TEMPLATE = """\
<svg xmlns="http://www.w3.org/2000/svg" width="{{ width }}" height="{{ height }}" viewBox="{{ vb_x }} {{ vb_y }} {{ width }} {{ height }}">
  <defs>
    <marker id="arrow" viewBox="0 0 10 10" refX="9" refY="5" markerWidth="6" markerHeight="6" orient="auto-start-reverse">
      <path d="M 0 0 L 10 5 L 0 10 z" fill="{{ card_color }}"/>
    </marker>
  </defs>
{%- for card in cards %}
  <g class="frame" data-index="{{ card.descriptor.index }}">
    <rect x="{{ card.x }}" y="{{ card.y }}" width="{{ card.width }}" height="{{ card.height }}" rx="8" fill="{{ card_color }}" fill-opacity="{{ '%.2f'|format(card.fill_opacity) }}"/>
    <text x="{{ card.x + card.width / 2 }}" y="{{ card.y + card.height / 2 }}" font-size="{{ '%.1f'|format(card.font_size) }}" text-anchor="middle" dominant-baseline="middle" fill="{{ card.descriptor.color.to_hex() }}" fill-opacity="{{ '%.2f'|format(card.descriptor.opacity) }}" xml:space="preserve">{{ card.descriptor.visible_text }}</text>
  </g>
{%- endfor %}
{%- for c in connectors %}
  {%- if c.wraps %}
  <path class="connector wrap" d="M {{ c.start[0] }} {{ c.start[1] }} C {{ c.start[0] }} {{ c.start[1] + drop }}, {{ c.end[0] }} {{ c.end[1] + drop }}, {{ c.end[0] }} {{ c.end[1] }}" fill="none" stroke="{{ card_color }}" stroke-width="3" marker-end="url(#arrow)"/>
  <text x="{{ (c.start[0] + c.end[0]) / 2 }}" y="{{ c.start[1] + drop }}" font-size="10" text-anchor="middle">{{ c.label }}</text>
  {%- else %}
  <line class="connector" x1="{{ c.start[0] }}" y1="{{ c.start[1] }}" x2="{{ c.end[0] }}" y2="{{ c.end[1] }}" stroke="{{ card_color }}" stroke-width="3" marker-end="url(#arrow)"/>
  <text x="{{ (c.start[0] + c.end[0]) / 2 }}" y="{{ c.start[1] - 6 }}" font-size="10" text-anchor="middle">{{ c.label }}</text>
  {%- endif %}
{%- endfor %}
</svg>
"""

_env = Environment(autoescape=True, keep_trailing_newline=True)
_template = _env.from_string(_SVG_TEMPLATE)


def edge_label(edge: TimingEdge) -> str:
    return f"{edge.wait_ms:.0f} ms + {edge.transition_ms:.0f} ms {edge.kind.value}"


class StoryboardAdapter(FrameRealizationAdapter):
    """Adapter that lays frames out as a storyboard and renders SVG."""

    name = "storyboard"

    def __init__(self) -> None:
        self.board: Storyboard | None = None

    def create_frame_node(self, descriptor: FrameDescriptor) -> StoryCard:
        text_w = len(descriptor.visible_text) * CARD_FONT_SIZE * 0.6
        width, height = frame_box_size(text_w, CARD_FONT_SIZE * 1.2)
        return StoryCard(descriptor=descriptor, width=width, height=height)

    def combine_frames_into_sequence(self, handles: Sequence[StoryCard]) -> Storyboard:
        cards = list(handles)
        boxes = row_positions([(c.width, c.height) for c in cards])
        for card, box in zip(cards, boxes):
            card.x, card.y = box.x_min, box.y_min
        self.board = Storyboard(cards=cards, bounds=enclosing_box(boxes))
        return self.board

    def register_timed_transition(
        self,
        source: StoryCard,
        target: StoryCard,
        edge: TimingEdge,
    ) -> None:
        if self.board is None:
            raise RealizationError(
                "Transitions registered before the storyboard was assembled.",
                stage="transition registration",
            )
        wraps = edge.to_frame <= edge.from_frame
        if wraps:
            start = (source.x + source.width / 2, source.y + source.height)
            end = (target.x + target.width / 2, target.y + target.height)
        else:
            start = (source.x + source.width, source.y + source.height / 2)
            end = (target.x, target.y + target.height / 2)
        self.board.connectors.append(
            Connector(start=start, end=end, label=edge_label(edge), wraps=wraps)
        )

    def finish(self, sequence: Storyboard, graph: ReactionGraph) -> str:
        bounds = sequence.bounds
        if graph.cyclic:
            bounds = bounds.union(BoundingBox(
                bounds.x_min, bounds.y_min, bounds.x_max,
                bounds.y_max + RETURN_ARC_DROP,
            ))
        svg = _template.render(
            cards=sequence.cards,
            connectors=sequence.connectors,
            width=round(bounds.width, 2),
            height=round(bounds.height, 2),
            vb_x=round(bounds.x_min, 2),
            vb_y=round(bounds.y_min, 2),
            card_color=CARD_COLOR,
            drop=RETURN_ARC_DROP,
        )
        logger.debug("Rendered storyboard with %d cards", len(sequence.cards))
        return svg
