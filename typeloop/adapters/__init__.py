"""Host surfaces that materialize synthesized frames and reaction graphs."""

from typeloop.adapters.base import FrameRealizationAdapter
from typeloop.adapters.memory import RecordingAdapter
from typeloop.adapters.raster import RasterAdapter, RasterConfig, RasterFormat
from typeloop.adapters.storyboard import StoryboardAdapter

__all__ = [
    "FrameRealizationAdapter",
    "RasterAdapter",
    "RasterConfig",
    "RasterFormat",
    "RecordingAdapter",
    "StoryboardAdapter",
]
