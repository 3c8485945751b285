"""
Custom exception hierarchy for typeloop.

All typeloop exceptions inherit from TypeLoopError so callers can catch
the entire family with a single except clause.  Timing budget overruns are
advisory and surface as a warning category, not an exception.
"""

from __future__ import annotations


class TypeLoopError(Exception):
    """Base exception for all typeloop errors."""


class InvalidConfigError(TypeLoopError, ValueError):
    """Raised when an animation configuration is rejected before synthesis."""


class InsufficientFramesError(TypeLoopError):
    """Raised when a reaction graph would have fewer than two frames."""


class RealizationError(TypeLoopError):
    """Raised when a host adapter fails to materialize frames or edges."""

    def __init__(self, message: str, stage: str = "") -> None:
        super().__init__(message)
        self.stage = stage


class PresetError(TypeLoopError):
    """Raised when a preset file is missing or malformed."""


class TimingBudgetWarning(UserWarning):
    """Realized animation duration exceeds the requested duration.

    Emitted when the per-transition floors kick in at very short durations.
    """
