from __future__ import annotations


class LandingRecorderError(Exception):
    """Base class for recorder errors."""


class SectionNotFoundError(LandingRecorderError):
    """Raised when a section selector has no element or no usable geometry."""

    def __init__(self, selector: str, reason: str = "Section not found"):
        super().__init__(f"{reason}: {selector}")
        self.selector = selector
        self.reason = reason


class RecorderError(LandingRecorderError):
    """Raised when the video recorder is misused or produced no capture."""
