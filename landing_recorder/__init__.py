"""
Landing page demo recorder

Opens a landing page in Chromium, tours its sections with eased scrolling
and records the result to a video file.

Usage:
    from landing_recorder import load_settings, record_landing
    asyncio.run(record_landing(load_settings("http://localhost:3000")))
"""

from landing_recorder.config import load_settings
from landing_recorder.director import record_landing

__version__ = "1.0.0"

__all__ = ["load_settings", "record_landing"]
