"""Run configuration: recording parameters, the section tour and env overrides."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_URL = "http://localhost:3000"
OUTPUT_FILE = "landing-demo.mp4"

# ─── Timings (ms) ───────────────────────────────────────────────

SETTLE_DELAY_MS = 4000  # hero/entrance animations
SECTION_SCROLL_MS = 1500
RETURN_SCROLL_MS = 2000
RETURN_HOLD_MS = 2000


@dataclass(frozen=True)
class VideoFrame:
    width: int = 1280
    height: int = 720


@dataclass(frozen=True)
class RecordingConfig:
    """Encoder and capture settings handed to the browser and the recorder."""

    follow_new_tab: bool = False
    fps: int = 30
    video_frame: VideoFrame = VideoFrame()
    video_crf: int = 18
    video_codec: str = "libx264"
    video_preset: str = "ultrafast"
    video_bitrate: int = 3000  # kbit/s
    aspect_ratio: str = "16:9"

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.video_frame.width, "height": self.video_frame.height}

    @property
    def bitrate(self) -> str:
        return f"{self.video_bitrate}k"


@dataclass(frozen=True)
class SectionTarget:
    selector: str
    name: str
    pause_ms: int


SECTIONS: tuple[SectionTarget, ...] = (
    SectionTarget("#about", "About", 3000),
    SectionTarget("#skills", "Skills", 3500),
    SectionTarget("#projects", "Projects", 3500),
    SectionTarget("#contact", "Contact", 2500),
)


@dataclass(frozen=True)
class RunSettings:
    url: str
    output_file: str = OUTPUT_FILE
    headless: bool = False
    gif_file: str | None = None
    recording: RecordingConfig = RecordingConfig()
    sections: tuple[SectionTarget, ...] = SECTIONS


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_settings(url: str | None = None) -> RunSettings:
    """Build the settings for one run.

    The URL is taken verbatim from the caller (default: DEFAULT_URL). Output
    path, headless mode and the optional GIF come from the environment, with
    a local .env file loaded first.
    """
    load_dotenv()
    return RunSettings(
        url=url or DEFAULT_URL,
        output_file=os.environ.get("LANDING_RECORDER_OUTPUT") or OUTPUT_FILE,
        headless=_env_flag("LANDING_RECORDER_HEADLESS"),
        gif_file=os.environ.get("LANDING_RECORDER_GIF") or None,
    )
