"""Page video recording: Playwright capture context + moviepy transcode.

Playwright can only record a context that was created with recording
enabled, so ``start`` moves the session onto a new recording context
(carrying cookies/localStorage over) and reopens the current URL. ``stop``
closes that context, which finalizes the raw .webm, then re-encodes it to
the configured codec/frame/bitrate.
"""
from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path

from moviepy.editor import VideoFileClip

from landing_recorder.config import RecordingConfig
from landing_recorder.errors import RecorderError
from landing_recorder.tools.browser_tools import BrowserSession

logger = logging.getLogger(__name__)

GIF_FPS = 15
GIF_WIDTH = 1280


class VideoRecorder:
    def __init__(self, session: BrowserSession, config: RecordingConfig):
        self._session = session
        self._config = config
        self._output_file: str | None = None
        self._raw_dir: str | None = None
        self._started = False
        self._stopped = False
        self._output_path: str | None = None

    @property
    def recording(self) -> bool:
        return self._started and not self._stopped

    async def start(self, output_file: str) -> None:
        if self._started:
            raise RecorderError("Recording already started")

        self._output_file = output_file
        self._raw_dir = tempfile.mkdtemp(prefix="landing_recorder_")

        # Carry the session over so the video starts on the same page state
        try:
            storage_state = await self._session.storage_state()
            current_url = self._session.page.url

            await self._session.replace_context(
                record_video_dir=self._raw_dir,
                record_video_size=self._config.viewport,
                viewport=self._config.viewport,
                storage_state=storage_state,
            )
        except Exception:
            shutil.rmtree(self._raw_dir, ignore_errors=True)
            self._raw_dir = None
            raise
        self._started = True
        await self._session.goto(current_url)
        logger.info("Video recording started on %s", current_url)

    async def stop(self) -> str | None:
        """Finish the capture and write the output video. Safe to call more than once."""
        if not self._started:
            logger.debug("stop() called before start(), nothing to do")
            return None
        if self._stopped:
            return self._output_path
        self._stopped = True

        try:
            video = self._session.page.video
            await self._session.close_context()

            raw_path = str(await video.path()) if video else None
            if not raw_path or not os.path.exists(raw_path):
                raw_path = _find_capture(self._raw_dir)
            if not raw_path:
                raise RecorderError(f"No video captured in {self._raw_dir}")

            await asyncio.to_thread(transcode_video, raw_path, self._output_file, self._config)
        finally:
            shutil.rmtree(self._raw_dir, ignore_errors=True)

        self._output_path = self._output_file
        logger.info("Video saved to %s", self._output_path)
        return self._output_path


def _find_capture(raw_dir: str | None) -> str | None:
    if not raw_dir or not os.path.isdir(raw_dir):
        return None
    captures = sorted(Path(raw_dir).glob("*.webm"))
    return str(captures[0]) if captures else None


def transcode_video(raw_path: str, output_path: str, config: RecordingConfig) -> str:
    """Re-encode a raw capture to the configured codec, frame size, fps and quality."""
    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    frame = config.video_frame
    video = VideoFileClip(raw_path, audio=False)
    clip = video
    try:
        if tuple(clip.size) != (frame.width, frame.height):
            clip = clip.resize(newsize=(frame.width, frame.height))
        clip.write_videofile(
            output_path,
            codec=config.video_codec,
            fps=config.fps,
            preset=config.video_preset,
            bitrate=config.bitrate,
            audio=False,
            ffmpeg_params=[
                "-crf", str(config.video_crf),
                "-aspect", config.aspect_ratio,
                "-pix_fmt", "yuv420p",
            ],
            logger=None,  # suppress moviepy progress bar
        )
    finally:
        video.close()
    return output_path


def convert_to_gif(video_path: str, gif_path: str, fps: int = GIF_FPS, width: int = GIF_WIDTH) -> str:
    """Render a looping GIF of the recorded video."""
    if not os.path.exists(video_path):
        raise FileNotFoundError(f"Video not found: {video_path}")

    video = VideoFileClip(video_path, audio=False)
    try:
        clip = video.resize(width=width) if video.w != width else video
        clip.write_gif(gif_path, fps=fps, logger=None)
    finally:
        video.close()
    logger.info("GIF saved to %s", gif_path)
    return gif_path
