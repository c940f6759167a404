"""Demo director: the fixed landing page tour.

Sequence: navigate → start recording → settle → [scroll to section → pause]
for each configured section → back to top → stop recording → close.

A missing section is a warning and the tour moves on. Anything else aborts
the run: the recorder is stopped best-effort and the browser is still closed.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Callable

from landing_recorder.animator import smooth_scroll
from landing_recorder.config import (
    RETURN_HOLD_MS,
    RETURN_SCROLL_MS,
    SECTION_SCROLL_MS,
    SETTLE_DELAY_MS,
    RecordingConfig,
    RunSettings,
)
from landing_recorder.tools.browser_tools import BrowserSession, open_browser, scroll_to_section
from landing_recorder.tools.recorder_tools import VideoRecorder, convert_to_gif

logger = logging.getLogger(__name__)

SessionFactory = Callable[..., AsyncContextManager[BrowserSession]]
RecorderFactory = Callable[[BrowserSession, RecordingConfig], Any]


@dataclass
class RunResult:
    url: str
    output_file: str
    status: str = "pending"  # pending, success, failed
    video_path: str | None = None
    gif_path: str | None = None
    skipped_sections: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


async def _tour(session: BrowserSession, recorder: Any, settings: RunSettings, result: RunResult) -> None:
    logger.info("Navigating to %s", settings.url)
    await session.goto(settings.url)

    logger.info("Starting recording to %s", settings.output_file)
    await recorder.start(settings.output_file)

    logger.info("Waiting for hero animations...")
    await session.wait(SETTLE_DELAY_MS)

    for section in settings.sections:
        if not await scroll_to_section(session, section.selector, SECTION_SCROLL_MS):
            result.skipped_sections.append(section.name)
            continue
        logger.info("Viewing %s section...", section.name)
        await session.wait(section.pause_ms)

    logger.info("Scrolling back to top...")
    await smooth_scroll(session, 0, RETURN_SCROLL_MS)
    await session.wait(RETURN_HOLD_MS)

    logger.info("Stopping recording...")
    result.video_path = await recorder.stop()

    if settings.gif_file and result.video_path:
        logger.info("Rendering GIF to %s", settings.gif_file)
        result.gif_path = await asyncio.to_thread(convert_to_gif, result.video_path, settings.gif_file)


async def record_landing(
    settings: RunSettings,
    session_factory: SessionFactory = open_browser,
    recorder_factory: RecorderFactory = VideoRecorder,
) -> RunResult:
    """Record one landing page tour.

    Errors after the browser is up are reported through ``RunResult.status``
    rather than raised. A failure to launch the browser propagates.
    """
    result = RunResult(url=settings.url, output_file=settings.output_file)

    logger.info("Starting browser...")
    async with session_factory(settings.recording, headless=settings.headless) as session:
        recorder = recorder_factory(session, settings.recording)
        try:
            await _tour(session, recorder, settings, result)
            result.status = "success"
        except Exception as e:
            logger.exception("Recording failed for %s", settings.url)
            result.status = "failed"
            result.error = str(e)
            try:
                await recorder.stop()
            except Exception as stop_error:
                logger.warning("Recorder stop after failure also failed: %s", stop_error)

    logger.info("Done!")
    return result
