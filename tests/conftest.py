"""Shared pytest fixtures and fakes for the browser and recorder collaborators."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest

from landing_recorder.config import RunSettings

# Absolute top of each section on the fake page
DEFAULT_LAYOUT = {
    "#about": 800.0,
    "#skills": 1600.0,
    "#projects": 2400.0,
    "#contact": 3200.0,
}


class FakeElement:
    def __init__(self, session: FakeSession, top: float, visible: bool = True):
        self.session = session
        self.top = top
        self.visible = visible

    async def bounding_box(self) -> dict[str, float] | None:
        if not self.visible:
            return None
        return {"x": 0.0, "y": self.top - self.session.offset, "width": 1280.0, "height": 400.0}


class FakeSession:
    """Stands in for BrowserSession and journals every call in ``events``."""

    def __init__(
        self,
        layout: dict[str, float] | None = None,
        page_height: float = 4000.0,
        viewport_height: float = 720.0,
        goto_error: Exception | None = None,
        hidden: tuple[str, ...] = (),
    ):
        self.layout = dict(DEFAULT_LAYOUT if layout is None else layout)
        self.page_height = page_height
        self._viewport_height = viewport_height
        self.goto_error = goto_error
        self.hidden = hidden
        self.offset = 0.0
        self.events: list[tuple[Any, ...]] = []

    async def goto(self, url: str) -> None:
        self.events.append(("goto", url))
        if self.goto_error is not None:
            raise self.goto_error

    async def scroll_offset(self) -> float:
        return self.offset

    async def viewport_height(self) -> float:
        return self._viewport_height

    async def max_scroll_offset(self) -> float:
        return max(0.0, self.page_height - self._viewport_height)

    async def scroll_to(self, y: float) -> None:
        self.offset = y
        self.events.append(("scroll_to", y))

    async def query(self, selector: str) -> FakeElement | None:
        self.events.append(("query", selector))
        top = self.layout.get(selector)
        if top is None:
            return None
        return FakeElement(self, top, visible=selector not in self.hidden)

    async def wait(self, ms: float) -> None:
        self.events.append(("wait", ms))


class FakeRecorder:
    def __init__(self, session: FakeSession, stop_error: Exception | None = None):
        self.session = session
        self.stop_error = stop_error
        self.stop_calls = 0

    async def start(self, output_file: str) -> None:
        self.session.events.append(("start_recording", output_file))

    async def stop(self) -> str:
        self.stop_calls += 1
        self.session.events.append(("stop_recording",))
        if self.stop_error is not None:
            raise self.stop_error
        return "landing-demo.mp4"


def make_session_factory(session: FakeSession):
    @asynccontextmanager
    async def factory(config, headless=False):
        session.events.append(("launch", config.viewport["width"], config.viewport["height"]))
        try:
            yield session
        finally:
            session.events.append(("close",))

    return factory


def milestones(events: list[tuple[Any, ...]]) -> list[tuple[Any, ...]]:
    """Collapse each scroll animation to ("scroll", final_y) and drop queries."""
    out: list[tuple[Any, ...]] = []
    in_scroll = False
    for ev in events:
        kind = ev[0]
        if kind == "scroll_to":
            if in_scroll:
                out[-1] = ("scroll", ev[1])
            else:
                out.append(("scroll", ev[1]))
                in_scroll = True
            continue
        if kind == "wait" and in_scroll and ev[1] < 100:
            continue  # per-frame delay
        if kind == "query":
            continue
        in_scroll = False
        out.append(ev)
    return out


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def settings() -> RunSettings:
    return RunSettings(url="http://landing.test")
