"""Eased scroll animation, sampled frame by frame."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

STEPS = 60
DEFAULT_DURATION_MS = 1000


class ScrollSurface(Protocol):
    async def scroll_offset(self) -> float: ...

    async def scroll_to(self, y: float) -> None: ...

    async def wait(self, ms: float) -> None: ...


def ease_in_out_cubic(p: float) -> float:
    if p < 0.5:
        return 4 * p * p * p
    return 1 - (-2 * p + 2) ** 3 / 2


@dataclass(frozen=True)
class ScrollPlan:
    start: float
    target: float
    duration_ms: float
    steps: int = STEPS

    @property
    def step_delay_ms(self) -> float:
        return self.duration_ms / self.steps

    def offsets(self) -> list[float]:
        """All steps + 1 positions; the last one is exactly the target."""
        distance = self.target - self.start
        points = [self.start + distance * ease_in_out_cubic(i / self.steps) for i in range(self.steps)]
        points.append(self.target)
        return points


def plan_scroll(start: float, target: float, duration_ms: float = DEFAULT_DURATION_MS, steps: int = STEPS) -> ScrollPlan:
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    return ScrollPlan(start=max(0.0, start), target=max(0.0, target), duration_ms=duration_ms, steps=steps)


async def smooth_scroll(
    surface: ScrollSurface,
    target: float,
    duration_ms: float = DEFAULT_DURATION_MS,
    steps: int = STEPS,
) -> ScrollPlan:
    """Scroll ``surface`` from its current offset to ``target`` with ease-in-out cubic timing."""
    start = await surface.scroll_offset()
    plan = plan_scroll(start, target, duration_ms, steps)
    logger.debug("Scrolling %.0f -> %.0f over %sms", plan.start, plan.target, duration_ms)

    for y in plan.offsets():
        await surface.scroll_to(y)
        await surface.wait(plan.step_delay_ms)

    return plan
