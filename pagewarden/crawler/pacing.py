"""
Request pacing for pagewarden.

Two concerns live here:
- Randomized delays between page loads so traffic looks less mechanical
  and stays under site throttling thresholds.
- A daily break window during which no page loads should be started.

Everything except delay() is a pure computation. Nothing here sleeps on
its own; callers decide when to wait and for how long.

Break window bounds are "HH:MM" in 24-hour local time. A window that wraps
past midnight (e.g. 22:00-02:00) is never active, because both bounds are
anchored to the same calendar day.
"""

from __future__ import annotations

import asyncio
import random
import re
from collections.abc import Callable
from datetime import datetime, timedelta

from pagewarden.errors import ConfigurationError
from pagewarden.utils.config import BreakWindow, PacingConfig, Settings, get_settings
from pagewarden.utils.logging import get_logger

logger = get_logger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_sleep_time(
    config: PacingConfig,
    rng: Callable[[], float] = random.random,
) -> float:
    """Draw a delay uniformly from [min_delay_ms, max_delay_ms].

    Args:
        config: Delay bounds in milliseconds.
        rng: Source of uniform values in [0, 1).

    Returns:
        Delay in milliseconds.

    Raises:
        ConfigurationError: If a bound is negative or min exceeds max.
    """
    min_sleep = config.min_delay_ms
    max_sleep = config.max_delay_ms

    if min_sleep < 0 or max_sleep < min_sleep:
        raise ConfigurationError(
            f"Invalid pacing bounds: min={min_sleep}, max={max_sleep}",
            details={"min_delay_ms": min_sleep, "max_delay_ms": max_sleep},
        )

    return min_sleep + rng() * (max_sleep - min_sleep)


async def delay(ms: float) -> None:
    """Suspend the calling coroutine for ms milliseconds."""
    await asyncio.sleep(ms / 1000)


def _parse_time_token(token: str | None) -> int:
    # Leading digits only ("9am" -> 9); anything else counts as 0.
    if token is None:
        return 0
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def _time_on_day(value: str, now: datetime) -> datetime:
    parts = value.split(":")
    hours = _parse_time_token(parts[0])
    minutes = _parse_time_token(parts[1] if len(parts) > 1 else None)

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(hours=hours, minutes=minutes)


def is_break_time(window: BreakWindow, now: datetime | None = None) -> bool:
    """Check whether now falls inside today's break window (bounds inclusive).

    Args:
        window: Configured break window. Disabled if either bound is empty.
        now: Current local time. Defaults to datetime.now().

    Returns:
        True if inside the window.
    """
    if not window.enabled:
        return False

    now = now or datetime.now()
    begin = _time_on_day(window.begin_time, now)
    end = _time_on_day(window.end_time, now)

    return begin <= now <= end


def get_break_time_remaining(window: BreakWindow, now: datetime | None = None) -> float:
    """Milliseconds from now until today's break window end.

    Negative when the end has already passed. Callers should check
    is_break_time() first.
    """
    now = now or datetime.now()
    end = _time_on_day(window.end_time, now)
    return (end - now).total_seconds() * 1000


class PacingPolicy:
    """Pacing decisions backed by live settings.

    Settings are re-read on every call, so runtime edits to the browser
    section take effect on the next decision.

    Example:
        policy = PacingPolicy()
        while True:
            if policy.is_break_time():
                await delay(policy.break_time_remaining())
                continue
            await using_response(browser, url, handle)
            await delay(policy.sleep_time())
    """

    def __init__(
        self,
        settings: Settings | None = None,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._settings = settings or get_settings()
        self._rng = rng

    def sleep_time(self) -> float:
        """Randomized delay before the next page load (ms)."""
        return get_sleep_time(self._settings.browser.pacing(), self._rng)

    def is_break_time(self, now: datetime | None = None) -> bool:
        """Whether page loads are currently suspended."""
        active = is_break_time(self._settings.browser.break_window(), now)
        if active:
            logger.debug(
                "Inside break time",
                begin=self._settings.browser.break_time_begin,
                end=self._settings.browser.break_time_stop,
            )
        return active

    def break_time_remaining(self, now: datetime | None = None) -> float:
        """Milliseconds until the break window ends (may be negative)."""
        return get_break_time_remaining(self._settings.browser.break_window(), now)
