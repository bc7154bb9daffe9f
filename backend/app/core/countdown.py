"""
Countdown projector.

Turns an estimate's ``days_remaining`` into display units and smooths the
displayed numbers when a new estimate arrives. The smoothing never invents
data: each transition starts at the value currently on screen and ends
exactly on a value produced by the estimator.

Display conversions use average Gregorian lengths (30.44-day month,
365.25-day year). The estimator keeps its fixed 365-day year; the two sets
of constants are separate on purpose.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from ..models import CountdownUnits
from .exceptions import CountdownStateError, ProfileIncomplete

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30.44
DAYS_PER_YEAR = 365.25

UNITS = ("days", "weeks", "months", "years")


def convert_units(days_remaining: float) -> CountdownUnits:
    """Express a remaining day count in days, weeks, months and years."""
    return CountdownUnits(
        days=days_remaining,
        weeks=days_remaining / DAYS_PER_WEEK,
        months=days_remaining / DAYS_PER_MONTH,
        years=days_remaining / DAYS_PER_YEAR,
    )


class AnimatedValue:
    """
    Linear transition between the value on screen and a new target.

    Time is passed in explicitly (any monotonic clock in seconds), so the
    interpolation itself is a pure function of the clock reading.
    """

    def __init__(self, window: float, initial: float = 0.0):
        self.window = window
        self.start_value = initial
        self.target = initial
        self.started_at: Optional[float] = None

    def retarget(self, target: float, now: float) -> None:
        """Start a new transition from the current interpolated value."""
        self.start_value = self.value_at(now)
        self.target = target
        self.started_at = now

    def value_at(self, now: float) -> float:
        if self.started_at is None or self.settled(now):
            return self.target
        elapsed = now - self.started_at
        if elapsed <= 0:
            return self.start_value
        progress = elapsed / self.window
        return self.start_value + (self.target - self.start_value) * progress

    def settled(self, now: float) -> bool:
        if self.started_at is None:
            return True
        return now - self.started_at >= self.window


TickCallback = Callable[[str, float], Any]


class CountdownTicker:
    """
    Runs one cancellable animation task per displayed quantity.

    A new target for a key cancels that key's running task before the next
    one is scheduled. Both steps happen without yielding to the event loop,
    so two loops never run for the same key.
    """

    def __init__(self, window: float, tick_interval: float):
        self.window = window
        self.tick_interval = tick_interval
        self._values: Dict[str, AnimatedValue] = {}
        self._tasks: Dict[str, asyncio.Task] = {}

    @classmethod
    def from_settings(cls, config: Any) -> "CountdownTicker":
        """Build a ticker from the ``countdown_*`` application settings."""
        return cls(
            window=config.countdown_transition_seconds,
            tick_interval=config.countdown_tick_seconds,
        )

    def set_target(self, key: str, target: float, on_tick: TickCallback) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        animated = self._values.setdefault(key, AnimatedValue(self.window))

        self.cancel(key)
        animated.retarget(target, loop.time())

        task = loop.create_task(self._run(key, animated, on_tick))
        self._tasks[key] = task
        return task

    def current(self, key: str) -> Optional[float]:
        animated = self._values.get(key)
        if animated is None:
            return None
        return animated.value_at(asyncio.get_running_loop().time())

    def active(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    def cancel(self, key: str) -> None:
        task = self._tasks.pop(key, None)
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Cancel every running animation and wait for them to stop."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, key: str, animated: AnimatedValue, on_tick: TickCallback) -> float:
        loop = asyncio.get_running_loop()
        while True:
            now = loop.time()
            value = animated.value_at(now)
            on_tick(key, value)
            if animated.settled(now):
                return value
            await asyncio.sleep(self.tick_interval)


class CountdownState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    INCOMPLETE = "incomplete"
    ERROR = "error"


class CountdownRun:
    """
    Fetch/display lifecycle of one countdown.

    ``fetch_estimate`` is any coroutine returning an object with a
    ``days_remaining`` attribute (an Estimate or a LifeExpectancyResponse).
    """

    def __init__(
        self,
        fetch_estimate: Callable[[], Awaitable[Any]],
        ticker: Optional[CountdownTicker] = None,
        on_tick: Optional[TickCallback] = None,
    ):
        self._fetch_estimate = fetch_estimate
        self.ticker = ticker
        self.on_tick = on_tick or (lambda key, value: None)
        self.state = CountdownState.IDLE
        self.estimate: Optional[Any] = None
        self.error: Optional[BaseException] = None

    async def refresh(self) -> CountdownState:
        """Fetch a new estimate and retarget the displayed units."""
        if self.state is CountdownState.FETCHING:
            raise CountdownStateError()

        previous_state = self.state
        self.state = CountdownState.FETCHING
        try:
            estimate = await self._fetch_estimate()
        except asyncio.CancelledError:
            # Torn down mid-fetch: leave the run usable for the next refresh
            self.state = previous_state
            raise
        except ProfileIncomplete as e:
            self.estimate = None
            self._fail(CountdownState.INCOMPLETE, e)
            return self.state
        except Exception as e:
            logger.warning(f"Countdown refresh failed: {e}", exc_info=True)
            self._fail(CountdownState.ERROR, e)
            return self.state

        self.estimate = estimate
        self.error = None
        self.state = CountdownState.READY

        if self.ticker is not None:
            units = convert_units(estimate.days_remaining)
            for unit in UNITS:
                self.ticker.set_target(unit, getattr(units, unit), self.on_tick)

        return self.state

    async def reset(self) -> None:
        """Drop back to idle and stop any running animation."""
        if self.state is CountdownState.FETCHING:
            raise CountdownStateError("Cannot reset while fetching")
        if self.ticker is not None:
            await self.ticker.aclose()
        self.state = CountdownState.IDLE
        self.estimate = None
        self.error = None

    def snapshot(self) -> Dict[str, Any]:
        """Current state for the presentation layer."""
        data: Dict[str, Any] = {"state": self.state.value}

        if self.state is CountdownState.INCOMPLETE:
            data["message"] = "Please complete your profile to see your countdown."
        elif self.state is CountdownState.ERROR:
            data["message"] = "Failed to fetch life expectancy data"

        # Only a usable estimate is shown; a refresh in flight keeps the last one
        showing = self.state in (CountdownState.READY, CountdownState.FETCHING)
        if showing and self.estimate is not None:
            data["days_remaining"] = self.estimate.days_remaining
            if self.ticker is not None:
                data["display"] = {unit: self.ticker.current(unit) for unit in UNITS}
            else:
                data["display"] = convert_units(self.estimate.days_remaining).model_dump()

        return data

    def _fail(self, state: CountdownState, error: BaseException) -> None:
        self.state = state
        self.error = error
