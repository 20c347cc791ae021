"""Simulation clocks.

Decoy lifetimes and destruction grace periods are measured against
``Clock.elapsed()`` (seconds since the simulation started), so the same
engine runs against wall time or a deterministic stepped clock.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Monotonic elapsed-time source used by the countermeasure core."""

    def now(self) -> float:
        """Current time as epoch seconds."""
        ...

    def elapsed(self) -> float:
        """Seconds since the simulation started."""
        ...


class SystemClock:
    """Wall-clock time, for hosts that drive the engine in real time."""

    def __init__(self):
        self._start_time = time.monotonic()
        self._epoch_offset = time.time() - self._start_time

    def now(self) -> float:
        return time.monotonic() + self._epoch_offset

    def elapsed(self) -> float:
        return time.monotonic() - self._start_time


class SimClock:
    """Stepped clock for reproducible engagements and tests.

    Time only moves when :meth:`step` or :meth:`set_elapsed` is called,
    typically once per simulation tick by the host loop.

    Args:
        start_epoch: What ``now()`` reports at ``elapsed=0``.
    """

    def __init__(self, start_epoch: float = 1_000_000.0):
        self._start_epoch = start_epoch
        self._elapsed = 0.0

    def now(self) -> float:
        return self._start_epoch + self._elapsed

    def elapsed(self) -> float:
        return self._elapsed

    def step(self, dt: float) -> None:
        """Advance simulated time by *dt* seconds.

        Raises:
            ValueError: If *dt* is negative.
        """
        if dt < 0:
            raise ValueError(f"SimClock.step() requires dt >= 0, got {dt}")
        self._elapsed += dt

    def set_elapsed(self, elapsed: float) -> None:
        """Jump to an absolute elapsed time.

        Raises:
            ValueError: If *elapsed* is negative.
        """
        if elapsed < 0:
            raise ValueError(
                f"SimClock.set_elapsed() requires elapsed >= 0, got {elapsed}"
            )
        self._elapsed = elapsed

    @property
    def start_epoch(self) -> float:
        return self._start_epoch


def create_clock(config: dict | None = None) -> SystemClock | SimClock:
    """Create a clock from the ``active_decoy.time`` config section.

    ``mode: simulated`` yields a :class:`SimClock`; anything else (or no
    config) yields a :class:`SystemClock`.
    """
    if config is None:
        return SystemClock()
    if config.get("mode", "realtime") == "simulated":
        return SimClock(start_epoch=config.get("start_epoch", 1_000_000.0))
    return SystemClock()
