"""
Cooperative timer queue driven by the frame loop.

Nothing here sleeps. The session controller calls tick(dt) once per frame;
every timer whose due time has been reached fires, earliest first, and
timers due at the same instant fire in the order they were scheduled.
Scheduling a timer under a name that is already pending replaces it (so a
second stutter restarts the 2 s warning instead of stacking two).

Used for presentation-only delays: warning banners, the 5 s relaxation
period, the "generating report" banner. Timers never feed the scoring path.
"""

from dataclasses import dataclass, field
from typing import Callable


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    name: str | None = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class TimerQueue:
    def __init__(self) -> None:
        self._now = 0.0
        self._seq = 0
        self._timers: list[_Timer] = []

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, delay: float, callback: Callable[[], None], name: str | None = None) -> None:
        if name is not None:
            self.cancel(name)
        self._seq += 1
        self._timers.append(_Timer(self._now + max(0.0, delay), self._seq, name, callback))

    def cancel(self, name: str) -> bool:
        before = len(self._timers)
        self._timers = [t for t in self._timers if t.name != name]
        return len(self._timers) != before

    def pending(self) -> list[str]:
        """Names of pending timers in firing order (unnamed timers omitted)."""
        return [t.name for t in sorted(self._timers) if t.name is not None]

    def clear(self) -> None:
        self._timers = []

    def tick(self, dt: float) -> list[str | None]:
        """Advance the clock by dt and fire everything now due. Returns fired names."""
        self._now += max(0.0, dt)
        fired: list[str | None] = []
        while True:
            due = [t for t in self._timers if t.due <= self._now]
            if not due:
                break
            timer = min(due)
            self._timers.remove(timer)
            timer.callback()
            fired.append(timer.name)
        return fired
