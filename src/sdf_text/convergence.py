"""Damped scalar values for smooth animation.

Keep calling ``update`` and ``start`` gets closer and closer to ``end``. The
higher the damping factor, the faster the motion; it should lie in (0, 1].
"""

from __future__ import annotations


def clamp(value: float, lower: float | None, upper: float | None) -> float:
    if lower is not None and value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value


class DampedValue:
    """A value that exponentially approaches a target.

    ``min``/``max`` are optional; when either is set every change of the
    target is clamped into the range. ``None`` leaves that side open.
    """

    def __init__(
        self,
        start: float,
        end: float,
        damping_factor: float = 0.1,
        min: float | None = None,
        max: float | None = None,
    ):
        self._original_start = start
        self._original_end = end
        self._min = min
        self._max = max
        self._damping_factor = damping_factor
        self._start = start
        self._end = clamp(end, min, max)

    def __repr__(self) -> str:
        return (
            f"DampedValue(start={self._start!r}, end={self._end!r}, "
            f"damping_factor={self._damping_factor!r}, min={self._min!r}, max={self._max!r})"
        )

    @property
    def start(self) -> float:
        return self._start

    @property
    def end(self) -> float:
        return self._end

    @property
    def min(self) -> float | None:
        return self._min

    @property
    def max(self) -> float | None:
        return self._max

    @property
    def damping_factor(self) -> float:
        return self._damping_factor

    @property
    def is_bounded(self) -> bool:
        return self._min is not None or self._max is not None

    def set_end(self, value: float) -> None:
        self._end = clamp(value, self._min, self._max)

    def increase_end_by(self, value: float) -> None:
        self.set_end(self._end + value)

    def decrease_end_by(self, value: float) -> None:
        self.set_end(self._end - value)

    def reset(
        self,
        start: float | None = None,
        end: float | None = None,
        min: float | None = None,
        max: float | None = None,
        damping_factor: float | None = None,
    ) -> None:
        """Restore the value.

        Omitted ``start``/``end`` fall back to the values given at
        construction; omitted ``min``/``max``/``damping_factor`` keep their
        current values. The restored ``end`` is taken as is, not clamped.
        """
        self._start = start if start is not None else self._original_start
        self._min = min if min is not None else self._min
        self._max = max if max is not None else self._max
        self._damping_factor = damping_factor if damping_factor is not None else self._damping_factor
        self._end = end if end is not None else self._original_end

    def update(self) -> float:
        self._start += (self._end - self._start) * self._damping_factor
        return self._start
