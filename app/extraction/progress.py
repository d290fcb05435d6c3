from collections.abc import Callable

ProgressCallback = Callable[[float], None]


class ProgressTracker:
    """Forwards progress to a callback, clamped to [0, 1] and never decreasing."""

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def report(self, value: float) -> None:
        clamped = max(0.0, min(1.0, value))
        if clamped < self._value:
            return
        self._value = clamped
        if self._callback is not None:
            self._callback(clamped)

    def complete(self) -> None:
        self.report(1.0)


def scaled_progress(callback: ProgressCallback, start: float, end: float) -> ProgressCallback:
    """Map a sub-task's own [0, 1] progress into [start, end] of *callback*."""

    def _report(value: float) -> None:
        callback(start + (end - start) * max(0.0, min(1.0, value)))

    return _report
